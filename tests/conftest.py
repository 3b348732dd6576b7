"""
Shared test fixtures for the Assignment Checker.
Builds the app against a temporary user database and a stub model client.
Zero network calls — the model client never leaves the process.
"""
import io
import threading

import fitz
import pytest
from docx import Document

from assignment_checker.app import create_app
from assignment_checker.config import Config
from assignment_checker.database import UserStore

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class StubModelClient:
    """Records prompts and returns a canned response."""

    model_name = "stub-model"

    def __init__(self, response="## Overall AI Vulnerability\nHigh"):
        self.response = response
        self.prompts = []
        self._lock = threading.Lock()

    def generate(self, prompt):
        with self._lock:
            self.prompts.append(prompt)
        return self.response

    @property
    def calls(self):
        return len(self.prompts)


class FailingModelClient:
    """Raises the given exception on every call."""

    model_name = "failing-model"

    def __init__(self, error):
        self.error = error

    def generate(self, prompt):
        raise self.error


@pytest.fixture
def test_config(tmp_path):
    cfg = Config()
    cfg.update({
        "jwt_secret": TEST_SECRET,
        "jwt_expires_hours": 1,
        "database_path": str(tmp_path / "users.db"),
        "require_auth_for_analyze": False,
        "cors_origins": "*",
        "gemini_api_key": "",
    })
    return cfg


@pytest.fixture
def stub_client():
    return StubModelClient()


@pytest.fixture
def user_store(tmp_path):
    store = UserStore(tmp_path / "users.db")
    store.init_db()
    return store


@pytest.fixture
def app(test_config, stub_client, user_store):
    app = create_app(test_config, model_client=stub_client, user_store=user_store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(client):
    """Register a user and return the register response JSON."""
    resp = client.post("/api/auth/register", json={
        "email": "teacher@example.com",
        "password": "secret123",
        "name": "Ms. Rivera",
    })
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": "Bearer " + registered_user["token"]}


@pytest.fixture
def make_pdf():
    """Build a PDF with one page per text argument."""
    def _make(*pages):
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            page.insert_text((72, 72), text)
        data = doc.tobytes()
        doc.close()
        return data
    return _make


@pytest.fixture
def make_docx():
    """Build a .docx with one paragraph per argument."""
    def _make(*paragraphs):
        doc = Document()
        for text in paragraphs:
            doc.add_paragraph(text)
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()
    return _make
