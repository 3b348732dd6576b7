"""
Test: Configuration parsing and defaults.
"""

from assignment_checker.config import GEMINI_MODEL, Config, _env_bool, _env_int, _split_origins


class TestHelpers:
    def test_env_bool(self, monkeypatch):
        monkeypatch.setenv("FLAG", "True")
        assert _env_bool("FLAG") is True
        monkeypatch.setenv("FLAG", "0")
        assert _env_bool("FLAG") is False
        monkeypatch.delenv("FLAG")
        assert _env_bool("FLAG", default=True) is True

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("NUM", "12")
        assert _env_int("NUM", 5) == 12
        monkeypatch.setenv("NUM", "twelve")
        assert _env_int("NUM", 5) == 5

    def test_split_origins(self):
        assert _split_origins("*") == "*"
        assert _split_origins("") == "*"
        assert _split_origins("http://a.test, http://b.test") == ["http://a.test", "http://b.test"]
        assert _split_origins("http://a.test,*") == "*"


class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.gemini_model == GEMINI_MODEL
        assert cfg.max_content_length == cfg.max_upload_mb * 1024 * 1024

    def test_update_ignores_unknown_keys(self):
        cfg = Config()
        cfg.update({"port": 9000, "not_a_setting": True})
        assert cfg.port == 9000
        assert not hasattr(cfg, "not_a_setting")

    def test_to_dict_hides_secrets(self):
        cfg = Config()
        cfg.update({"gemini_api_key": "AIza-secret", "jwt_secret": "jwt-secret"})
        data = cfg.to_dict()
        assert data["gemini_api_key"] == "configured"
        assert data["jwt_secret"] == "configured"
        assert "AIza-secret" not in str(data)
