"""
User storage for the Assignment Checker.

A single sqlite table of users. Every call opens its own short-lived
connection, so the store is safe to share between request threads.
"""
import logging
import sqlite3
from contextlib import closing

from werkzeug.security import generate_password_hash, check_password_hash

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT UNIQUE NOT NULL,
    password TEXT NOT NULL,
    name TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

PUBLIC_FIELDS = "id, email, name, created_at, updated_at"


class DuplicateEmailError(Exception):
    """Raised when an email is already registered."""


def normalize_email(email):
    return (email or '').strip().lower()


class UserStore:
    """Persistence for the users table."""

    def __init__(self, db_path):
        self.db_path = str(db_path)

    def _connect(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        """Create the users table if it doesn't exist."""
        with closing(self._connect()) as conn, conn:
            conn.executescript(SCHEMA)
        logger.info("User database ready at %s", self.db_path)

    def create_user(self, email, password, name=None):
        """
        Insert a user with a salted password hash.

        Returns:
            The public user dict.

        Raises:
            DuplicateEmailError: if the email is already registered.
        """
        email = normalize_email(email)
        password_hash = generate_password_hash(password)
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute(
                    "INSERT INTO users (email, password, name) VALUES (?, ?, ?)",
                    (email, password_hash, name),
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError:
            raise DuplicateEmailError("Email already exists")
        return self.get_user_by_id(user_id)

    def get_user_by_email(self, email):
        """Full row including the password hash, or None."""
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?", (normalize_email(email),)
            ).fetchone()
        return dict(row) if row else None

    def get_user_by_id(self, user_id):
        """Public fields only, or None."""
        with closing(self._connect()) as conn:
            row = conn.execute(
                f"SELECT {PUBLIC_FIELDS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        return dict(row) if row else None

    def verify_credentials(self, email, password):
        """Return the public user dict when the password matches, else None."""
        user = self.get_user_by_email(email)
        if not user or not check_password_hash(user['password'], password or ''):
            return None
        return self.get_user_by_id(user['id'])

    def update_user(self, user_id, name=None, email=None):
        """
        Update name and/or email. Fields passed as None are left unchanged.

        Returns:
            The updated public user dict, or None if the user doesn't exist.

        Raises:
            DuplicateEmailError: if the new email belongs to another user.
        """
        current = self.get_user_by_id(user_id)
        if current is None:
            return None

        new_name = current['name'] if name is None else name
        new_email = current['email'] if email is None else normalize_email(email)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "UPDATE users SET name = ?, email = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (new_name, new_email, user_id),
                )
        except sqlite3.IntegrityError:
            raise DuplicateEmailError("Email already exists")
        return self.get_user_by_id(user_id)
