"""
Configuration management for the Assignment Checker backend.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).parent.parent


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _split_origins(value):
    """Parse a comma-separated origin list. '*' means any origin."""
    origins = [o.strip() for o in (value or '').split(',') if o.strip()]
    if not origins or '*' in origins:
        return '*'
    return origins


# API Configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-lite")

# Auth configuration
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_EXPIRES_HOURS = _env_int("JWT_EXPIRES_HOURS", 24)
REQUIRE_AUTH_FOR_ANALYZE = _env_bool("REQUIRE_AUTH_FOR_ANALYZE", False)
DATABASE_PATH = os.getenv("DATABASE_PATH", str(BASE_DIR / "users.db"))

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 8080)
DEBUG = _env_bool("DEBUG", False)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "*"))
MAX_UPLOAD_MB = _env_int("MAX_UPLOAD_MB", 16)


class Config:
    """Application configuration class."""

    def __init__(self):
        self.gemini_api_key = GEMINI_API_KEY
        self.gemini_model = GEMINI_MODEL
        self.jwt_secret = JWT_SECRET
        self.jwt_expires_hours = JWT_EXPIRES_HOURS
        self.require_auth_for_analyze = REQUIRE_AUTH_FOR_ANALYZE
        self.database_path = DATABASE_PATH
        self.host = HOST
        self.port = PORT
        self.debug = DEBUG
        self.log_level = LOG_LEVEL
        self.cors_origins = CORS_ORIGINS
        self.max_upload_mb = MAX_UPLOAD_MB

    @property
    def max_content_length(self):
        return self.max_upload_mb * 1024 * 1024

    def to_dict(self):
        # Secrets are reported as configured/not configured only
        return {
            "gemini_api_key": "configured" if self.gemini_api_key else "",
            "gemini_model": self.gemini_model,
            "jwt_secret": "configured" if self.jwt_secret else "",
            "jwt_expires_hours": self.jwt_expires_hours,
            "require_auth_for_analyze": self.require_auth_for_analyze,
            "database_path": self.database_path,
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "cors_origins": self.cors_origins,
            "max_upload_mb": self.max_upload_mb,
        }

    def update(self, data: dict):
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)


# Global config instance
config = Config()
