import os


def _flag(name, default="false"):
    return (os.environ.get(name) or default).lower() in ("1", "true", "yes")


class Config:
    # SECURITY: set a secure random key in production via env var
    SECRET_KEY = os.environ.get("BOOKCATALOG_SECRET") or "change-this-secret-in-production"
    # Falls back to a SQLite file in the instance folder (see create_app)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    FORCE_HTTPS = _flag("BOOKCATALOG_FORCE_HTTPS")
    LOG_LEVEL = os.environ.get("BOOKCATALOG_LOG_LEVEL") or "INFO"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    FORCE_HTTPS = False
    LOG_LEVEL = "DEBUG"
