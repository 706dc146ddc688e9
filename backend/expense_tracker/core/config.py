# expense_tracker/core/config.py
# Simple config loader: reads .env (if present) then the process environment.
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    # PG_* variables describe a postgres server without a full URL
    host = os.getenv("PG_HOST")
    if host:
        user = os.getenv("PG_USER", "postgres")
        password = os.getenv("PG_PASSWORD", "")
        port = os.getenv("PG_PORT", "5432")
        database = os.getenv("PG_DATABASE", "expense_tracker")
        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}"
    return "sqlite:///./expense_tracker.db"


class SimpleSettings:
    DATABASE_URL = _database_url()
    SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
    SESSION_MAX_AGE_DAYS = int(os.getenv("SESSION_MAX_AGE_DAYS", "7"))
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", False)
    SESSION_COOKIE_HTTPONLY = _flag("SESSION_COOKIE_HTTPONLY", True)
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", os.getenv("CLIENT_ID", ""))
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", os.getenv("CLIENT_SECRET", ""))
    GOOGLE_CALLBACK_URL = os.getenv(
        "GOOGLE_CALLBACK_URL", "http://localhost:3000/auth/google/transactions"
    )
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "3000"))
    AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", True)

settings = SimpleSettings()
