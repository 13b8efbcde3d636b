# /app/core/config.py

"""
Application configuration.

Settings are read once at startup from the process environment (and a local
`.env` file, if present) and handed to the application factory. Nothing in the
codebase should call `os.getenv` directly outside this module.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


DEFAULT_SQLITE_PATH = "./dev.db"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_LLM_TIMEOUT_SECONDS = 30.0
SESSION_TTL_DAYS = 30


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings for the backend."""

    google_client_id: str
    google_client_secret: str
    database_url: Optional[str] = None
    sqlite_path: str = DEFAULT_SQLITE_PATH
    app_env: str = "development"

    # --- Code generation provider ---
    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    llm_timeout_seconds: float = DEFAULT_LLM_TIMEOUT_SECONDS
    llm_max_retries: int = 0
    llm_temperature: float = 0.2

    # --- Web / session ---
    oauth_redirect_url: Optional[str] = None
    frontend_url: str = "/"
    session_cookie_secure: bool = False
    session_ttl_days: int = SESSION_TTL_DAYS
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def sqlalchemy_url(self) -> str:
        """The URL handed to SQLAlchemy: PostgreSQL when configured, SQLite otherwise."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.sqlite_path}"

    @property
    def uses_postgres(self) -> bool:
        return self.database_url is not None

    @property
    def has_llm_credentials(self) -> bool:
        return bool(self.google_api_key)


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_number(name: str, default, cast, minimum=None):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _normalize_database_url(url: Optional[str]) -> Optional[str]:
    """Blank means unset; Heroku/Railway style `postgres://` URLs are not accepted by SQLAlchemy."""
    if url is None or not url.strip():
        return None
    url = url.strip()
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Builds a `Settings` object from the environment.

    Raises:
        ConfigError: if the SSO credentials are missing, if production is
            requested without a database URL, or if a numeric value is invalid.
    """
    load_dotenv(env_file)

    client_id = os.getenv("GOOGLE_CLIENT_ID", "").strip()
    client_secret = os.getenv("GOOGLE_CLIENT_SECRET", "").strip()
    if not client_id or not client_secret:
        raise ConfigError("GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must both be set.")

    app_env = os.getenv("APP_ENV", "development").strip().lower() or "development"
    database_url = _normalize_database_url(os.getenv("DATABASE_URL"))
    if app_env == "production" and not database_url:
        raise ConfigError("DATABASE_URL is required when APP_ENV is 'production'.")

    cors_raw = os.getenv("CORS_ORIGINS", "*")
    cors_origins = [origin.strip() for origin in cors_raw.split(",") if origin.strip()] or ["*"]

    return Settings(
        google_client_id=client_id,
        google_client_secret=client_secret,
        database_url=database_url,
        sqlite_path=os.getenv("SQLITE_PATH", DEFAULT_SQLITE_PATH).strip() or DEFAULT_SQLITE_PATH,
        app_env=app_env,
        google_api_key=os.getenv("GOOGLE_API_KEY", "").strip() or None,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL).strip() or DEFAULT_GEMINI_MODEL,
        llm_timeout_seconds=_get_number("LLM_TIMEOUT_SECONDS", DEFAULT_LLM_TIMEOUT_SECONDS, float, minimum=0.1),
        llm_max_retries=_get_number("LLM_MAX_RETRIES", 0, int, minimum=0),
        llm_temperature=_get_number("LLM_TEMPERATURE", 0.2, float, minimum=0.0),
        oauth_redirect_url=os.getenv("OAUTH_REDIRECT_URL", "").strip() or None,
        frontend_url=os.getenv("FRONTEND_URL", "/").strip() or "/",
        session_cookie_secure=_get_bool("SESSION_COOKIE_SECURE", False),
        cors_origins=cors_origins,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
