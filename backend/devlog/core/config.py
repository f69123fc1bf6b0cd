"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Development-only signing key (base64). Production refuses to start with it.
DEV_SIGNING_KEY_BASE64: Final[str] = "ZGV2bG9nLWRldmVsb3BtZW50LW9ubHktc2lnbmluZy1rZXktY2hhbmdlLW1l"

DEFAULT_PUBLIC_PATHS: Final[tuple[str, ...]] = (
    "/api/members/signup",
    "/api/members/login",
    "/api/members/check-email",
    "/api/members/password/validate",
    "/api/members/token/refresh",
    "/api/members/password-reset/request",
    "/api/members/password-reset/verify",
    "/api/members/password-reset/confirm",
    "/api/health",
    "/api/docs/**",
)


# Load .env during development (no-op when absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a comma-separated environment variable into a tuple.

    Blank entries are dropped; an unset variable yields ``default``.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return tuple(item.strip() for item in val.split(",") if item.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret. Unused by token signing.
    JWT_SECRET_KEY_BASE64: str
        Base64 key material for HS256 token signing (>= 32 bytes decoded).
    JWT_ACCESS_TOKEN_TTL_MINUTES: int
        Access token lifetime.
    JWT_REFRESH_TOKEN_TTL_DAYS: int
        Refresh token lifetime.
    PASSWORD_RESET_TTL_MINUTES: int
        Password-reset token lifetime.
    AUTH_PUBLIC_PATHS: tuple[str, ...]
        Paths the auth middleware skips. ``/**`` suffix means prefix match.
    REDIS_URL: str | None
        Token store location. When unset an in-process store is used
        (development and testing only).
    REDIS_SOCKET_TIMEOUT: float
        Seconds before a Redis call fails with ``TokenStoreUnavailable``.
    PASSWORD_RESET_URL: str
        Front-end page receiving ``?token=`` in reset emails.
    MAIL_BACKEND: str
        ``"log"`` (record and log) or ``"smtp"``.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to login.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY_BASE64 = os.getenv("JWT_SECRET", DEV_SIGNING_KEY_BASE64)
    JWT_ACCESS_TOKEN_TTL_MINUTES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRATION", "30"))
    JWT_REFRESH_TOKEN_TTL_DAYS = int(os.getenv("JWT_REFRESH_TOKEN_EXPIRATION", "14"))
    PASSWORD_RESET_TTL_MINUTES = int(os.getenv("PASSWORD_RESET_TTL_MINUTES", "30"))
    AUTH_PUBLIC_PATHS = env_list("AUTH_PUBLIC_PATHS", DEFAULT_PUBLIC_PATHS)

    # Token store
    REDIS_URL = os.getenv("REDIS_URL") or None
    REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0"))

    # Password reset mail
    PASSWORD_RESET_URL = os.getenv("PASSWORD_RESET_URL", "http://localhost:3000/password-reset")
    MAIL_BACKEND = os.getenv("MAIL_BACKEND", "log")
    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME") or None
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD") or None
    MAIL_USE_TLS = env_bool("MAIL_USE_TLS", True)
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "no-reply@devlog.local")

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = int(os.getenv("PROXYFIX_HOPS", "1"))

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default. Without ``REDIS_URL`` tokens live in an
    in-process store and vanish on restart.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to Redis; tests inject a fake client or the in-memory store.
    - Rate limiting is off so login-heavy tests are deterministic.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    PROPAGATE_EXCEPTIONS = True
    REDIS_URL = None
    MAIL_BACKEND = "log"
    RATELIMIT_ENABLED = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled. ``create_app`` refuses to start
    with the development signing key or without ``REDIS_URL``.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
