"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import logging

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address, default_limits=[])

REDIS_EXTENSION_KEY = "redis_client"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, rate limiting and Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`devlog.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    A pre-built client placed in ``app.extensions["redis_client"]`` before
    this call (tests use ``fakeredis``) takes precedence over ``REDIS_URL``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from devlog import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    if app.extensions.get(REDIS_EXTENSION_KEY) is not None:
        return

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        return

    timeout = float(app.config.get("REDIS_SOCKET_TIMEOUT", 2.0))
    client = redis.Redis.from_url(
        redis_url, socket_timeout=timeout, socket_connect_timeout=timeout
    )
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError("Failed to connect to Redis (check REDIS_URL)") from exc
    app.extensions[REDIS_EXTENSION_KEY] = client
    log.info("redis.connected")


def get_redis() -> redis.Redis | None:
    """Return the Redis client of the current app, or ``None`` without Redis."""
    return current_app.extensions.get(REDIS_EXTENSION_KEY)
