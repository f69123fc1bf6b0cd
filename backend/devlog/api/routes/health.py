"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from devlog.api.deps import json_response, timing
from devlog.core.extensions import db, get_redis

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application, database and token-store health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    client = get_redis()
    if client is None:
        redis_status = "disabled"
    else:
        try:
            client.ping()
            redis_status = "ok"
        except RedisError:
            current_app.logger.warning("healthcheck.redis_error")
            redis_status = "fail"

    status = "ok" if db_status == "ok" and redis_status != "fail" else "degraded"
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"status": status, "db": db_status, "redis": redis_status, "version": version}
    return json_response(payload)
