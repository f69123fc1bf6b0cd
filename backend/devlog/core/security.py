"""Token subsystem wiring: signing key, codec, store and service."""

from __future__ import annotations

import logging

from flask import Flask, current_app

from devlog.core.config import DEV_SIGNING_KEY_BASE64
from devlog.infra.jwt.signing_key import SigningKey
from devlog.infra.jwt.token_codec import TokenCodec
from devlog.infra.redis.redis_token_store import RedisTokenStore
from devlog.services._shared.ports import InMemoryTokenStore, TokenStore
from devlog.services.auth.dto import AuthTokenConfig
from devlog.services.auth.service import TokenService

log = logging.getLogger(__name__)

EXTENSION_KEY = "token_service"


def _build_store(app: Flask) -> TokenStore:
    client = app.extensions.get("redis_client")
    if client is not None:
        return RedisTokenStore(client)
    if not (app.testing or app.debug):
        raise RuntimeError("REDIS_URL is required outside development and testing.")
    log.warning("token_store.in_memory")
    return InMemoryTokenStore()


def init_app(app: Flask) -> None:
    """Build the process-wide :class:`TokenService` and attach it to ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application carrying ``JWT_*`` settings. Must already have run
        :func:`devlog.core.extensions.init_app` so a Redis client (if any)
        is registered.

    Raises
    ------
    RuntimeError
        When the signing key is invalid, or when a non-development app runs
        with the development key or without Redis.
    """
    encoded = app.config.get("JWT_SECRET_KEY_BASE64") or ""
    if encoded == DEV_SIGNING_KEY_BASE64 and not (app.testing or app.debug):
        raise RuntimeError("JWT_SECRET must be set outside development and testing.")
    try:
        key = SigningKey.from_base64(encoded)
    except ValueError as exc:
        raise RuntimeError(f"Invalid JWT_SECRET: {exc}") from exc

    codec = TokenCodec(key=key, ttl=AuthTokenConfig.from_mapping(app.config))
    app.extensions[EXTENSION_KEY] = TokenService(codec=codec, store=_build_store(app))


def get_token_service() -> TokenService:
    """Return the :class:`TokenService` bound to the current app."""
    service = current_app.extensions.get(EXTENSION_KEY)
    if service is None:
        raise RuntimeError("Token service is not initialized. Call init_app() first.")
    return service
