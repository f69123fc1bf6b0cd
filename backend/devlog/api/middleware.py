"""Bearer-token authentication middleware."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from flask import Flask, current_app, g, request

from devlog.core.security import get_token_service
from devlog.services._shared.errors import TokenInvalid, TokenStoreUnavailable

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
WILDCARD_SUFFIX = "/**"


class PublicPathMatcher:
    """
    Match request paths against an allow-list.

    An entry ending in ``/**`` matches its prefix and everything below it;
    any other entry matches the path exactly (trailing slash ignored).
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.exact: set[str] = set()
        self.prefixes: list[str] = []
        for raw in patterns:
            pattern = raw.strip()
            if not pattern:
                continue
            if pattern.endswith(WILDCARD_SUFFIX):
                self.prefixes.append(pattern[: -len(WILDCARD_SUFFIX)].rstrip("/"))
            else:
                self.exact.add(self._normalize(pattern))

    @staticmethod
    def _normalize(path: str) -> str:
        return path.rstrip("/") or "/"

    def matches(self, path: str) -> bool:
        path = self._normalize(path)
        if path in self.exact:
            return True
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.prefixes)


def extract_bearer(header_value: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX) :].strip()
    return token or None


class AuthMiddleware:
    """
    Establish ``g.identity`` from a bearer access token before each request.

    The hook never fails a request: public paths are skipped, and a missing,
    invalid or revoked token (or an unreachable token store) leaves the
    request anonymous. Access control is left to ``require_auth``.
    """

    def __init__(self, app: Flask | None = None) -> None:
        self.matcher = PublicPathMatcher(())
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        self.matcher = PublicPathMatcher(app.config.get("AUTH_PUBLIC_PATHS", ()))
        app.before_request(self.authenticate)
        app.extensions["auth_middleware"] = self

    def authenticate(self) -> None:
        g.identity = None
        g.access_token = None

        if request.method == "OPTIONS" or self.matcher.matches(request.path):
            return

        token = extract_bearer(request.headers.get("Authorization"))
        if token is None:
            return

        try:
            identity = get_token_service().validate_access(token)
        except TokenInvalid:
            log.info("Invalid or Blacklisted JWT Token", extra={"path": request.path})
            return
        except TokenStoreUnavailable:
            log.warning("auth.token_store_unavailable", extra={"path": request.path})
            return
        except Exception:
            current_app.logger.exception("auth.middleware_error")
            return

        g.identity = identity
        g.access_token = token


def init_app(app: Flask) -> None:
    """Register the :class:`AuthMiddleware` hook on ``app``."""
    AuthMiddleware(app)
