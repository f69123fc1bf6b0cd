"""Shared API helpers for access control, services and responses."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from devlog.core.errors import Forbidden, Unauthorized
from devlog.core.mail import get_mail_sender
from devlog.core.security import get_token_service
from devlog.services.auth.dto import Identity, Role
from devlog.services.members.service import MemberService
from devlog.services.posts.service import PostService

F = TypeVar("F", bound=Callable[..., Any])


# ------------------------------ Identity ------------------------------------


def current_identity() -> Identity | None:
    """Return the identity set by the auth middleware, if any."""
    return getattr(g, "identity", None)


def current_access_token() -> str | None:
    return getattr(g, "access_token", None)


def require_auth(func: F) -> F:
    """Reject anonymous callers with 401."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if current_identity() is None:
            raise Unauthorized("Authentication required")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(required: Role) -> Callable[[F], F]:
    """Reject anonymous callers with 401 and other roles with 403."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            identity = current_identity()
            if identity is None:
                raise Unauthorized("Authentication required")
            if identity.role is not required:
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# ------------------------------ Services ------------------------------------


def member_service() -> MemberService:
    """Build a :class:`MemberService` wired to the app's token and mail ports."""
    return MemberService(
        tokens=get_token_service(),
        mail=get_mail_sender(),
        reset_url=current_app.config["PASSWORD_RESET_URL"],
    )


def post_service() -> PostService:
    return PostService()


# ------------------------------ Responses -----------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(status: int = 204) -> Response:
    return Response(status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
