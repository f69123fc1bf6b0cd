"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between
repositories, token infrastructure, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``devlog/core/errors.py`` via ``translate_service_error()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g., 'uq_posts_slug') or, for SQLite, the
        ``table.column`` pair it reports (e.g., 'posts.slug').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories, adapters or domain logic.
    - The API layer later translates them to APIError.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Member").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Member").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when credentials (email/password) do not match."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when the actor is authenticated but not allowed to act."""

    def __init__(self, message: str = "Action not allowed") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Token subsystem
# --------------------------------------------------------------------------- #


class TokenInvalid(ServiceError):
    """
    A token is malformed, forged, expired, blacklisted or superseded.

    The reason is never exposed to callers; every variant shares the same
    message.
    """

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class SessionNotFound(TokenInvalid):
    """No stored refresh record matches the presented refresh token."""


class TokenStoreUnavailable(ServiceError):
    """The key-value store backing tokens is unreachable or erroring."""

    def __init__(self, message: str = "Token store unavailable") -> None:
        super().__init__(message)
