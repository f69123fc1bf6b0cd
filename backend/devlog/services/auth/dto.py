# devlog/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

# Claim names shared by every token kind
SUBJECT_CLAIM = "sub"
ROLE_CLAIM = "roles"
TYPE_CLAIM = "type"
PASSWORD_RESET_TYPE = "password_reset"


class Role(str, Enum):
    """Authorization role carried by access tokens."""

    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, raw: object) -> Role:
        """
        Resolve a role from its wire representation.

        Accepts ``"USER"``, ``"user"`` and the prefixed ``"ROLE_USER"`` form.

        :raises ValueError: If the value is not a known role.
        """
        if not isinstance(raw, str):
            raise ValueError(f"Role must be a string, got {type(raw).__name__}")
        value = raw.strip().upper()
        if value.startswith("ROLE_"):
            value = value[len("ROLE_") :]
        return cls(value)


# ---------------------------- Claim variants ------------------------------ #


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    Claims of a short-lived access token.

    :param subject: Member UUID.
    :param role: Role granted to the bearer.
    :param issued_at: Issuance instant (UTC).
    :param expires_at: Expiry instant (UTC).
    """

    subject: str
    role: Role
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class RefreshClaims:
    """Claims of a refresh token (no role)."""

    subject: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class PasswordResetClaims:
    """Claims of a single-purpose password-reset token."""

    subject: str
    issued_at: datetime
    expires_at: datetime


TokenClaims = AccessClaims | RefreshClaims | PasswordResetClaims


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh pair handed to the client on login, signup and rotation.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class Identity:
    """Caller identity established from a live access token."""

    subject: str
    role: Role


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token lifetimes.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param password_reset_expires: Password-reset token lifetime.
    :type password_reset_expires: timedelta
    """

    access_expires: timedelta = timedelta(minutes=30)
    refresh_expires: timedelta = timedelta(days=14)
    password_reset_expires: timedelta = timedelta(minutes=30)

    @classmethod
    def from_mapping(cls, config) -> AuthTokenConfig:
        """Build the lifetimes from a Flask-style config mapping."""
        return cls(
            access_expires=timedelta(minutes=int(config.get("JWT_ACCESS_TOKEN_TTL_MINUTES", 30))),
            refresh_expires=timedelta(days=int(config.get("JWT_REFRESH_TOKEN_TTL_DAYS", 14))),
            password_reset_expires=timedelta(
                minutes=int(config.get("PASSWORD_RESET_TTL_MINUTES", 30))
            ),
        )
