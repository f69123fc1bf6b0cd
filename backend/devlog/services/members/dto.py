"""
DTOs for MemberService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from devlog.services.auth.dto import TokenPair

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for member signup.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    """

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for authentication.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str = field(repr=False)


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupOut:
    """
    Output DTO returned after a successful signup.

    :param uuid: Public member identifier (token subject).
    :type uuid: str
    :param email: Email address.
    :type email: str
    :param username: Generated username.
    :type username: str
    :param tokens: Freshly issued session.
    :type tokens: TokenPair
    """

    uuid: str
    email: str
    username: str
    tokens: TokenPair


@dataclass(frozen=True, slots=True)
class MemberOut:
    """
    Output DTO representing public-safe member data.

    :param uuid: Public member identifier.
    :type uuid: str
    :param email: Email address.
    :type email: str
    :param username: Username.
    :type username: str
    :param role: Role name (``USER`` or ``ADMIN``).
    :type role: str
    :param created_at: Account creation instant.
    :type created_at: datetime | None
    """

    uuid: str
    email: str
    username: str
    role: str
    created_at: datetime | None = None
