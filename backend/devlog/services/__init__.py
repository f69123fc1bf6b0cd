"""Service layer public API.

This package exposes the data contracts of the service layer so that callers
can import from :mod:`devlog.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``devlog.services._shared.base``)
    * :class:`BaseService`

- Errors (from ``devlog.services._shared.errors``)
    * :class:`ServiceError`, :class:`NotFoundError`, :class:`ConflictError`,
      :class:`AuthenticationError`, :class:`AuthorizationError`,
      :class:`TokenInvalid`, :class:`SessionNotFound`,
      :class:`TokenStoreUnavailable`

- Token DTOs (from ``devlog.services.auth.dto``)
    * :class:`Role`, :class:`TokenPair`, :class:`Identity`,
      :class:`AuthTokenConfig`

- Member DTOs (from ``devlog.services.members.dto``)
    * :class:`SignupIn`, :class:`LoginIn`, :class:`SignupOut`, :class:`MemberOut`

- Post DTOs (from ``devlog.services.posts.dto``)
    * :class:`PostCreateIn`, :class:`PostUpdateIn`, :class:`PostSummaryOut`,
      :class:`PostDetailOut`, :class:`PostPageOut`

Notes
-----
The concrete services (``TokenService``, ``MemberService``, ``PostService``)
are imported from their own modules; they depend on ``devlog.infra``, which in
turn imports this package's errors.
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    SessionNotFound,
    TokenInvalid,
    TokenStoreUnavailable,
)
from .auth.dto import AuthTokenConfig, Identity, Role, TokenPair
from .members.dto import LoginIn, MemberOut, SignupIn, SignupOut
from .posts.dto import PostCreateIn, PostDetailOut, PostPageOut, PostSummaryOut, PostUpdateIn

__all__ = [
    # Base
    "BaseService",
    # Errors
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "TokenInvalid",
    "SessionNotFound",
    "TokenStoreUnavailable",
    # Tokens
    "Role",
    "TokenPair",
    "Identity",
    "AuthTokenConfig",
    # Members
    "SignupIn",
    "LoginIn",
    "SignupOut",
    "MemberOut",
    # Posts
    "PostCreateIn",
    "PostUpdateIn",
    "PostSummaryOut",
    "PostDetailOut",
    "PostPageOut",
]
