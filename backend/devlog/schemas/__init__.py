"""Convenience exports for application schemas."""

from __future__ import annotations

from .common import PageMetaSchema, PageQuerySchema
from .member import (
    EmailQuerySchema,
    LoginSchema,
    MemberSchema,
    PasswordCheckSchema,
    PasswordConfirmSchema,
    RefreshSchema,
    ResetConfirmSchema,
    ResetRequestSchema,
    ResetTokenSchema,
    ResetVerifyQuerySchema,
    SignupResponseSchema,
    SignupSchema,
    TokenPairSchema,
    UsernameUpdateSchema,
)
from .post import (
    PostCreatedSchema,
    PostCreateSchema,
    PostDetailSchema,
    PostPageSchema,
    PostSummarySchema,
    PostUpdateSchema,
)

__all__ = [
    "PageQuerySchema",
    "PageMetaSchema",
    "SignupSchema",
    "LoginSchema",
    "EmailQuerySchema",
    "PasswordCheckSchema",
    "PasswordConfirmSchema",
    "RefreshSchema",
    "UsernameUpdateSchema",
    "ResetRequestSchema",
    "ResetVerifyQuerySchema",
    "ResetConfirmSchema",
    "TokenPairSchema",
    "SignupResponseSchema",
    "MemberSchema",
    "ResetTokenSchema",
    "PostCreateSchema",
    "PostUpdateSchema",
    "PostCreatedSchema",
    "PostSummarySchema",
    "PostDetailSchema",
    "PostPageSchema",
]
