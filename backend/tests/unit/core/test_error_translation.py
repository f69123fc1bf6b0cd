"""Service errors map onto stable HTTP problems."""

from __future__ import annotations

import pytest

from devlog.core.errors import translate_service_error
from devlog.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    SessionNotFound,
    TokenInvalid,
    TokenStoreUnavailable,
)


@pytest.mark.parametrize(
    "exc,status,code",
    [
        (TokenInvalid(), 401, "unauthorized"),
        (SessionNotFound(), 401, "unauthorized"),
        (AuthenticationError(), 401, "unauthorized"),
        (AuthorizationError(), 403, "forbidden"),
        (NotFoundError("Post", "missing"), 404, "not_found"),
        (ConflictError("Member", "email already in use"), 409, "conflict"),
        (TokenStoreUnavailable(), 503, "service_unavailable"),
        (ServiceError("Title must not be blank"), 400, "bad_request"),
    ],
)
def test_translation(exc, status, code):
    err = translate_service_error(exc)
    assert (err.status_code, err.code) == (status, code)


def test_token_failures_share_one_message():
    """Expired, forged and superseded tokens are indistinguishable to clients."""
    messages = {
        translate_service_error(TokenInvalid()).message,
        translate_service_error(SessionNotFound()).message,
        translate_service_error(TokenInvalid("signature mismatch")).message,
    }
    assert messages == {"Invalid or expired token"}


def test_bad_request_keeps_service_message():
    assert translate_service_error(ServiceError("Title is too long")).message == "Title is too long"
