# devlog/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from devlog.infra.jwt.token_codec import TokenCodec
from devlog.services._shared.errors import SessionNotFound, TokenInvalid
from devlog.services._shared.ports.token_store import TokenStore
from devlog.services.auth.dto import (
    AccessClaims,
    AuthTokenConfig,
    Identity,
    PasswordResetClaims,
    RefreshClaims,
    Role,
    TokenPair,
)

logger = logging.getLogger(__name__)


class TokenService:
    """
    Token lifecycle service (issue / validate / revoke / rotate).

    Combines the stateless :class:`TokenCodec` with the stateful
    :class:`TokenStore`:

    - at most one live refresh token per subject (``RT:<subject>``, overwrite);
    - the latest password-reset token per subject (``PRT:<subject>``);
    - revoked access tokens blacklisted until they would expire anyway.

    Token store failures propagate as ``TokenStoreUnavailable``; nothing is
    retried and no record is cached in process memory.
    """

    def __init__(self, *, codec: TokenCodec, store: TokenStore) -> None:
        """
        Initialize the service with its dependencies.

        :param codec: Signs and verifies tokens.
        :param store: Persists refresh/reset records and the blacklist.
        """
        self.codec = codec
        self.store = store

    @staticmethod
    def now_utc() -> datetime:
        """Return current UTC time (aware)."""
        return datetime.now(UTC)

    @property
    def ttl(self) -> AuthTokenConfig:
        return self.codec.ttl

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    def issue_session(self, subject: str, role: Role) -> TokenPair:
        """
        Mint an access/refresh pair and record the refresh token.

        A later call for the same subject overwrites the refresh record, so
        only the newest refresh token remains usable.

        :param subject: Member UUID.
        :param role: Role embedded in the access token.
        :returns: The new token pair.
        """
        access = self.codec.issue_access(subject, role)
        refresh = self.codec.issue_refresh(subject)
        self.store.put_refresh(subject, refresh, self.ttl.refresh_expires)
        logger.info("auth.session_issued", extra={"subject": subject})
        return TokenPair(access_token=access, refresh_token=refresh)

    def validate_access(self, token: str) -> Identity:
        """
        Resolve the identity behind a live access token.

        :raises TokenInvalid: If the token does not parse as an access token
            or has been blacklisted.
        """
        claims = self.codec.parse(token)
        if not isinstance(claims, AccessClaims):
            raise TokenInvalid()
        if self.store.is_blacklisted(token):
            raise TokenInvalid()
        return Identity(subject=claims.subject, role=claims.role)

    def revoke_session(self, subject: str, raw_access_token: str | None) -> None:
        """
        Drop the refresh record and blacklist the access token for the rest
        of its lifetime. Safe to call repeatedly.

        :param subject: Member UUID whose session ends.
        :param raw_access_token: The bearer token presented by the caller.
        """
        self.store.delete_refresh(subject)
        if not raw_access_token:
            return
        try:
            expires_at = self.codec.expires_at(raw_access_token)
        except TokenInvalid:
            # already expired or unreadable, nothing left to blacklist
            logger.info("auth.revoke_skipped_blacklist", extra={"subject": subject})
            return
        remaining = expires_at - self.now_utc()
        if remaining > timedelta(0):
            self.store.blacklist_access(raw_access_token, remaining)
        logger.info("auth.session_revoked", extra={"subject": subject})

    # ------------------------------------------------------------------ #
    # Refresh tokens
    # ------------------------------------------------------------------ #

    def validate_refresh(self, subject: str, token: str) -> bool:
        """Return True iff ``token`` is the stored refresh token of ``subject``."""
        stored = self.store.get_refresh(subject)
        return stored is not None and stored == token

    def rotate_refresh(
        self, refresh_token: str, role_resolver: Callable[[str], Role]
    ) -> TokenPair:
        """
        Exchange the current refresh token for a new pair.

        :param refresh_token: Refresh token presented by the client.
        :param role_resolver: Returns the subject's current role; may raise
            a service error when the subject no longer exists.
        :returns: A fresh token pair (the old refresh token stops working).
        :raises SessionNotFound: If the token is not a refresh token or is
            not the one on record.
        """
        try:
            claims = self.codec.parse(refresh_token)
        except TokenInvalid as exc:
            raise SessionNotFound() from exc
        if not isinstance(claims, RefreshClaims):
            raise SessionNotFound()
        if not self.validate_refresh(claims.subject, refresh_token):
            logger.info("auth.refresh_rejected", extra={"subject": claims.subject})
            raise SessionNotFound()
        role = role_resolver(claims.subject)
        return self.issue_session(claims.subject, role)

    # ------------------------------------------------------------------ #
    # Password reset
    # ------------------------------------------------------------------ #

    def issue_password_reset_token(self, subject: str) -> str:
        """Mint a reset token and make it the only valid one for ``subject``."""
        token = self.codec.issue_password_reset(subject)
        self.store.put_reset_token(subject, token, self.ttl.password_reset_expires)
        logger.info("auth.password_reset_issued", extra={"subject": subject})
        return token

    def validate_password_reset_token(self, token: str) -> bool:
        """
        Return True iff ``token`` is an unexpired reset token and is the
        latest one stored for its subject.
        """
        try:
            claims = self.codec.parse(token)
        except TokenInvalid:
            return False
        if not isinstance(claims, PasswordResetClaims):
            return False
        return self.store.get_reset_token(claims.subject) == token

    def consume_password_reset(self, subject: str) -> None:
        """End the subject's refresh session after a password change."""
        self.store.delete_refresh(subject)
