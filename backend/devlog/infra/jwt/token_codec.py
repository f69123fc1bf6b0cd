# devlog/infra/jwt/token_codec.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar
from uuid import uuid4

import jwt

from devlog.infra.jwt.signing_key import SigningKey
from devlog.services._shared.errors import TokenInvalid
from devlog.services.auth.dto import (
    PASSWORD_RESET_TYPE,
    ROLE_CLAIM,
    SUBJECT_CLAIM,
    TYPE_CLAIM,
    AccessClaims,
    AuthTokenConfig,
    PasswordResetClaims,
    RefreshClaims,
    Role,
    TokenClaims,
)


@dataclass(frozen=True, slots=True)
class TokenCodec:
    """
    Encode and decode HS256-signed JWTs for every token kind.

    The codec is a pure value: it holds the :class:`SigningKey` and lifetimes
    and never touches the token store.

    :param key: Symmetric signing key.
    :type key: SigningKey
    :param ttl: Token lifetimes.
    :type ttl: AuthTokenConfig
    """

    key: SigningKey
    ttl: AuthTokenConfig = field(default_factory=AuthTokenConfig)

    algorithm: ClassVar[str] = "HS256"
    required_claims: ClassVar[tuple[str, ...]] = (SUBJECT_CLAIM, "iat", "exp")

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def now_utc() -> datetime:
        """Return current UTC time (aware)."""
        return datetime.now(UTC)

    def _encode(self, subject: str, lifetime: timedelta, extra: dict[str, Any]) -> str:
        if not subject:
            raise ValueError("Token subject must be a non-empty string.")
        now = self.now_utc()
        payload: dict[str, Any] = {
            SUBJECT_CLAIM: str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            # unique per token so two tokens minted in the same second differ
            "jti": uuid4().hex,
        }
        payload.update(extra)
        return jwt.encode(payload, self.key.material, algorithm=self.algorithm)

    @staticmethod
    def _instant(value: Any) -> datetime:
        return datetime.fromtimestamp(int(value), tz=UTC)

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access(self, subject: str, role: Role) -> str:
        """Mint an access token carrying the ``roles`` claim."""
        return self._encode(subject, self.ttl.access_expires, {ROLE_CLAIM: Role(role).value})

    def issue_refresh(self, subject: str) -> str:
        """Mint a refresh token (no role, no type)."""
        return self._encode(subject, self.ttl.refresh_expires, {})

    def issue_password_reset(self, subject: str) -> str:
        """Mint a password-reset token with ``type="password_reset"``."""
        return self._encode(
            subject, self.ttl.password_reset_expires, {TYPE_CLAIM: PASSWORD_RESET_TYPE}
        )

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def parse(self, token: str) -> TokenClaims:
        """
        Verify signature, structure and expiry, then classify the token.

        :param token: Compact JWS string.
        :returns: The claim variant matching the token kind.
        :raises TokenInvalid: On any signature, format, expiry or claim problem.
        """
        if not isinstance(token, str) or not token:
            raise TokenInvalid()
        try:
            payload = jwt.decode(
                token,
                self.key.material,
                algorithms=[self.algorithm],
                options={"require": list(self.required_claims)},
            )
            subject = payload[SUBJECT_CLAIM]
            if not isinstance(subject, str) or not subject:
                raise TokenInvalid()
            issued_at = self._instant(payload["iat"])
            expires_at = self._instant(payload["exp"])

            token_type = payload.get(TYPE_CLAIM)
            if token_type is not None:
                if token_type != PASSWORD_RESET_TYPE:
                    raise TokenInvalid()
                return PasswordResetClaims(subject, issued_at, expires_at)

            if ROLE_CLAIM in payload:
                role = Role.parse(payload[ROLE_CLAIM])
                return AccessClaims(subject, role, issued_at, expires_at)

            return RefreshClaims(subject, issued_at, expires_at)
        except TokenInvalid:
            raise
        except (jwt.PyJWTError, KeyError, TypeError, ValueError, OverflowError) as exc:
            raise TokenInvalid() from exc

    def is_structurally_valid(self, token: str) -> bool:
        """True iff :meth:`parse` succeeds."""
        try:
            self.parse(token)
        except TokenInvalid:
            return False
        return True

    def subject_of(self, token: str) -> str:
        return self.parse(token).subject

    def role_of(self, token: str) -> Role:
        claims = self.parse(token)
        if not isinstance(claims, AccessClaims):
            raise TokenInvalid()
        return claims.role

    def expires_at(self, token: str) -> datetime:
        return self.parse(token).expires_at
