from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

# Sentinel stored for blacklisted access tokens
BLACKLIST_SENTINEL = "logout"


class TokenStore(Protocol):
    """
    Key-value persistence for refresh tokens, password-reset tokens and
    the access-token blacklist.

    Every operation touches a single key and is atomic on its own. Absence is
    a normal outcome (``None`` / ``False``); backend failures must surface as
    :class:`~devlog.services._shared.errors.TokenStoreUnavailable`.
    """

    def put_refresh(self, subject: str, token: str, ttl: timedelta) -> None:
        """Store (overwrite) the single live refresh token of ``subject``."""

    def get_refresh(self, subject: str) -> str | None: ...

    def delete_refresh(self, subject: str) -> None:
        """Remove the refresh record; no-op when absent."""

    def put_reset_token(self, subject: str, token: str, ttl: timedelta) -> None:
        """Store (overwrite) the latest password-reset token of ``subject``."""

    def get_reset_token(self, subject: str) -> str | None: ...

    def blacklist_access(self, raw_token: str, ttl: timedelta) -> None:
        """Blacklist an access token for ``ttl`` (millisecond precision)."""

    def is_blacklisted(self, raw_token: str) -> bool: ...


@dataclass(frozen=True)
class _Entry:
    value: str
    expires_at: datetime


class InMemoryTokenStore(TokenStore):
    """
    In-process token store with per-entry expiry.

    .. note::
       Uses a threading lock so concurrent requests in one process observe
       atomic single-key operations. Intended for tests and local runs
       without Redis; state is not shared between workers.
    """

    def __init__(self) -> None:
        self._data: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    # ------------------------- helpers -------------------------

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    def _set(self, key: str, value: str, ttl: timedelta) -> None:
        if ttl <= timedelta(0):
            raise ValueError("TTL must be positive.")
        with self._lock:
            self._data[key] = _Entry(value=value, expires_at=self._now() + ttl)

    def _get(self, key: str) -> str | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._now():
                del self._data[key]
                return None
            return entry.value

    def _delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    # -------------------------- API ----------------------------

    def put_refresh(self, subject: str, token: str, ttl: timedelta) -> None:
        self._set(f"RT:{subject}", token, ttl)

    def get_refresh(self, subject: str) -> str | None:
        return self._get(f"RT:{subject}")

    def delete_refresh(self, subject: str) -> None:
        self._delete(f"RT:{subject}")

    def put_reset_token(self, subject: str, token: str, ttl: timedelta) -> None:
        self._set(f"PRT:{subject}", token, ttl)

    def get_reset_token(self, subject: str) -> str | None:
        return self._get(f"PRT:{subject}")

    def blacklist_access(self, raw_token: str, ttl: timedelta) -> None:
        self._set(f"BL:{raw_token}", BLACKLIST_SENTINEL, ttl)

    def is_blacklisted(self, raw_token: str) -> bool:
        return self._get(f"BL:{raw_token}") is not None

    def clear(self) -> None:
        """Drop every entry (test helper)."""
        with self._lock:
            self._data.clear()
