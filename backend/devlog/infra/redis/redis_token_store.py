# devlog/infra/redis/redis_token_store.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from functools import wraps
from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from devlog.services._shared.errors import TokenStoreUnavailable
from devlog.services._shared.ports import BLACKLIST_SENTINEL, TokenStore

logger = logging.getLogger(__name__)


def _unavailable_on_redis_error(fn):
    """Translate any redis-py failure into :class:`TokenStoreUnavailable`."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except RedisError as exc:
            logger.warning("token_store.unavailable", extra={"operation": fn.__name__})
            raise TokenStoreUnavailable() from exc

    return wrapper


@dataclass(slots=True)
class RedisTokenStore(TokenStore):
    """
    Redis-backed token store.

    Key families:

    - ``RT:<subject>``  refresh token, ``EX`` seconds
    - ``PRT:<subject>`` password-reset token, ``EX`` seconds
    - ``BL:<token>``    blacklisted access token, ``PX`` milliseconds

    :param r: A Redis client (already connected, with socket timeouts set).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k_refresh(subject: str) -> str:
        return f"RT:{subject}"

    @staticmethod
    def _k_reset(subject: str) -> str:
        return f"PRT:{subject}"

    @staticmethod
    def _k_blacklist(raw_token: str) -> str:
        return f"BL:{raw_token}"

    @staticmethod
    def _seconds(ttl: timedelta) -> int:
        seconds = int(ttl.total_seconds())
        if seconds <= 0:
            raise ValueError("TTL must be at least one second.")
        return seconds

    @staticmethod
    def _text(value: bytes | str | None) -> str | None:
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes | bytearray) else str(value)

    # -------------------- API ------------------------

    @_unavailable_on_redis_error
    def put_refresh(self, subject: str, token: str, ttl: timedelta) -> None:
        self.r.set(self._k_refresh(subject), token, ex=self._seconds(ttl))

    @_unavailable_on_redis_error
    def get_refresh(self, subject: str) -> str | None:
        return self._text(self.r.get(self._k_refresh(subject)))

    @_unavailable_on_redis_error
    def delete_refresh(self, subject: str) -> None:
        self.r.delete(self._k_refresh(subject))

    @_unavailable_on_redis_error
    def put_reset_token(self, subject: str, token: str, ttl: timedelta) -> None:
        self.r.set(self._k_reset(subject), token, ex=self._seconds(ttl))

    @_unavailable_on_redis_error
    def get_reset_token(self, subject: str) -> str | None:
        return self._text(self.r.get(self._k_reset(subject)))

    @_unavailable_on_redis_error
    def blacklist_access(self, raw_token: str, ttl: timedelta) -> None:
        # round up: sub-millisecond remainders still need an entry
        millis = math.ceil(ttl / timedelta(milliseconds=1))
        if millis <= 0:
            raise ValueError("TTL must be at least one millisecond.")
        self.r.set(self._k_blacklist(raw_token), BLACKLIST_SENTINEL, px=millis)

    @_unavailable_on_redis_error
    def is_blacklisted(self, raw_token: str) -> bool:
        return cast(int, self.r.exists(self._k_blacklist(raw_token))) == 1
