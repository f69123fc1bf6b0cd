"""Unit tests for the in-process TokenStore."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from devlog.services._shared.ports import InMemoryTokenStore


@pytest.fixture()
def store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


def test_refresh_put_get_delete(store):
    store.put_refresh("s1", "rt-1", timedelta(minutes=1))
    assert store.get_refresh("s1") == "rt-1"

    store.put_refresh("s1", "rt-2", timedelta(minutes=1))
    assert store.get_refresh("s1") == "rt-2"

    store.delete_refresh("s1")
    store.delete_refresh("s1")
    assert store.get_refresh("s1") is None


def test_families_do_not_collide(store):
    """Refresh and reset records for one subject live under different keys."""
    store.put_refresh("s1", "same", timedelta(minutes=1))
    store.put_reset_token("s1", "other", timedelta(minutes=1))

    assert store.get_refresh("s1") == "same"
    assert store.get_reset_token("s1") == "other"


def test_entries_expire(store):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        store.put_reset_token("s1", "prt", timedelta(minutes=30))
        store.blacklist_access("at", timedelta(milliseconds=1500))

        frozen.tick(delta=timedelta(seconds=1))
        assert store.is_blacklisted("at") is True

        frozen.tick(delta=timedelta(seconds=1))
        assert store.is_blacklisted("at") is False
        assert store.get_reset_token("s1") == "prt"

        frozen.tick(delta=timedelta(minutes=30))
        assert store.get_reset_token("s1") is None


def test_rejects_non_positive_ttl(store):
    with pytest.raises(ValueError):
        store.put_refresh("s1", "rt", timedelta(0))


def test_clear_drops_everything(store):
    store.put_refresh("s1", "rt", timedelta(minutes=1))
    store.blacklist_access("at", timedelta(minutes=1))
    store.clear()

    assert store.get_refresh("s1") is None
    assert store.is_blacklisted("at") is False
