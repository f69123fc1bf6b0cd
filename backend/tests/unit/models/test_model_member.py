"""Tests for the Member model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from devlog.models.member import Member
from devlog.models.post import Post


def _member(email: str, username: str, password: str = "Passw0rd!") -> Member:
    m = Member(email=email, username=username)
    m.password = password
    return m


class TestMember:
    def test_password_hashing(self, session):
        m = _member("Test@Example.com", "tester")
        session.add(m)
        session.commit()
        assert m.password_hash != "Passw0rd!"
        assert m.verify_password("Passw0rd!") is True
        assert m.verify_password("wrong") is False

    def test_password_is_write_only(self):
        m = _member("a@example.com", "u1")
        with pytest.raises(AttributeError):
            _ = m.password

    def test_empty_password_is_refused(self):
        m = Member(email="a@example.com", username="u1")
        with pytest.raises(ValueError):
            m.password = ""

    def test_defaults_on_insert(self, session):
        m = _member("d@example.com", "defaults")
        session.add(m)
        session.flush()
        assert m.role == "USER"
        assert len(m.uuid) == 36
        assert m.created_at is not None

    def test_email_normalized_and_unique(self, session):
        m1 = _member("Alice@Example.com ", "alice")
        session.add(m1)
        session.commit()
        assert m1.email == "alice@example.com"

        session.add(_member("alice@example.com", "alice2"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_username_unique(self, session):
        session.add(_member("b1@example.com", "bob"))
        session.commit()

        session.add(_member("b2@example.com", "bob"))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_role_is_validated(self):
        m = _member("r@example.com", "roles")
        m.role = "admin"
        assert m.role == "ADMIN"
        with pytest.raises(ValueError):
            m.role = "ROOT"

    def test_basic_validations(self):
        with pytest.raises(ValueError):
            Member(email="", username="u")
        with pytest.raises(ValueError):
            Member(email="no-at-sign", username="u")
        with pytest.raises(ValueError):
            Member(email="x@example.com", username=" ")

    def test_deleting_member_removes_posts(self, session):
        m = _member("owner@example.com", "owner")
        m.posts.append(Post(slug="first", title="First", content="..."))
        session.add(m)
        session.commit()

        session.delete(m)
        session.commit()
        assert session.query(Post).filter_by(slug="first").count() == 0
