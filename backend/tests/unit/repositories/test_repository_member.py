"""Unit tests for MemberRepository."""

import pytest

from devlog.repositories.member import MemberRepository
from tests.factories.member import MemberFactory


class TestMemberRepository:
    """Ensure ``MemberRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self):
        return MemberRepository()

    def test_get_by_email_and_uuid(self, repo, session):
        """Fetch a member by email (any case) and by UUID."""
        m = MemberFactory(email="alice@example.com", username="alice")
        session.commit()

        by_email = repo.get_by_email("  ALICE@example.com ")
        assert by_email is not None
        assert by_email.id == m.id
        assert repo.get_by_uuid(m.uuid).username == "alice"
        assert repo.get_by_uuid("missing") is None

    def test_exists_helpers(self, repo, session):
        MemberFactory(email="bob@example.com", username="bob")

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")
        assert repo.exists_by_username("bob")
        assert not repo.exists_by_username("bobby")
        assert repo.exists(username="bob")

    def test_update_password(self, repo, session):
        """Update the password through the whitelist and verify authentication works."""
        m = MemberFactory(email="c@example.com")
        old_hash = m.password_hash

        repo.update(m, password="N3w-secret!")

        refreshed = repo.get(m.id)
        assert refreshed.password_hash != old_hash
        assert refreshed.verify_password("N3w-secret!")

    def test_update_rejects_unlisted_fields(self, repo, session):
        m = MemberFactory()
        with pytest.raises(ValueError):
            repo.update(m, uuid="forged")

    def test_authenticate_valid_and_invalid(self, repo, session):
        """Authenticate with correct credentials and reject invalid attempts."""
        MemberFactory(email="auth@example.com", password="Str0ng-pass!")

        assert repo.authenticate("auth@example.com", "Str0ng-pass!") is not None
        assert repo.authenticate("auth@example.com", "wrongpass") is None
        assert repo.authenticate("nope@example.com", "Str0ng-pass!") is None

    def test_delete(self, repo, session):
        m = MemberFactory()
        uuid = m.uuid

        repo.delete(m)

        assert repo.get_by_uuid(uuid) is None
