"""Member repository for persistence and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from devlog.models.member import Member
from devlog.repositories.base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """Persistence-only repository for :class:`Member`.

    It never issues tokens; that belongs to the token service.
    """

    model = Member

    # ---------------------------- Whitelists ----------------------------

    def _sortable_fields(self):
        return {
            "id": Member.id,
            "username": Member.username,
            "created_at": Member.created_at,
        }

    def _updatable_fields(self):
        """Publicly allowed updatable fields (password goes through its setter)."""
        return {"username", "password", "role"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_uuid(self, uuid: str) -> Member | None:
        """Fetch a member by its public UUID (the token subject).

        :param uuid: Member UUID string.
        :returns: Member or ``None``.
        """
        stmt = select(Member).where(Member.uuid == str(uuid))
        return cast(Member | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> Member | None:
        """Fetch a member by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Member instance or ``None`` when not found.
        :rtype: Member | None
        """
        stmt = select(Member).where(Member.email == email.lower().strip())
        return cast(Member | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Member.id).where(Member.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def exists_by_username(self, username: str) -> bool:
        stmt = select(Member.id).where(Member.username == username.strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Credentials ----------------------------

    def authenticate(self, email: str, password: str) -> Member | None:
        """Return the member when email and password match, else ``None``.

        :param email: Email address to authenticate.
        :param password: Raw password to verify.
        """
        member = self.get_by_email(email)
        if not member or not member.verify_password(password):
            return None
        return member
