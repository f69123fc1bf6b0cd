"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest

from devlog.models import Member
from devlog.uow import SQLAlchemyUnitOfWork
from tests.factories.member import MemberFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a member via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(Member).count()

        with SQLAlchemyUnitOfWork() as uow:
            m = MemberFactory.build()  # build = no persist
            uow.members.add(m)

        after = db.session.query(Member).count()
        assert after == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(Member).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            m = MemberFactory.build()
            uow.members.add(m)
            raise RuntimeError("boom")

        after = db.session.query(Member).count()
        assert after == initial

    def test_repositories_share_the_session(self, app, db, session):
        with SQLAlchemyUnitOfWork() as uow:
            assert uow.members.session is uow.posts.session is uow.session
