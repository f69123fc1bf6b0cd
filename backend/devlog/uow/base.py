"""
Unit of Work contract the services depend on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devlog.repositories.member import MemberRepository
    from devlog.repositories.post import PostRepository


class UnitOfWork(ABC):
    """
    One transaction per use-case, shared by the member and post repositories.

    Leaving the ``with`` block normally commits; an exception rolls back and
    propagates. Token store calls made inside the block therefore decide
    whether the database work survives (a failed ``put_refresh`` during
    signup discards the new member).
    """

    members: MemberRepository
    posts: PostRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
