"""Post repository: slug lookups, paging and view counting."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select, update
from sqlalchemy.orm import joinedload

from devlog.models.post import Post
from devlog.repositories.base import BaseRepository, Page, PageRequest

# Newest first; id breaks ties between rows created in the same instant
LATEST_FIRST = ("-created_at", "-id")


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for :class:`Post`."""

    model = Post

    def _sortable_fields(self):
        return {
            "id": Post.id,
            "created_at": Post.created_at,
            "view_count": Post.view_count,
            "title": Post.title,
        }

    def _updatable_fields(self):
        # slug is immutable after creation
        return {"title", "content"}

    def _default_eagerload(self, stmt):
        """Load the author with each post (1:1 → ``joinedload``)."""
        return stmt.options(joinedload(Post.author))

    # ---------------------------- Lookups ----------------------------

    def get_by_slug(self, slug: str) -> Post | None:
        stmt = self._default_eagerload(select(Post).where(Post.slug == slug))
        return cast(Post | None, self.session.execute(stmt).scalars().first())

    def exists_by_slug(self, slug: str) -> bool:
        stmt = select(Post.id).where(Post.slug == slug)
        return bool(self.session.execute(stmt).first())

    def list_latest(self, request: PageRequest) -> Page[Post]:
        """Page through posts ordered ``created_at DESC, id DESC``."""
        return self.paginate(PageRequest(request.page, request.size, LATEST_FIRST))

    # ---------------------------- Counters ----------------------------

    def increment_view_count(self, slug: str) -> int:
        """Add one view in a single ``UPDATE``.

        ``updated_at`` is written back unchanged so a read never looks like
        an edit.

        :returns: Number of rows affected (0 when the slug is unknown).
        """
        stmt = (
            update(Post)
            .where(Post.slug == slug)
            .values(view_count=Post.view_count + 1, updated_at=Post.updated_at)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
