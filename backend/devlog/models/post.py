"""Blog post model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from devlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .member import Member

SLUG_MAX_LENGTH = 160
TITLE_MAX_LENGTH = 200


class Post(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Blog post addressed publicly by its slug.

    Attributes
    ----------
    slug:
        Unique URL key derived from the title at creation; never changes.
    author_id:
        Owning member. Posts are removed with their author.
    title, content:
        Editable by the author only.
    view_count:
        Incremented atomically on every detail read.
    """

    __tablename__ = "posts"
    __repr_key__ = "slug"

    slug: Mapped[str] = mapped_column(String(SLUG_MAX_LENGTH), nullable=False)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("members.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    author: Mapped[Member] = relationship("Member", back_populates="posts")

    __table_args__ = (
        UniqueConstraint("slug", name="uq_posts_slug"),
        CheckConstraint("view_count >= 0", name="view_count_non_negative"),
        Index("ix_posts_author_created", "author_id", "created_at"),
        Index("ix_posts_author_views", "author_id", "view_count"),
    )

    @validates("slug")
    def _validate_slug(self, key: str, value: str) -> str:
        if not value or not isinstance(value, str):
            raise ValueError("Slug is required.")
        if len(value) > SLUG_MAX_LENGTH:
            raise ValueError("Slug is too long.")
        return value

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        v = value.strip()
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError("Title is too long.")
        return v
