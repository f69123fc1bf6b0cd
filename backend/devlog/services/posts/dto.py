"""DTOs for PostService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for creating a post.

    :param title: Post title; the slug is derived from it.
    :type title: str
    :param content: Post body.
    :type content: str
    """

    title: str
    content: str


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """
    Input DTO for editing a post. ``None`` or blank fields are left as is.

    :param title: New title.
    :type title: str | None
    :param content: New body.
    :type content: str | None
    """

    title: str | None = None
    content: str | None = None


@dataclass(frozen=True, slots=True)
class PostSummaryOut:
    """One row of the post list."""

    slug: str
    title: str
    author_uuid: str
    author_username: str
    view_count: int
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class PostDetailOut:
    """Full post as returned to readers."""

    slug: str
    title: str
    content: str
    author_uuid: str
    author_username: str
    view_count: int
    created_at: datetime | None
    updated_at: datetime | None


@dataclass(frozen=True, slots=True)
class PostPageOut:
    """
    Output DTO for a page of posts.

    :param items: Posts on this page, newest first.
    :param page: 0-based page index.
    :param size: Effective page size after clamping.
    :param total_elements: Number of posts overall.
    :param total_pages: Number of pages at this size.
    :param has_next: Whether a next page exists.
    :param has_previous: Whether a previous page exists.
    """

    items: list[PostSummaryOut]
    page: int
    size: int
    total_elements: int
    total_pages: int
    has_next: bool
    has_previous: bool
