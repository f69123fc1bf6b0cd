"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from devlog.repositories.base import (
    BaseRepository,
    Page,
    PageRequest,
    apply_sorting,
    paginate_select,
)
from devlog.repositories.member import MemberRepository
from devlog.repositories.post import PostRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "PageRequest",
    "apply_sorting",
    "paginate_select",
    # Domain
    "MemberRepository",
    "PostRepository",
]
