"""
PostService
===========

Blog post use-cases: create with a unique slug, list, read (counting views),
and author-only update/delete.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from devlog.models.post import TITLE_MAX_LENGTH, Post
from devlog.repositories.post import PostRepository
from devlog.services._shared.base import BaseService
from devlog.services._shared.errors import (
    AuthenticationError,
    NotFoundError,
    ServiceError,
    violates,
)
from devlog.services.posts.dto import (
    PostCreateIn,
    PostDetailOut,
    PostPageOut,
    PostSummaryOut,
    PostUpdateIn,
)
from devlog.services.posts.slug import unique_slug

logger = logging.getLogger(__name__)


def _is_slug_clash(exc: IntegrityError) -> bool:
    return violates(exc, "uq_posts_slug") or violates(exc, "posts.slug")


def _to_summary(post: Post) -> PostSummaryOut:
    return PostSummaryOut(
        slug=post.slug,
        title=post.title,
        author_uuid=post.author.uuid,
        author_username=post.author.username,
        view_count=post.view_count,
        created_at=post.created_at,
    )


class PostService(BaseService):
    """
    Application service for the `Post` aggregate.

    Responsibilities
    ----------------
    - Derive an immutable, globally unique slug from the title.
    - Page through posts newest first.
    - Count a view on every read.
    - Restrict edits and deletion to the author.
    """

    DEFAULT_PAGE_SIZE = 10

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create_post(self, subject: str, dto: PostCreateIn) -> str:
        """
        Create a post authored by ``subject``.

        When a concurrent insert takes the chosen slug first, one more slug is
        picked and the insert retried once.

        :param subject: Author's member UUID.
        :param dto: Title and content.
        :returns: The new post's slug.
        :raises AuthenticationError: If no member matches ``subject``.
        :raises ServiceError: On a blank title or content.
        """
        if not dto.title or not dto.title.strip():
            raise ServiceError("Title must not be blank")
        if len(dto.title.strip()) > TITLE_MAX_LENGTH:
            raise ServiceError("Title is too long")
        if not dto.content or not dto.content.strip():
            raise ServiceError("Content must not be blank")

        with self.rw_uow() as uow:
            author = uow.members.get_by_uuid(subject)
            if author is None:
                raise AuthenticationError("No member found for the provided token")

            try:
                slug = self._insert(uow, author, dto)
            except IntegrityError as exc:
                if not _is_slug_clash(exc):
                    raise
                logger.info("post.slug_retry", extra={"subject": subject})
                slug = self._insert(uow, author, dto)
            logger.info("post.created", extra={"slug": slug, "subject": subject})
            return slug

    @staticmethod
    def _insert(uow, author, dto: PostCreateIn) -> str:
        repo: PostRepository = uow.posts
        slug = unique_slug(dto.title, repo.exists_by_slug)
        post = repo.model(slug=slug, title=dto.title.strip(), content=dto.content, author_id=author.id)
        # savepoint keeps the outer transaction usable after a slug clash
        with uow.session.begin_nested():
            repo.add(post)
        return slug

    def update_post(self, subject: str, slug: str, dto: PostUpdateIn) -> str:
        """
        Apply non-blank, changed fields to a post.

        :param subject: Caller's member UUID.
        :param slug: Post slug (never changes).
        :param dto: Fields to change.
        :returns: The post's slug.
        :raises NotFoundError: If no post has ``slug``.
        :raises AuthorizationError: If the caller is not the author.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_by_slug(slug)
            if post is None:
                raise NotFoundError("Post", slug)
            self.ensure_owner(subject, post.author.uuid, msg="Only the author can edit this post.")

            updates: dict[str, str] = {}
            if dto.title is not None and len(dto.title.strip()) > TITLE_MAX_LENGTH:
                raise ServiceError("Title is too long")
            if dto.title is not None and dto.title.strip() and dto.title != post.title:
                updates["title"] = dto.title.strip()
            if dto.content is not None and dto.content.strip() and dto.content != post.content:
                updates["content"] = dto.content
            if updates:
                repo.update(post, **updates)
            return post.slug

    def delete_post(self, subject: str, slug: str) -> None:
        """
        :raises NotFoundError: If no post has ``slug``.
        :raises AuthorizationError: If the caller is not the author.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_by_slug(slug)
            if post is None:
                raise NotFoundError("Post", slug)
            self.ensure_owner(subject, post.author.uuid, msg="Only the author can delete this post.")
            repo.delete(post)
        logger.info("post.deleted", extra={"slug": slug, "subject": subject})

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def list_posts(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> PostPageOut:
        """
        Return one page of posts, newest first.

        :param page: 0-based page index.
        :param size: Page size, clamped to ``[1, 20]``.
        """
        request = self.ensure_pagination(page=page, size=size)
        with self.ro_uow() as uow:
            result = uow.posts.list_latest(request)
            return PostPageOut(
                items=[_to_summary(p) for p in result.items],
                page=result.page,
                size=result.size,
                total_elements=result.total,
                total_pages=result.total_pages,
                has_next=result.has_next,
                has_previous=result.has_previous,
            )

    def get_post(self, slug: str) -> PostDetailOut:
        """
        Read a post and count the view.

        The counter is bumped with one ``UPDATE`` so concurrent readers never
        lose increments; ``updated_at`` keeps its value.

        :raises NotFoundError: If no post has ``slug``.
        """
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            if repo.increment_view_count(slug) == 0:
                raise NotFoundError("Post", slug)
            # drop any stale identity-map copy so the new count is loaded
            uow.session.expire_all()
            post = repo.get_by_slug(slug)
            if post is None:
                raise NotFoundError("Post", slug)
            return PostDetailOut(
                slug=post.slug,
                title=post.title,
                content=post.content,
                author_uuid=post.author.uuid,
                author_username=post.author.username,
                view_count=post.view_count,
                created_at=post.created_at,
                updated_at=post.updated_at,
            )
