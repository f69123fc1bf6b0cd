# tests/unit/services/test_post_service.py
"""Unit tests for PostService (create, read, list, edit, delete)."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from devlog.repositories.post import PostRepository
from devlog.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ServiceError,
)
from devlog.services.posts import service as post_service_module
from devlog.services.posts.dto import PostCreateIn, PostUpdateIn
from devlog.services.posts.service import PostService
from tests.factories.member import MemberFactory
from tests.factories.post import PostFactory


@pytest.fixture()
def service() -> PostService:
    return PostService()


@pytest.fixture()
def repo() -> PostRepository:
    return PostRepository()


class TestCreatePost:
    def test_create_derives_slug_from_title(self, service, repo, session):
        author = MemberFactory()

        slug = service.create_post(author.uuid, PostCreateIn(title="Hello World", content="Body"))

        assert slug == "hello-world"
        post = repo.get_by_slug(slug)
        assert post.title == "Hello World"
        assert post.author.uuid == author.uuid
        assert post.view_count == 0

    def test_same_title_gets_numbered_slugs(self, service, session):
        author = MemberFactory()
        dto = PostCreateIn(title="Hello World", content="Body")

        slugs = [service.create_post(author.uuid, dto) for _ in range(3)]

        assert slugs == ["hello-world", "hello-world-1", "hello-world-2"]

    def test_symbol_only_title_falls_back(self, service, session):
        author = MemberFactory()

        assert service.create_post(author.uuid, PostCreateIn(title="!!!", content="x")) == "post"

    @pytest.mark.parametrize(
        "title,content",
        [("", "body"), ("   ", "body"), ("Title", ""), ("Title", "  \n "), ("x" * 201, "body")],
    )
    def test_blank_or_oversized_input_is_rejected(self, service, session, title, content):
        author = MemberFactory()

        with pytest.raises(ServiceError):
            service.create_post(author.uuid, PostCreateIn(title=title, content=content))

    def test_unknown_author(self, service):
        with pytest.raises(AuthenticationError):
            service.create_post("missing", PostCreateIn(title="T", content="C"))

    def test_slug_clash_is_retried_once(self, service, monkeypatch, session):
        """
        GIVEN a concurrent writer that takes the chosen slug first
        WHEN the insert fails on the slug constraint
        THEN the next free slug is picked and the insert succeeds.
        """
        author = MemberFactory()
        PostFactory(author=author, slug="race", title="race")
        real_unique_slug = post_service_module.unique_slug
        calls = {"n": 0}

        def stale_then_fresh(title, exists):
            calls["n"] += 1
            if calls["n"] == 1:
                return "race"  # as if the check ran before the other insert
            return real_unique_slug(title, exists)

        monkeypatch.setattr(post_service_module, "unique_slug", stale_then_fresh)

        slug = service.create_post(author.uuid, PostCreateIn(title="Race", content="C"))

        assert slug == "race-1"
        assert calls["n"] == 2

    def test_second_slug_clash_propagates(self, service, monkeypatch, session):
        author = MemberFactory()
        PostFactory(author=author, slug="race", title="race")
        monkeypatch.setattr(post_service_module, "unique_slug", lambda title, exists: "race")

        with pytest.raises(IntegrityError):
            service.create_post(author.uuid, PostCreateIn(title="Race", content="C"))


class TestReadPost:
    def test_each_read_counts_a_view(self, service, session):
        post = PostFactory(slug="counted")

        first = service.get_post("counted")
        second = service.get_post("counted")

        assert (first.view_count, second.view_count) == (1, 2)
        assert second.author_uuid == post.author.uuid
        assert second.content == post.content

    def test_read_does_not_touch_updated_at(self, service, repo, session):
        PostFactory(slug="stable")
        before = repo.get_by_slug("stable").updated_at

        detail = service.get_post("stable")

        assert detail.updated_at == before

    def test_unknown_slug(self, service):
        with pytest.raises(NotFoundError):
            service.get_post("nope")


class TestListPosts:
    def test_newest_first_with_page_metadata(self, service, session):
        author = MemberFactory()
        created = [PostFactory(author=author, slug=f"p-{i}") for i in range(5)]

        page = service.list_posts(page=0, size=2)

        # same-second timestamps fall back to id order, still newest first
        assert [p.slug for p in page.items] == [created[4].slug, created[3].slug]
        assert page.total_elements == 5
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is False

        last = service.list_posts(page=2, size=2)
        assert [p.slug for p in last.items] == [created[0].slug]
        assert last.has_next is False
        assert last.has_previous is True

    def test_size_is_clamped(self, service, session):
        PostFactory.create_batch(25)

        assert len(service.list_posts(page=0, size=100).items) == 20
        assert service.list_posts(page=0, size=0).size == 1
        assert service.list_posts(page=-3, size=10).page == 0

    def test_empty_listing(self, service):
        page = service.list_posts()

        assert page.items == []
        assert page.total_elements == 0
        assert page.total_pages == 0
        assert page.has_next is False


class TestUpdatePost:
    def test_author_updates_changed_fields(self, service, repo, session):
        post = PostFactory(title="Old", slug="old", content="old body")

        slug = service.update_post(post.author.uuid, "old", PostUpdateIn(title="New", content=None))

        assert slug == "old"  # slugs never change
        stored = repo.get_by_slug("old")
        assert stored.title == "New"
        assert stored.content == "old body"

    def test_blank_fields_are_ignored(self, service, repo, session):
        post = PostFactory(title="Keep", slug="keep", content="keep body")

        service.update_post(post.author.uuid, "keep", PostUpdateIn(title="  ", content=""))

        stored = repo.get_by_slug("keep")
        assert (stored.title, stored.content) == ("Keep", "keep body")

    def test_other_member_cannot_update(self, service, session):
        post = PostFactory(slug="mine")
        intruder = MemberFactory()

        with pytest.raises(AuthorizationError):
            service.update_post(intruder.uuid, "mine", PostUpdateIn(title="Hacked"))

    def test_oversized_title_is_rejected(self, service, session):
        post = PostFactory(slug="long")

        with pytest.raises(ServiceError):
            service.update_post(post.author.uuid, "long", PostUpdateIn(title="x" * 201))

    def test_unknown_slug(self, service, session):
        member = MemberFactory()

        with pytest.raises(NotFoundError):
            service.update_post(member.uuid, "nope", PostUpdateIn(title="T"))


class TestDeletePost:
    def test_author_deletes(self, service, repo, session):
        post = PostFactory(slug="bye")

        service.delete_post(post.author.uuid, "bye")

        assert repo.get_by_slug("bye") is None

    def test_other_member_cannot_delete(self, service, repo, session):
        post = PostFactory(slug="stay")
        intruder = MemberFactory()
        session.commit()

        with pytest.raises(AuthorizationError):
            service.delete_post(intruder.uuid, "stay")

        assert repo.get_by_slug("stay") is not None

    def test_unknown_slug(self, service, session):
        member = MemberFactory()

        with pytest.raises(NotFoundError):
            service.delete_post(member.uuid, "nope")
