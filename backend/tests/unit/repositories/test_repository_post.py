"""Unit tests for PostRepository."""

import pytest

from devlog.repositories.base import PageRequest
from devlog.repositories.post import PostRepository
from tests.factories.member import MemberFactory
from tests.factories.post import PostFactory


class TestPostRepository:
    @pytest.fixture()
    def repo(self):
        return PostRepository()

    def test_get_and_exists_by_slug(self, repo, session):
        post = PostFactory(slug="found-me")

        fetched = repo.get_by_slug("found-me")
        assert fetched is not None
        assert fetched.id == post.id
        assert fetched.author.id == post.author.id
        assert repo.exists_by_slug("found-me")
        assert not repo.exists_by_slug("lost")
        assert repo.get_by_slug("lost") is None

    def test_list_latest_orders_newest_first(self, repo, session):
        author = MemberFactory()
        posts = PostFactory.create_batch(3, author=author)

        page = repo.list_latest(PageRequest(page=0, size=10))

        assert [p.id for p in page.items] == [p.id for p in reversed(posts)]
        assert page.total == 3
        assert page.total_pages == 1
        assert not page.has_next
        assert not page.has_previous

    def test_list_latest_pages(self, repo, session):
        PostFactory.create_batch(5)

        second = repo.list_latest(PageRequest(page=1, size=2))

        assert len(second.items) == 2
        assert second.total_pages == 3
        assert second.has_next
        assert second.has_previous

    def test_increment_view_count(self, repo, session):
        """
        GIVEN a stored post
        WHEN the view counter is bumped twice
        THEN the row reads two views; unknown slugs affect nothing.
        """
        post = PostFactory(slug="viewed")

        assert repo.increment_view_count("viewed") == 1
        assert repo.increment_view_count("viewed") == 1
        assert repo.increment_view_count("missing") == 0

        session.expire_all()
        assert repo.get(post.id).view_count == 2

    def test_update_rejects_slug_change(self, repo, session):
        post = PostFactory()
        with pytest.raises(ValueError):
            repo.update(post, slug="renamed")

    def test_update_title_and_content(self, repo, session):
        post = PostFactory(slug="editable")

        repo.update(post, title="Edited", content="New body")

        stored = repo.get_by_slug("editable")
        assert (stored.title, stored.content) == ("Edited", "New body")
