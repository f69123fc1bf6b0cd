"""Integration tests for blog post endpoints."""

from __future__ import annotations

import pytest

from tests.helpers.assertions import assert_page, assert_problem
from tests.helpers.http import bearer, signup

BASE = "/api/posts"


@pytest.fixture()
def author(client) -> dict:
    return signup(client, "author@example.com")


@pytest.fixture()
def reader(client) -> dict:
    return signup(client, "reader@example.com")


def _create(client, member, title="Hello World", content="First post body"):
    return client.post(
        f"{BASE}/create",
        json={"title": title, "content": content},
        headers=bearer(member["accessToken"]),
    )


# ------------------------------ Create ------------------------------------ #
def test_create_returns_slug_and_location(client, author) -> None:
    resp = _create(client, author)

    assert resp.status_code == 201
    assert resp.get_json() == {"slug": "hello-world"}
    assert resp.headers["Location"].endswith("/api/posts/hello-world")


def test_same_title_gets_suffixed_slug(client, author, reader) -> None:
    first = _create(client, author).get_json()["slug"]
    second = _create(client, reader).get_json()["slug"]

    assert (first, second) == ("hello-world", "hello-world-1")


def test_create_requires_auth(client) -> None:
    resp = client.post(f"{BASE}/create", json={"title": "T", "content": "C"})
    assert_problem(resp, 401, "unauthorized")


@pytest.mark.parametrize(
    "body,status",
    [({"content": "no title"}, 422), ({"title": "", "content": "C"}, 422), ({"title": "   ", "content": "C"}, 400)],
)
def test_create_rejects_bad_input(client, author, body, status) -> None:
    resp = client.post(f"{BASE}/create", json=body, headers=bearer(author["accessToken"]))
    assert_problem(resp, status)


# ------------------------------ Read -------------------------------------- #
def test_get_counts_views(client, author) -> None:
    """
    GIVEN a freshly created post
    WHEN it is fetched twice anonymously
    THEN the view counter reads 1 then 2 and the author is embedded.
    """
    slug = _create(client, author).get_json()["slug"]

    first = client.get(f"{BASE}/{slug}").get_json()
    second = client.get(f"{BASE}/{slug}").get_json()

    assert (first["viewCount"], second["viewCount"]) == (1, 2)
    assert second["title"] == "Hello World"
    assert second["content"] == "First post body"
    assert second["authorUuid"] == author["uuid"]
    assert second["authorUsername"] == author["username"]
    assert second["updatedAt"] == first["updatedAt"]


def test_get_unknown_slug(client) -> None:
    assert_problem(client.get(f"{BASE}/does-not-exist"), 404, "not_found")


def test_list_is_public_and_newest_first(client, author) -> None:
    for i in range(3):
        _create(client, author, title=f"Entry {i}")

    resp = client.get(f"{BASE}/post-list", query_string={"page": 0, "size": 2})

    assert resp.status_code == 200
    body = resp.get_json()
    assert_page(body)
    assert [p["slug"] for p in body["posts"]] == ["entry-2", "entry-1"]
    assert body["totalElements"] == 3
    assert body["totalPages"] == 2
    assert body["hasNext"] is True
    assert body["hasPrevious"] is False
    assert "content" not in body["posts"][0]


def test_list_clamps_size(client, author) -> None:
    body = client.get(f"{BASE}/post-list", query_string={"size": 500}).get_json()
    assert body["size"] == 20


def test_list_rejects_negative_page(client) -> None:
    assert_problem(client.get(f"{BASE}/post-list", query_string={"page": -1}), 422)


# ------------------------------ Update ------------------------------------ #
def test_author_update_redirects_to_post(client, author) -> None:
    slug = _create(client, author).get_json()["slug"]

    resp = client.patch(
        f"{BASE}/{slug}", json={"title": "Renamed"}, headers=bearer(author["accessToken"])
    )

    assert resp.status_code == 303
    assert resp.headers["Location"].endswith(f"/api/posts/{slug}")
    detail = client.get(f"{BASE}/{slug}").get_json()
    assert detail["title"] == "Renamed"
    assert detail["content"] == "First post body"


def test_non_author_cannot_update(client, author, reader) -> None:
    slug = _create(client, author).get_json()["slug"]

    resp = client.patch(f"{BASE}/{slug}", json={"title": "Mine now"}, headers=bearer(reader["accessToken"]))
    assert_problem(resp, 403, "forbidden")


def test_update_needs_a_field(client, author) -> None:
    slug = _create(client, author).get_json()["slug"]

    resp = client.patch(f"{BASE}/{slug}", json={}, headers=bearer(author["accessToken"]))
    assert_problem(resp, 422, "validation_error")


def test_update_requires_auth(client, author) -> None:
    slug = _create(client, author).get_json()["slug"]
    assert_problem(client.patch(f"{BASE}/{slug}", json={"title": "x"}), 401)


# ------------------------------ Delete ------------------------------------ #
def test_author_deletes_post(client, author) -> None:
    slug = _create(client, author).get_json()["slug"]

    resp = client.delete(f"{BASE}/{slug}", headers=bearer(author["accessToken"]))

    assert resp.status_code == 204
    assert_problem(client.get(f"{BASE}/{slug}"), 404)


def test_non_author_cannot_delete(client, author, reader) -> None:
    slug = _create(client, author).get_json()["slug"]

    resp = client.delete(f"{BASE}/{slug}", headers=bearer(reader["accessToken"]))

    assert_problem(resp, 403)
    assert client.get(f"{BASE}/{slug}").status_code == 200


def test_unregistering_removes_posts(client, author) -> None:
    slug = _create(client, author).get_json()["slug"]

    client.delete(
        "/api/members/unregister",
        json={"password": "Passw0rd!"},
        headers=bearer(author["accessToken"]),
    )

    assert_problem(client.get(f"{BASE}/{slug}"), 404)
