"""Blog post endpoints."""

from __future__ import annotations

from flask import Blueprint, redirect, request, url_for

from devlog.api.deps import (
    current_identity,
    empty_response,
    json_response,
    post_service,
    require_auth,
    timing,
)
from devlog.schemas import (
    PageQuerySchema,
    PostCreatedSchema,
    PostCreateSchema,
    PostDetailSchema,
    PostPageSchema,
    PostUpdateSchema,
)
from devlog.services.posts.dto import PostCreateIn, PostUpdateIn

bp = Blueprint("posts", __name__)

create_schema = PostCreateSchema()
update_schema = PostUpdateSchema()
created_schema = PostCreatedSchema()
detail_schema = PostDetailSchema()
page_schema = PostPageSchema()
page_query_schema = PageQuerySchema()


@bp.post("/create")
@require_auth
@timing
def create_post():
    """Create a post and point ``Location`` at it."""

    data = create_schema.load(request.get_json(silent=True) or {})
    slug = post_service().create_post(
        current_identity().subject, PostCreateIn(title=data["title"], content=data["content"])
    )
    response = json_response(created_schema.dump({"slug": slug}), status=201)
    response.headers["Location"] = url_for("posts.get_post", slug=slug)
    return response


@bp.get("/post-list")
@timing
def list_posts():
    """Page through posts, newest first."""

    query = page_query_schema.load(request.args)
    page = post_service().list_posts(page=query["page"], size=query["size"])
    return json_response(page_schema.dump(page))


@bp.get("/<slug>")
@timing
def get_post(slug: str):
    """Return a post and count the view."""

    return json_response(detail_schema.dump(post_service().get_post(slug)))


@bp.patch("/<slug>")
@require_auth
@timing
def update_post(slug: str):
    """Edit a post; replies ``303 See Other`` to its canonical URL."""

    data = update_schema.load(request.get_json(silent=True) or {})
    canonical = post_service().update_post(
        current_identity().subject,
        slug,
        PostUpdateIn(title=data.get("title"), content=data.get("content")),
    )
    return redirect(url_for("posts.get_post", slug=canonical), code=303)


@bp.delete("/<slug>")
@require_auth
@timing
def delete_post(slug: str):
    post_service().delete_post(current_identity().subject, slug)
    return empty_response()
