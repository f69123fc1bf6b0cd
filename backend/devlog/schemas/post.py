"""Post-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from devlog.models.post import TITLE_MAX_LENGTH

from .common import PageMetaSchema


class PostCreateSchema(Schema):
    """Input payload for creating a post."""

    title = fields.String(required=True, validate=validate.Length(min=1, max=TITLE_MAX_LENGTH))
    content = fields.String(required=True, validate=validate.Length(min=1))


class PostUpdateSchema(Schema):
    """Input payload for editing a post; at least one field is required."""

    title = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=TITLE_MAX_LENGTH))
    content = fields.String(load_default=None, allow_none=True)

    @validates_schema
    def _require_one(self, data, **_):
        if data.get("title") is None and data.get("content") is None:
            raise ValidationError("Provide a title or content to update.")


class PostCreatedSchema(Schema):
    slug = fields.String(required=True)


class PostSummarySchema(Schema):
    """One entry in the post list."""

    slug = fields.String(required=True)
    title = fields.String(required=True)
    author_uuid = fields.String(required=True, data_key="authorUuid")
    author_username = fields.String(required=True, data_key="authorUsername")
    view_count = fields.Integer(required=True, data_key="viewCount")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class PostDetailSchema(PostSummarySchema):
    """Full post with its body."""

    content = fields.String(required=True)
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class PostPageSchema(PageMetaSchema):
    """A page of posts, newest first."""

    items = fields.List(fields.Nested(PostSummarySchema), required=True, data_key="posts")
