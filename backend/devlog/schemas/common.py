"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class PageQuerySchema(Schema):
    """Validate 0-based ``page``/``size`` query parameters.

    ``size`` is only checked for being positive here; the service clamps it.
    """

    class Meta:
        unknown = EXCLUDE

    page = fields.Integer(load_default=0, validate=validate.Range(min=0))
    size = fields.Integer(load_default=10, validate=validate.Range(min=1))


class PageMetaSchema(Schema):
    """Pagination fields shared by every paged response."""

    page = fields.Integer(required=True)
    size = fields.Integer(required=True)
    total_elements = fields.Integer(required=True, data_key="totalElements")
    total_pages = fields.Integer(required=True, data_key="totalPages")
    has_next = fields.Boolean(required=True, data_key="hasNext")
    has_previous = fields.Boolean(required=True, data_key="hasPrevious")
