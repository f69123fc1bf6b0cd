"""API blueprint package bundling the resource routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .health import bp as health_bp  # noqa: E402
from .members import bp as members_bp  # noqa: E402
from .posts import bp as posts_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_api_base)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/health
    (members_bp, "/members"),  # -> /api/members
    (posts_bp, "/posts"),
]
