"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .admin import create_admin_command


def init_app(app: Flask) -> None:
    """Register application-specific CLI commands.

    Parameters
    ----------
    app:
        Flask application instance whose CLI registry will receive the
        ``create-admin`` command.
    """
    app.cli.add_command(create_admin_command)
