"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from typing import Any

from flask import Flask

from devlog.core.config import BaseConfig, get_config
from devlog.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    redis_client: Any | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class, object or import path; ``APP_ENV`` decides
        when omitted.
    :param redis_client: Pre-built Redis client (e.g. ``fakeredis``) used
        instead of connecting to ``REDIS_URL``.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy (optional module)
    from devlog.core import proxy

    proxy.init_app(app)

    if redis_client is not None:
        app.extensions["redis_client"] = redis_client

    from devlog.core import extensions

    extensions.init_app(app)

    init_logging(app)

    # Signing key, codec and token store; fails fast on bad key material
    from devlog.core import mail, security

    security.init_app(app)
    mail.init_app(app)

    from devlog.core import cors

    cors.init_app(app)

    from devlog.api import init_app as init_api

    init_api(app)

    from devlog.core import errors

    errors.init_app(app)

    from devlog import cli as app_cli

    app_cli.init_app(app)

    return app
