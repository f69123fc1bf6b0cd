"""Outbound mail wiring."""

from __future__ import annotations

from flask import Flask, current_app

from devlog.infra.mail.smtp_mail_sender import SmtpMailSender
from devlog.services._shared.ports import LoggingMailSender, MailSender

EXTENSION_KEY = "mail_sender"


def init_app(app: Flask) -> None:
    """Attach the configured :class:`MailSender` to ``app``.

    ``MAIL_BACKEND=smtp`` selects :class:`SmtpMailSender`; anything else
    records messages with :class:`LoggingMailSender`.
    """
    backend = str(app.config.get("MAIL_BACKEND", "log")).strip().lower()
    sender: MailSender
    if backend == "smtp":
        sender = SmtpMailSender(
            host=app.config["MAIL_SERVER"],
            port=int(app.config["MAIL_PORT"]),
            sender=app.config["MAIL_DEFAULT_SENDER"],
            username=app.config.get("MAIL_USERNAME"),
            password=app.config.get("MAIL_PASSWORD"),
            use_tls=bool(app.config.get("MAIL_USE_TLS", True)),
        )
    else:
        sender = LoggingMailSender()
    app.extensions[EXTENSION_KEY] = sender


def get_mail_sender() -> MailSender:
    """Return the :class:`MailSender` bound to the current app."""
    sender = current_app.extensions.get(EXTENSION_KEY)
    if sender is None:
        raise RuntimeError("Mail sender is not initialized. Call init_app() first.")
    return sender
