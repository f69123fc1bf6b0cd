"""
devlog.services._shared.ports
=============================

Collection of *ports* (hexagonal interfaces) that the service layer depends
on for token persistence and outbound mail.

Modules
-------
- :mod:`token_store`:
    Defines :class:`~.TokenStore`: refresh tokens, password-reset tokens and
    the access-token blacklist, each with a TTL.

- :mod:`mail_sender`:
    Defines :class:`~.MailSender`: plain-text outbound mail.

Design Notes
------------
Concrete adapters (Redis, SMTP) live under ``devlog.infra``; the in-memory
and logging adapters here are used by tests and local development.
"""

from __future__ import annotations

from .mail_sender import LoggingMailSender, MailMessage, MailSender
from .token_store import BLACKLIST_SENTINEL, InMemoryTokenStore, TokenStore

__all__ = [
    "TokenStore",
    "InMemoryTokenStore",
    "BLACKLIST_SENTINEL",
    "MailSender",
    "MailMessage",
    "LoggingMailSender",
]
