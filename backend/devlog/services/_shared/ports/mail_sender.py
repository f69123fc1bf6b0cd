from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MailMessage:
    """
    Outbound plain-text mail.

    :ivar to: Recipient address.
    :ivar subject: Subject line.
    :ivar body: Plain-text body.
    """

    to: str
    subject: str
    body: str


class MailSender(Protocol):
    """Port for sending plain-text mail."""

    def send(self, message: MailMessage) -> None: ...


class LoggingMailSender(MailSender):
    """
    Mail sender that records messages in an outbox and logs the envelope.

    The body is not logged because it may carry a password-reset link.
    """

    def __init__(self) -> None:
        self.outbox: list[MailMessage] = []

    def send(self, message: MailMessage) -> None:
        self.outbox.append(message)
        logger.info("mail.queued", extra={"to": message.to, "mail_subject": message.subject})
