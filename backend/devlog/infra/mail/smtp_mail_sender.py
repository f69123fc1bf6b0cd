# devlog/infra/mail/smtp_mail_sender.py
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage

from devlog.services._shared.ports import MailMessage, MailSender

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SmtpMailSender(MailSender):
    """
    Deliver plain-text mail through an SMTP relay.

    :param host: SMTP server host.
    :param port: SMTP server port.
    :param sender: ``From`` address.
    :param username: Optional login user.
    :param password: Optional login password (never logged).
    :param use_tls: Issue ``STARTTLS`` before login.
    :param timeout: Socket timeout in seconds.
    """

    host: str
    port: int
    sender: str
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    use_tls: bool = True
    timeout: float = 10.0

    def _build(self, message: MailMessage) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = message.subject
        msg["From"] = self.sender
        msg["To"] = message.to
        msg.set_content(message.body)
        return msg

    def send(self, message: MailMessage) -> None:
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(self._build(message))
        except (smtplib.SMTPException, OSError):
            logger.error("mail.send_failed", extra={"to": message.to}, exc_info=True)
            raise
        logger.info("mail.sent", extra={"to": message.to, "mail_subject": message.subject})
