"""Unit tests for SmtpMailSender with a stubbed ``smtplib.SMTP``."""

from __future__ import annotations

import smtplib

import pytest

from devlog.infra.mail import smtp_mail_sender
from devlog.infra.mail.smtp_mail_sender import SmtpMailSender
from devlog.services._shared.ports import MailMessage


class FakeSMTP:
    """Record the calls a sender makes on an SMTP connection."""

    instances: list[FakeSMTP] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def send_message(self, msg):
        self.calls.append("send")
        self.sent.append(msg)


@pytest.fixture()
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtp_mail_sender.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


MESSAGE = MailMessage(to="reader@example.com", subject="Password Reset Request", body="hello")


def test_sends_plain_text_message(fake_smtp):
    sender = SmtpMailSender(
        host="smtp.test", port=2525, sender="no-reply@devlog.test", username="bot", password="pw"
    )
    sender.send(MESSAGE)

    conn = fake_smtp.instances[0]
    assert (conn.host, conn.port) == ("smtp.test", 2525)
    assert conn.calls == ["starttls", "login:bot", "send", "quit"]
    msg = conn.sent[0]
    assert msg["To"] == "reader@example.com"
    assert msg["From"] == "no-reply@devlog.test"
    assert msg["Subject"] == "Password Reset Request"
    assert msg.get_content().strip() == "hello"


def test_skips_tls_and_login_when_not_configured(fake_smtp):
    SmtpMailSender(host="smtp.test", port=25, sender="a@b.test", use_tls=False).send(MESSAGE)

    assert fake_smtp.instances[0].calls == ["send", "quit"]


def test_password_is_not_in_repr():
    sender = SmtpMailSender(host="h", port=25, sender="a@b.test", password="hunter2")
    assert "hunter2" not in repr(sender)


def test_smtp_failures_propagate(monkeypatch):
    def refuse(*args, **kwargs):
        raise smtplib.SMTPConnectError(421, "busy")

    monkeypatch.setattr(smtp_mail_sender.smtplib, "SMTP", refuse)
    with pytest.raises(smtplib.SMTPException):
        SmtpMailSender(host="h", port=25, sender="a@b.test").send(MESSAGE)
