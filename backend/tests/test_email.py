import asyncio
from datetime import datetime

import aiosmtplib

from coursehub.services.email import templates
from coursehub.services.email.email_service import (
    EmailMessage,
    EmailResult,
    EmailSender,
    dispatch_email,
)


def _message():
    return EmailMessage(to="alice@example.com", subject="Hello", html="<p>Hi <b>Alice</b></p>")


def test_unconfigured_sender_skips_delivery(monkeypatch):
    sender = EmailSender()
    sender.user = None
    sender.password = None

    async def fail_send(*args, **kwargs):
        raise AssertionError("should not reach SMTP")

    monkeypatch.setattr(aiosmtplib, "send", fail_send)
    result = asyncio.run(sender.send(_message()))

    assert result.success is False
    assert result.error == "Email credentials not configured"


def test_configured_sender_uses_smtp(monkeypatch):
    calls = []

    async def fake_send(mime, **kwargs):
        calls.append((mime, kwargs))

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    sender = EmailSender()
    sender.user = "platform@example.com"
    sender.password = "app-password"

    result = asyncio.run(sender.send(_message()))

    assert result.success is True
    assert result.message_id
    mime, kwargs = calls[0]
    assert mime["To"] == "alice@example.com"
    assert kwargs["username"] == "platform@example.com"
    assert kwargs["start_tls"] is True


def test_smtp_failure_reported_not_raised(monkeypatch):
    async def broken_send(mime, **kwargs):
        raise aiosmtplib.SMTPException("relay denied")

    monkeypatch.setattr(aiosmtplib, "send", broken_send)
    sender = EmailSender()
    sender.user = "platform@example.com"
    sender.password = "app-password"

    result = asyncio.run(sender.send(_message()))

    assert result.success is False
    assert "relay denied" in result.error


def test_dispatch_email_swallows_errors():
    class ExplodingSender(EmailSender):
        async def send(self, message):
            raise ConnectionError("network down")

    asyncio.run(dispatch_email(ExplodingSender(), _message()))


def test_dispatch_email_logs_failed_result(caplog):
    class FailingSender(EmailSender):
        async def send(self, message):
            return EmailResult(success=False, error="mailbox full")

    asyncio.run(dispatch_email(FailingSender(), _message()))

    assert "mailbox full" in caplog.text


def test_mime_has_plain_text_fallback():
    sender = EmailSender()
    sender.user = "platform@example.com"

    mime = sender.build_mime(_message())
    parts = [part.get_content_type() for part in mime.get_payload()]

    assert parts == ["text/plain", "text/html"]
    assert "Hi Alice" in mime.get_payload()[0].get_payload(decode=True).decode()


def test_strip_html():
    html = "<style>p {color: red}</style><h1>Title</h1>\n<p>Body   text</p><script>alert(1)</script>"

    assert templates.strip_html(html) == "Title Body text"


def test_reset_template_contains_code_and_login_link():
    html = templates.password_reset_email_template("Bob", "Smith", "123456", 15, "staff")

    assert "123456" in html
    assert "15 minutes" in html
    assert "/staff/login" in html


def test_templates_escape_user_input():
    html = templates.welcome_email_template("<script>", "x", "a@example.com", "student")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_enrollment_template():
    html = templates.enrollment_email_template("Alice Liddell", "Databases", "Dr. Codd", "8 weeks",
                                               datetime(2026, 3, 1))

    assert "Databases" in html
    assert "March 01, 2026" in html
    assert templates.enrollment_email_subject("Databases").startswith("Enrollment Confirmed: Databases")
