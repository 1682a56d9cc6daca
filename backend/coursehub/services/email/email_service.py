"""
Outbound email for Course Hub.

Handles welcome emails on signup, password reset codes and enrollment
confirmations over SMTP (aiosmtplib). Request handlers never wait on
delivery: they schedule ``dispatch_email`` as a background task, which
logs the outcome and never raises.
"""

from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Optional
import logging

import aiosmtplib

from ...config import settings
from .templates import strip_html

logger = logging.getLogger(__name__)

@dataclass
class EmailMessage:
    to: str
    subject: str
    html: str
    text: Optional[str] = None

@dataclass
class EmailResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

class EmailSender:
    """Async SMTP sender"""

    def __init__(self):
        self.host = settings.EMAIL_HOST
        self.port = settings.EMAIL_PORT
        self.secure = settings.EMAIL_SECURE
        self.user = settings.EMAIL_USER
        self.password = settings.EMAIL_PASSWORD
        self.from_name = settings.PLATFORM_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self.user and self.password)

    def build_mime(self, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["From"] = f'"{self.from_name}" <{self.user}>'
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()

        # plain text first so clients prefer the HTML part
        mime.attach(MIMEText(message.text or strip_html(message.html), "plain"))
        mime.attach(MIMEText(message.html, "html"))
        return mime

    async def send(self, message: EmailMessage) -> EmailResult:
        if not self.is_configured:
            logger.warning("[Email] Email credentials not configured, skipping email send")
            return EmailResult(success=False, error="Email credentials not configured")

        mime = self.build_mime(message)
        try:
            await aiosmtplib.send(
                mime,
                hostname=self.host,
                port=self.port,
                username=self.user,
                password=self.password,
                use_tls=self.secure,
                start_tls=not self.secure,
            )
        except aiosmtplib.SMTPException as e:
            logger.error(f"[Email] Failed to send email to {message.to}: {e}")
            return EmailResult(success=False, error=str(e))

        logger.info(f"[Email] Sent '{message.subject}' to {message.to}")
        return EmailResult(success=True, message_id=mime["Message-ID"])

email_sender = EmailSender()

def get_email_sender() -> EmailSender:
    return email_sender

async def dispatch_email(sender: EmailSender, message: EmailMessage) -> None:
    """Single fire-and-forget attempt; failures are logged, never raised"""
    try:
        result = await sender.send(message)
    except Exception as e:
        logger.error(f"[Email] Unexpected error sending to {message.to}: {e}")
        return

    if not result.success:
        logger.error(f"[Email] Delivery to {message.to} failed: {result.error}")
