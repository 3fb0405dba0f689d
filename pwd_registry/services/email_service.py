"""
Email service for password-reset codes.

Codes are delivered over SMTP with aiosmtplib. Routes schedule delivery
through FastAPI BackgroundTasks so the HTTP response never waits on the
mail server.
"""
import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, Protocol
import logging

from pwd_registry.config import settings

logger = logging.getLogger(__name__)


class OtpNotifier(Protocol):
    async def send_otp(self, to_email: str, username: str, code: str, ttl_minutes: int) -> bool:
        ...


class EmailService:
    """Async email service using SMTP"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.EMAIL_FROM or settings.SMTP_USER
        self.from_name = settings.EMAIL_FROM_NAME

    @property
    def is_configured(self) -> bool:
        """Check if email service is properly configured"""
        return bool(self.smtp_user and self.smtp_password)

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> bool:
        """
        Send an email asynchronously.

        Returns True if successful, False otherwise.
        """
        if not self.is_configured:
            logger.warning("Email service not configured, skipping email to %s", to_email)
            return False

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to_email
        if text_content:
            message.attach(MIMEText(text_content, "plain"))
        message.attach(MIMEText(html_content, "html"))

        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=self.use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False

        logger.info("Email sent to %s", to_email)
        return True

    async def send_otp(self, to_email: str, username: str, code: str, ttl_minutes: int) -> bool:
        """Send a password-reset code."""
        subject = "Your password reset code"
        text = (
            f"Hello {username},\n\n"
            f"Your password reset code is {code}. "
            f"It expires in {ttl_minutes} minutes.\n\n"
            "If you did not request a reset, ignore this email."
        )
        html = (
            f"<p>Hello {username},</p>"
            f"<p>Your password reset code is <strong>{code}</strong>. "
            f"It expires in {ttl_minutes} minutes.</p>"
            "<p>If you did not request a reset, ignore this email.</p>"
        )
        return await self.send_email(to_email, subject, html, text)
