"""
Email Service for the KGHS Alumni Network
=========================================
Transactional email, currently only the account-approval notice.

Supports the Brevo transactional API (preferred when BREVO_API_KEY is set)
and plain SMTP with STARTTLS.
"""

import aiosmtplib
import httpx
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
from datetime import datetime

from alumni.core.config import settings
from alumni.core.exceptions import EmailDeliveryError
from alumni.core.logging_config import logger

APPROVAL_SUBJECT = "🎉 Your KGHS Alumni Account Has Been Approved!"


class EmailService:
    """Async email service using the Brevo API or SMTP"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.login_url = settings.get_login_url()
        self.brevo_api_key = settings.BREVO_API_KEY
        self.brevo_api_url = settings.BREVO_API_URL
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self.use_brevo = bool(self.brevo_api_key)
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if email service is properly configured"""
        if self.use_brevo:
            return True
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

        Returns True when sent, False when skipped because nothing is configured.
        Raises EmailDeliveryError when the provider fails.
        """
        if not self.is_configured:
            logger.warning("[Email] Email service not configured, skipping email send")
            return False

        if self.use_brevo:
            await self._send_via_brevo(to_email, subject, html_content, text_content)
        else:
            await self._send_via_smtp(to_email, subject, html_content, text_content)
        return True

    async def _send_via_brevo(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> None:
        """Send email via the Brevo transactional API"""
        payload = {
            "sender": {"name": self.from_name, "email": self.from_email},
            "to": [{"email": to_email}],
            "subject": subject,
            "htmlContent": html_content,
        }
        if text_content:
            payload["textContent"] = text_content

        headers = {
            "api-key": self.brevo_api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.brevo_api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"[Email/Brevo] Failed with status {e.response.status_code}: {e.response.text}"
            )
            raise EmailDeliveryError() from e
        except httpx.HTTPError as e:
            logger.error(f"[Email/Brevo] Failed to send email to {to_email}: {e}")
            raise EmailDeliveryError() from e

        logger.info(f"[Email/Brevo] Successfully sent email to {to_email}: {subject}")

    async def _send_via_smtp(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> None:
        """Send email via SMTP"""
        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to_email
        message["Subject"] = subject

        # Plain text first so HTML is the preferred part
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
                start_tls=True,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send email to {to_email}: {e}")
            raise EmailDeliveryError() from e

        logger.info(f"[Email/SMTP] Successfully sent email to {to_email}: {subject}")

    async def send_approval_email(self, to_email: str, user_name: Optional[str]) -> bool:
        """Tell a user their account was approved"""
        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; padding: 30px; background: #fff; border-radius: 15px; box-shadow: 0 10px 30px rgba(255,192,203,0.2);">
            <h1 style="color: #FFC0CB; text-align: center;">Welcome to the Family!</h1>
            <p style="font-size: 18px; color: #333;">Dear {user_name or 'Alumnus'},</p>
            <p style="font-size: 16px; line-height: 1.6; color: #555;">
                Congratulations! Your KGHS Alumni Network account has been <strong>approved</strong>.
            </p>
            <p style="font-size: 16px; line-height: 1.6; color: #555;">
                You can now log in and connect with fellow graduates, share memories, and stay updated on events.
            </p>
            <div style="text-align: center; margin: 40px 0;">
                <a href="{self.login_url}" style="background: #FFC0CB; color: white; padding: 15px 40px; text-decoration: none; border-radius: 50px; font-size: 18px; font-weight: bold;">
                    Log In Now
                </a>
            </div>
            <p style="color: #777; font-size: 14px; text-align: center;">
                Warm regards,<br><strong>The KGHS Alumni Team</strong>
            </p>
            <p style="color: #aaa; font-size: 12px; text-align: center;">&copy; {datetime.utcnow().year} KGHS Alumni Network</p>
        </div>
        """

        text_content = f"""
        Dear {user_name or 'Alumnus'},

        Congratulations! Your KGHS Alumni Network account has been approved.
        You can now log in at: {self.login_url}

        - The KGHS Alumni Team
        """

        return await self.send_email(to_email, APPROVAL_SUBJECT, html_content, text_content)


def get_email_service() -> EmailService:
    """FastAPI dependency - one service per request, settings read at call time"""
    return EmailService()
