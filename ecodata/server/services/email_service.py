"""
Email notifications.

Sends multipart (HTML + plain text) messages over SMTP with ``aiosmtplib``.
Every public ``send_*`` method returns ``True`` on success and ``False`` when
the message was not sent; failures are logged and never raised, so a broken
mail server cannot fail the request that triggered the notification.
"""

from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import List, Optional, Union

import aiosmtplib

from ecodata.core.database.entities import ContactMessage, NewsletterSubscriber
from ecodata.core.logging_config import get_logger
from ecodata.server.core.config import EmailConfig, settings

logger = get_logger(__name__)

SMTP_TIMEOUT_SECONDS = 10

_SIGNATURE_HTML = "<p>Best regards,<br>The ECODATA CIC Team</p>"
_SIGNATURE_TEXT = "Best regards,\nThe ECODATA CIC Team"


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%d %B %Y %H:%M UTC") if value else "unknown"


class EmailService:
    """Async SMTP email service"""

    def __init__(self, config: Optional[EmailConfig] = None):
        self.config = config or settings.email

    @property
    def is_configured(self) -> bool:
        """Check if SMTP credentials are present"""
        return bool(self.config.host and self.config.user and self.config.password)

    def _smtp_options(self) -> dict:
        return {
            "hostname": self.config.host,
            "port": self.config.port,
            "username": self.config.user,
            "password": self.config.password,
            "use_tls": self.config.secure,
            "start_tls": not self.config.secure,
            "timeout": SMTP_TIMEOUT_SECONDS,
        }

    async def send_email(
        self,
        to: Union[str, List[str]],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Send an email asynchronously.

        Args:
            to: One recipient or a list of recipients
            subject: Subject line
            html_content: HTML body
            text_content: Plain text alternative

        Returns:
            True if the SMTP server accepted the message, False otherwise.
        """
        if not self.is_configured:
            logger.warning(f"Email service not configured, skipping email: {subject}")
            return False

        recipients = [to] if isinstance(to, str) else list(to)
        if not recipients:
            logger.warning(f"No recipients for email: {subject}")
            return False

        message = MIMEMultipart("alternative")
        message["From"] = f"{self.config.from_name} <{self.config.from_address}>"
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        if text_content:
            message.attach(MIMEText(text_content, "plain", "utf-8"))
        message.attach(MIMEText(html_content, "html", "utf-8"))

        try:
            await aiosmtplib.send(message, recipients=recipients, **self._smtp_options())
            logger.info(f"Sent email to {', '.join(recipients)}: {subject}")
            return True
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {', '.join(recipients)}: {e}")
            return False

    async def verify_connection(self) -> bool:
        """Connect and authenticate against the SMTP server without sending anything."""
        if not self.is_configured:
            return False
        options = self._smtp_options()
        client = aiosmtplib.SMTP(
            hostname=options["hostname"],
            port=options["port"],
            use_tls=options["use_tls"],
            start_tls=options["start_tls"],
            timeout=options["timeout"],
        )
        try:
            await client.connect()
            await client.login(options["username"], options["password"])
            await client.quit()
            return True
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Email service connection error: {e}")
            return False

    # =====================================================================
    # Contact form
    # =====================================================================

    async def send_contact_notification(self, message: ContactMessage) -> bool:
        """Tell the admins about a new contact form submission."""
        html_content = f"""
        <h1>New Contact Form Submission</h1>
        <p><strong>Name:</strong> {escape(message.name)}</p>
        <p><strong>Email:</strong> {escape(message.email)}</p>
        <p><strong>Subject:</strong> {escape(message.subject)}</p>
        <p><strong>Message:</strong></p>
        <div>{escape(message.message)}</div>
        <hr />
        <p>Received on: {_format_date(message.created_at)}</p>
        """
        text_content = (
            f"New contact form submission\n\n"
            f"Name: {message.name}\nEmail: {message.email}\nSubject: {message.subject}\n\n"
            f"{message.message}\n\nReceived on: {_format_date(message.created_at)}"
        )
        return await self.send_email(
            self.config.admin_emails,
            f"New Contact Form Submission: {message.subject}",
            html_content,
            text_content,
        )

    async def send_contact_confirmation(self, message: ContactMessage) -> bool:
        """Acknowledge a contact form submission to its sender."""
        html_content = f"""
        <h1>Thank You for Contacting Us</h1>
        <p>Dear {escape(message.name)},</p>
        <p>Thank you for reaching out to ECODATA CIC. We have received your message and will get back to you as soon as possible.</p>
        <p>For your reference, here's a copy of your message:</p>
        <div style="background-color: #f5f5f5; padding: 15px; border-radius: 5px; margin: 15px 0;">
          <p><strong>Subject:</strong> {escape(message.subject)}</p>
          <p><strong>Message:</strong></p>
          <div>{escape(message.message)}</div>
        </div>
        {_SIGNATURE_HTML}
        """
        text_content = (
            f"Dear {message.name},\n\n"
            "Thank you for reaching out to ECODATA CIC. We have received your message "
            "and will get back to you as soon as possible.\n\n"
            f"Subject: {message.subject}\n\n{message.message}\n\n{_SIGNATURE_TEXT}"
        )
        return await self.send_email(message.email, "Thank you for contacting ECODATA CIC", html_content, text_content)

    # =====================================================================
    # Newsletter
    # =====================================================================

    async def send_newsletter_confirmation(self, subscriber: NewsletterSubscriber) -> bool:
        html_content = f"""
        <h1>Welcome to Our Newsletter!</h1>
        <p>Thank you for subscribing to the ECODATA CIC newsletter. You'll now receive updates on our latest projects, research insights, and environmental data trends.</p>
        <p>We're committed to providing valuable content and won't spam your inbox.</p>
        <p>If you ever wish to unsubscribe, you can click the unsubscribe link in any of our emails.</p>
        {_SIGNATURE_HTML}
        """
        text_content = (
            "Thank you for subscribing to the ECODATA CIC newsletter. You'll now receive updates on "
            "our latest projects, research insights, and environmental data trends.\n\n"
            f"{_SIGNATURE_TEXT}"
        )
        return await self.send_email(subscriber.email, "Welcome to ECODATA CIC Newsletter", html_content, text_content)

    async def send_new_subscriber_notification(self, subscriber: NewsletterSubscriber) -> bool:
        html_content = f"""
        <h1>New Newsletter Subscriber</h1>
        <p>A new user has subscribed to the ECODATA CIC newsletter:</p>
        <p><strong>Email:</strong> {escape(subscriber.email)}</p>
        <p><strong>Date:</strong> {_format_date(subscriber.created_at)}</p>
        """
        text_content = f"New newsletter subscriber: {subscriber.email} ({_format_date(subscriber.created_at)})"
        return await self.send_email(self.config.admin_emails, "New Newsletter Subscriber", html_content, text_content)

    # =====================================================================
    # Password recovery
    # =====================================================================

    def password_reset_url(self, token: str) -> str:
        return f"{self.config.frontend_url.rstrip('/')}/password-recovery?token={token}"

    async def send_password_reset_email(self, email: str, token: str, name: Optional[str] = None) -> bool:
        reset_url = self.password_reset_url(token)
        greeting = escape(name) if name else "there"
        html_content = f"""
        <h1>Reset Your Password</h1>
        <p>Hi {greeting},</p>
        <p>We received a request to reset the password for your ECODATA CIC account.</p>
        <p><a href="{escape(reset_url)}" style="display: inline-block; background: #2e7d32; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px;">Reset Password</a></p>
        <p>This link expires in {settings.password_reset_token_ttl_minutes} minutes. If you did not ask for a new password, you can ignore this email.</p>
        {_SIGNATURE_HTML}
        """
        text_content = (
            f"Hi {name or 'there'},\n\n"
            f"Reset your ECODATA CIC password here: {reset_url}\n\n"
            f"This link expires in {settings.password_reset_token_ttl_minutes} minutes.\n\n{_SIGNATURE_TEXT}"
        )
        return await self.send_email(email, "Reset your ECODATA CIC password", html_content, text_content)

    async def send_password_change_confirmation(self, email: str, name: Optional[str] = None) -> bool:
        greeting = escape(name) if name else "there"
        html_content = f"""
        <h1>Your Password Has Been Changed</h1>
        <p>Hi {greeting},</p>
        <p>The password for your ECODATA CIC account was just changed. If this was not you, please contact us immediately.</p>
        {_SIGNATURE_HTML}
        """
        text_content = (
            f"Hi {name or 'there'},\n\nThe password for your ECODATA CIC account was just changed. "
            f"If this was not you, please contact us immediately.\n\n{_SIGNATURE_TEXT}"
        )
        return await self.send_email(email, "Your ECODATA CIC password has been changed", html_content, text_content)


# Singleton instance
email_service = EmailService()


def get_email_service() -> EmailService:
    return email_service
