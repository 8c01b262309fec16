"""Unit tests for the SMTP email service."""

from email.mime.multipart import MIMEMultipart
from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from ecodata.core.database.entities import ContactMessage, NewsletterSubscriber
from ecodata.server.core.config import EmailConfig
from ecodata.server.services.email_service import EmailService

pytestmark = pytest.mark.asyncio

SEND = "ecodata.server.services.email_service.aiosmtplib.send"


@pytest.fixture
def config() -> EmailConfig:
    return EmailConfig(
        host="smtp.example.org",
        port=587,
        user="mailer",
        password="secret",
        admin_emails=["admin@ecodatacic.org", "team@ecodatacic.org"],
        frontend_url="https://ecodatacic.org/",
    )


@pytest.fixture
def contact_message() -> ContactMessage:
    return ContactMessage(
        id=1,
        name="Ada <script>",
        email="ada@example.org",
        subject="Partnership",
        message="We would like to collaborate.",
        consent=True,
    )


class TestSendEmail:
    async def test_unconfigured_service_skips_sending(self):
        service = EmailService(EmailConfig())

        with patch(SEND, new_callable=AsyncMock) as mock_send:
            assert await service.send_email("a@example.org", "Hi", "<p>Hi</p>") is False

        mock_send.assert_not_called()

    async def test_sends_multipart_message_with_starttls(self, config: EmailConfig):
        service = EmailService(config)

        with patch(SEND, new_callable=AsyncMock) as mock_send:
            sent = await service.send_email("a@example.org", "Hello", "<p>Hello</p>", "Hello")

        assert sent is True
        message = mock_send.call_args.args[0]
        kwargs = mock_send.call_args.kwargs
        assert isinstance(message, MIMEMultipart)
        assert message["Subject"] == "Hello"
        assert message["From"] == "ECODATA CIC <noreply@ecodatacic.org>"
        assert kwargs["recipients"] == ["a@example.org"]
        assert kwargs["hostname"] == "smtp.example.org"
        assert kwargs["start_tls"] is True
        assert kwargs["use_tls"] is False

    async def test_smtp_failure_returns_false(self, config: EmailConfig):
        service = EmailService(config)

        with patch(SEND, new_callable=AsyncMock, side_effect=aiosmtplib.SMTPException("rejected")):
            assert await service.send_email("a@example.org", "Hello", "<p>Hello</p>") is False

    async def test_connection_error_returns_false(self, config: EmailConfig):
        service = EmailService(config)

        with patch(SEND, new_callable=AsyncMock, side_effect=ConnectionRefusedError()):
            assert await service.send_email(["a@example.org"], "Hello", "<p>Hello</p>") is False


class TestNotifications:
    async def test_contact_notification_goes_to_admins(self, config: EmailConfig, contact_message: ContactMessage):
        service = EmailService(config)

        with patch.object(service, "send_email", new_callable=AsyncMock, return_value=True) as mock_send:
            await service.send_contact_notification(contact_message)

        to, subject, html_content = mock_send.call_args.args[:3]
        assert to == ["admin@ecodatacic.org", "team@ecodatacic.org"]
        assert subject == "New Contact Form Submission: Partnership"
        assert "Ada &lt;script&gt;" in html_content
        assert "<script>" not in html_content

    async def test_contact_confirmation_goes_to_sender(self, config: EmailConfig, contact_message: ContactMessage):
        service = EmailService(config)

        with patch.object(service, "send_email", new_callable=AsyncMock, return_value=True) as mock_send:
            await service.send_contact_confirmation(contact_message)

        assert mock_send.call_args.args[0] == "ada@example.org"

    async def test_newsletter_emails(self, config: EmailConfig):
        service = EmailService(config)
        subscriber = NewsletterSubscriber(id=3, email="reader@example.org", consent=True)

        with patch.object(service, "send_email", new_callable=AsyncMock, return_value=True) as mock_send:
            await service.send_newsletter_confirmation(subscriber)
            await service.send_new_subscriber_notification(subscriber)

        first, second = mock_send.call_args_list
        assert first.args[0] == "reader@example.org"
        assert first.args[1] == "Welcome to ECODATA CIC Newsletter"
        assert second.args[0] == config.admin_emails

    async def test_password_reset_email_contains_link(self, config: EmailConfig):
        service = EmailService(config)

        with patch.object(service, "send_email", new_callable=AsyncMock, return_value=True) as mock_send:
            await service.send_password_reset_email("ada@example.org", "tok123", "Ada")

        to, subject, html_content, text_content = mock_send.call_args.args
        assert to == "ada@example.org"
        assert subject == "Reset your ECODATA CIC password"
        assert "https://ecodatacic.org/password-recovery?token=tok123" in text_content
        assert "tok123" in html_content


async def test_verify_connection_without_config_is_false():
    assert await EmailService(EmailConfig()).verify_connection() is False
