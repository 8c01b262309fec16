from unittest.mock import Mock

import pytest
from httpx import AsyncClient

from ecodata.core.storage import Storage

pytestmark = pytest.mark.asyncio

CONTACT_BODY = {
    "name": "Ada Lovelace",
    "email": "ada@example.org",
    "subject": "Partnership",
    "message": "We would like to work with you on air quality data.",
    "consent": True,
}


class TestContactForm:
    async def test_submission_is_stored_and_emails_sent(
        self, client: AsyncClient, storage: Storage, email_service: Mock
    ):
        response = await client.post("/api/contact", json=CONTACT_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Your message has been sent successfully"
        message = await storage.get_contact_message(data["id"])
        assert message.subject == "Partnership"
        assert message.is_read is False
        email_service.send_contact_notification.assert_called_once()
        email_service.send_contact_confirmation.assert_called_once()

    async def test_honeypot_drops_submission(self, client: AsyncClient, storage: Storage, email_service: Mock):
        response = await client.post("/api/contact", json={**CONTACT_BODY, "website": "http://spam.example"})

        assert response.status_code == 200
        assert response.json() == {"message": "Message received"}
        assert await storage.list_contact_messages() == []
        email_service.send_contact_notification.assert_not_called()

    async def test_short_message_is_rejected(self, client: AsyncClient):
        response = await client.post("/api/contact", json={**CONTACT_BODY, "message": "Hi"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"] == ["body", "message"]


class TestNewsletter:
    async def test_subscribe(self, client: AsyncClient, storage: Storage, email_service: Mock):
        response = await client.post(
            "/api/newsletter/subscribe",
            json={"email": "reader@example.org", "consent": True, "interests": ["climate"]},
        )

        assert response.status_code == 201
        subscriber = await storage.get_newsletter_subscriber_by_email("reader@example.org")
        assert subscriber.interests == ["climate"]
        assert subscriber.subscription_tier == "basic"
        email_service.send_newsletter_confirmation.assert_called_once()
        email_service.send_new_subscriber_notification.assert_called_once()

    async def test_duplicate_email(self, client: AsyncClient):
        body = {"email": "reader@example.org", "consent": True}
        await client.post("/api/newsletter/subscribe", json=body)

        response = await client.post("/api/newsletter/subscribe", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "This email is already subscribed"}

    async def test_honeypot(self, client: AsyncClient, storage: Storage):
        response = await client.post(
            "/api/newsletter/subscribe", json={"email": "bot@example.org", "consent": True, "website": "x"}
        )

        assert response.status_code == 200
        assert await storage.list_newsletter_subscribers() == []


class TestFeedback:
    async def test_anonymous_feedback(self, client: AsyncClient, storage: Storage):
        response = await client.post(
            "/api/feedback",
            json={"rating": 4, "feedback": "Lovely site", "pageUrl": "/about"},
            headers={"User-Agent": "pytest-agent"},
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Thank you for your feedback!"
        feedback = (await storage.list_feedback())[0]
        assert feedback.user_id is None
        assert feedback.category == "general"
        assert feedback.page_url == "/about"
        assert feedback.user_agent == "pytest-agent"
        assert feedback.resolved is False

    async def test_feedback_is_linked_to_logged_in_user(
        self, client: AsyncClient, storage: Storage, user_headers: dict, donor
    ):
        await client.post("/api/feedback", json={"rating": 5, "feedback": "Great"}, headers=user_headers)

        assert (await storage.list_feedback())[0].user_id == donor.id

    async def test_bad_token_is_treated_as_anonymous(self, client: AsyncClient, storage: Storage):
        response = await client.post(
            "/api/feedback", json={"rating": 3, "feedback": "Ok"}, headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 201
        assert (await storage.list_feedback())[0].user_id is None

    async def test_rating_out_of_range(self, client: AsyncClient):
        response = await client.post("/api/feedback", json={"rating": 6, "feedback": "Too good"})

        assert response.status_code == 400


class TestErrorReports:
    async def test_report_uses_user_agent_when_browser_missing(self, client: AsyncClient, storage: Storage):
        response = await client.post(
            "/api/error-reports",
            json={"errorDetails": "Map does not load", "currentPage": "/impact"},
            headers={"User-Agent": "pytest-agent"},
        )

        assert response.status_code == 201
        report = (await storage.list_error_reports())[0]
        assert report.browser_info == "pytest-agent"
        assert report.status == "pending"
        assert report.current_page == "/impact"

    async def test_details_required(self, client: AsyncClient):
        response = await client.post("/api/error-reports", json={"email": "ada@example.org"})

        assert response.status_code == 400
