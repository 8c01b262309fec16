"""Unit tests for the ``Storage`` facade.

Every test runs once per backend (in-memory and SQLite) to prove both
implement the same semantics.
"""

from datetime import datetime, timedelta

import pytest

from ecodata.core.database import utc_now
from ecodata.core.database.entities import (
    BlogPost,
    ContactMessage,
    Donation,
    ErrorReport,
    Faq,
    ImpactProject,
    ImpactTimelineEvent,
    NewsletterSubscriber,
    ProjectProposal,
    Publication,
    Subscription,
    User,
    UserFeedback,
)
from ecodata.core.storage import Storage

pytestmark = pytest.mark.asyncio


async def _user(storage: Storage, username: str = "donor", email: str = "donor@example.org") -> User:
    return await storage.create_user(User(username=username, email=email, role="", hashed_password="x"))


class TestUsersAndResetTokens:
    async def test_create_user_defaults_role(self, storage: Storage):
        user = await _user(storage)

        assert user.id is not None
        assert user.role == "user"
        assert (await storage.get_user_by_username("donor")).id == user.id
        assert (await storage.get_user_by_email("donor@example.org")).id == user.id
        assert await storage.get_user_by_username("nobody") is None

    async def test_mark_free_consultation_used(self, storage: Storage):
        user = await _user(storage)

        updated = await storage.mark_free_consultation_used(user.id)

        assert updated.has_used_free_consultation is True

    async def test_reset_token_lifecycle(self, storage: Storage):
        user = await _user(storage)
        token = await storage.create_password_reset_token(user.id, ttl_minutes=60)

        assert len(token.token) >= 32
        assert (await storage.validate_password_reset_token(token.token)).id == user.id

        await storage.mark_token_used(token.id)

        assert await storage.validate_password_reset_token(token.token) is None

    async def test_expired_token_is_invalid(self, storage: Storage):
        user = await _user(storage)

        token = await storage.create_password_reset_token(user.id, ttl_minutes=-1)

        assert await storage.validate_password_reset_token(token.token) is None
        assert await storage.validate_password_reset_token("unknown") is None


class TestInbox:
    async def test_contact_messages_newest_first_and_unread(self, storage: Storage):
        first = await storage.create_contact_message(
            ContactMessage(name="A", email="a@example.org", subject="One", message="Hello there", consent=True, is_read=True)
        )
        second = await storage.create_contact_message(
            ContactMessage(name="B", email="b@example.org", subject="Two", message="Hello again", consent=True)
        )

        messages = await storage.list_contact_messages()

        assert [m.id for m in messages] == [second.id, first.id]
        assert first.is_read is False

        read = await storage.set_contact_message_read(first.id, True)
        assert read.is_read is True
        assert await storage.delete_contact_message(first.id) is True
        assert await storage.get_contact_message(first.id) is None

    async def test_newsletter_defaults(self, storage: Storage):
        subscriber = await storage.create_newsletter_subscriber(
            NewsletterSubscriber(email="reader@example.org", consent=True, subscription_tier="")
        )

        assert subscriber.subscription_tier == "basic"
        assert subscriber.interests == []
        assert (await storage.get_newsletter_subscriber_by_email("reader@example.org")).id == subscriber.id


class TestContent:
    async def test_impact_project_filters_and_timeline_order(self, storage: Storage):
        forest = await storage.impact_projects.create(
            ImpactProject(title="Forest", description="d", category="reforestation", featured=True)
        )
        await storage.impact_projects.create(ImpactProject(title="River", description="d", category="water"))
        await storage.timeline_events.create(
            ImpactTimelineEvent(project_id=forest.id, title="Later", description="d", event_date=datetime(2024, 6, 1))
        )
        await storage.timeline_events.create(
            ImpactTimelineEvent(project_id=forest.id, title="Earlier", description="d", event_date=datetime(2024, 1, 1))
        )

        featured = await storage.list_impact_projects(featured=True)
        water = await storage.list_impact_projects(category="water")
        events = await storage.list_timeline_events(project_id=forest.id)

        assert [p.title for p in featured] == ["Forest"]
        assert [p.title for p in water] == ["River"]
        assert [e.title for e in events] == ["Earlier", "Later"]

    async def test_blog_posts_sorted_by_publish_date_and_filtered(self, storage: Storage):
        await storage.blog_posts.create(
            BlogPost(title="Old", slug="old", content="c", excerpt="e", category="news", published=True,
                     publish_date=datetime(2023, 1, 1))
        )
        await storage.blog_posts.create(
            BlogPost(title="New", slug="new", content="c", excerpt="e", category="news", published=True,
                     publish_date=datetime(2024, 1, 1))
        )
        await storage.blog_posts.create(
            BlogPost(title="Draft", slug="draft", content="c", excerpt="e", category="news", published=False)
        )

        published = await storage.list_blog_posts(published=True)
        everything = await storage.list_blog_posts()

        assert [p.slug for p in published] == ["new", "old"]
        assert len(everything) == 3
        assert (await storage.get_blog_post_by_slug("draft")).title == "Draft"

    async def test_publications_undated_last(self, storage: Storage):
        await storage.publications.create(Publication(title="Undated", summary="s"))
        await storage.publications.create(Publication(title="2022", summary="s", publication_date=datetime(2022, 5, 1)))
        await storage.publications.create(Publication(title="2024", summary="s", publication_date=datetime(2024, 5, 1)))

        titles = [p.title for p in await storage.list_publications()]

        assert titles == ["2024", "2022", "Undated"]

    async def test_faqs_by_display_order(self, storage: Storage):
        await storage.faqs.create(Faq(question="Second", answer="a", display_order=2))
        await storage.faqs.create(Faq(question="First", answer="a", display_order=1))
        await storage.faqs.create(Faq(question="Other", answer="a", category="donations"))

        general = await storage.list_faqs(category="general")

        assert [f.question for f in general] == ["First", "Second"]

    async def test_upsert_setting(self, storage: Storage):
        created, was_created = await storage.upsert_setting("home", "hero", {"title": "Hello"})
        updated, was_created_again = await storage.upsert_setting("home", "hero", {"title": "Welcome"})

        assert was_created is True
        assert was_created_again is False
        assert updated.id == created.id
        assert (await storage.get_setting_by_key("home", "hero")).value == {"title": "Welcome"}
        assert len(await storage.list_settings()) == 1


class TestFeedbackAndErrors:
    async def test_resolve_feedback_keeps_notes_when_omitted(self, storage: Storage):
        feedback = await storage.create_feedback(UserFeedback(rating=4, feedback="Nice site"))

        resolved = await storage.resolve_feedback(feedback.id, True, "Thanks")
        reopened = await storage.resolve_feedback(feedback.id, False)

        assert resolved.resolved is True
        assert reopened.resolved is False
        assert reopened.admin_notes == "Thanks"
        assert [f.id for f in await storage.list_feedback(resolved=False)] == [feedback.id]
        assert await storage.list_feedback(category="bug") == []

    async def test_error_report_starts_pending(self, storage: Storage):
        report = await storage.create_error_report(ErrorReport(error_details="Broken link", status="fixed"))

        assert report.status == "pending"

        await storage.update_error_report_status(report.id, "resolved", "Link fixed")

        assert await storage.list_error_reports(status="pending") == []
        assert (await storage.list_error_reports(status="resolved"))[0].admin_notes == "Link fixed"


class TestGiving:
    async def test_summarize_giving_counts_completed_and_active_only(self, storage: Storage):
        user = await _user(storage)
        await storage.create_donation(Donation(amount=25, status="completed", user_id=user.id, stripe_session_id="cs_1"))
        await storage.create_donation(Donation(amount=10, status="pending", user_id=user.id))
        await storage.create_subscription(Subscription(amount=10, interval="month", status="active", user_id=user.id))
        await storage.create_subscription(Subscription(amount=120, interval="year", status="active", user_id=user.id))
        await storage.create_subscription(Subscription(amount=50, interval="month", status="canceled", user_id=user.id))

        summary = await storage.summarize_giving(user.id)

        assert summary == {
            "total_donated": 25,
            "donation_count": 1,
            "active_subscriptions": 2,
            "monthly_commitment": 20,
        }
        assert (await storage.get_donation_by_session_id("cs_1")).amount == 25

    async def test_cancel_subscription_sets_timestamp(self, storage: Storage):
        subscription = await storage.create_subscription(
            Subscription(amount=5, stripe_subscription_id="sub_1", status="active")
        )

        canceled = await storage.cancel_subscription(subscription.id)

        assert canceled.status == "canceled"
        assert canceled.canceled_at is not None
        assert (await storage.get_subscription_by_stripe_id("sub_1")).status == "canceled"


class TestProposalsAndActivity:
    async def test_proposal_status_and_activity_log(self, storage: Storage):
        user = await _user(storage)
        proposal = await storage.create_project_proposal(
            ProjectProposal(user_id=user.id, title="Wetland survey", description="Survey local wetlands", category="water",
                            status="approved")
        )

        assert proposal.status == "pending"

        updated = await storage.update_proposal_status(proposal.id, "approved", "Looks good")
        await storage.log_activity(user.id, "update", "project_proposal", proposal.id, {"status": "approved"})
        await storage.log_activity(user.id, "delete", "faq", 3)

        assert updated.status == "approved"
        assert [p.id for p in await storage.list_project_proposals(user_id=user.id)] == [proposal.id]
        logs = await storage.list_activity_logs(limit=1)
        assert len(logs) == 1
        assert logs[0].action == "delete"
        assert len(await storage.list_activity_logs()) == 2


async def test_reset_token_expiry_is_in_the_future(storage: Storage):
    user = await _user(storage)

    token = await storage.create_password_reset_token(user.id, ttl_minutes=30)

    assert token.expires_at - utc_now() > timedelta(minutes=29)
