"""
Storage facade.

``Storage`` is the single object route handlers talk to. It owns one
repository per table and implements the domain operations (lookups by slug,
filtered listings, status transitions, upserts) on top of the generic
repository contract, so the in-memory and SQL backends behave identically.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ecodata.core.logging_config import get_logger
from ecodata.core.security import generate_reset_token

from ..database.base import utc_now
from ..database.entities import (
    ActivityLog,
    BlogPost,
    CaseStudy,
    ContactMessage,
    Donation,
    ErrorReport,
    Faq,
    ImpactMetric,
    ImpactProject,
    ImpactTimelineEvent,
    NewsletterSubscriber,
    Partner,
    PasswordResetToken,
    ProjectProposal,
    Publication,
    Service,
    SiteSetting,
    Subscription,
    Testimonial,
    User,
    UserFeedback,
)
from .interfaces import EntityRepository
from .memory import InMemoryRepository
from .sql import SqlRepository

logger = get_logger(__name__)

RepositoryFactory = Callable[[Type[Any]], EntityRepository]

NEWEST_FIRST = ("created_at", "id")

# Multiplier turning a recurring amount into a monthly figure
_MONTHLY_FACTOR = {"month": 1.0, "year": 1.0 / 12}


class Storage:
    """Domain-level persistence API shared by every backend."""

    def __init__(self, repository_factory: RepositoryFactory, *, backend: str, engine: Optional[AsyncEngine] = None):
        self.backend = backend
        self._engine = engine

        self.users: EntityRepository[User] = repository_factory(User)
        self.reset_tokens: EntityRepository[PasswordResetToken] = repository_factory(PasswordResetToken)
        self.contact_messages: EntityRepository[ContactMessage] = repository_factory(ContactMessage)
        self.subscribers: EntityRepository[NewsletterSubscriber] = repository_factory(NewsletterSubscriber)
        self.services: EntityRepository[Service] = repository_factory(Service)
        self.testimonials: EntityRepository[Testimonial] = repository_factory(Testimonial)
        self.impact_metrics: EntityRepository[ImpactMetric] = repository_factory(ImpactMetric)
        self.partners: EntityRepository[Partner] = repository_factory(Partner)
        self.settings: EntityRepository[SiteSetting] = repository_factory(SiteSetting)
        self.impact_projects: EntityRepository[ImpactProject] = repository_factory(ImpactProject)
        self.timeline_events: EntityRepository[ImpactTimelineEvent] = repository_factory(ImpactTimelineEvent)
        self.blog_posts: EntityRepository[BlogPost] = repository_factory(BlogPost)
        self.case_studies: EntityRepository[CaseStudy] = repository_factory(CaseStudy)
        self.publications: EntityRepository[Publication] = repository_factory(Publication)
        self.faqs: EntityRepository[Faq] = repository_factory(Faq)
        self.feedback: EntityRepository[UserFeedback] = repository_factory(UserFeedback)
        self.error_reports: EntityRepository[ErrorReport] = repository_factory(ErrorReport)
        self.donations: EntityRepository[Donation] = repository_factory(Donation)
        self.subscriptions: EntityRepository[Subscription] = repository_factory(Subscription)
        self.proposals: EntityRepository[ProjectProposal] = repository_factory(ProjectProposal)
        self.activity_logs: EntityRepository[ActivityLog] = repository_factory(ActivityLog)

    def __repr__(self) -> str:
        return f"Storage(backend={self.backend})"

    async def close(self) -> None:
        """Release database connections (no-op for the in-memory backend)."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"Storage backend '{self.backend}' closed")

    # =====================================================================
    # Users
    # =====================================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.users.find_one(username=username)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.users.find_one(email=email)

    async def create_user(self, user: User) -> User:
        if not user.role:
            user.role = "user"
        return await self.users.create(user)

    async def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        return await self.users.update(user_id, changes)

    async def mark_free_consultation_used(self, user_id: int) -> Optional[User]:
        return await self.users.update(user_id, {"has_used_free_consultation": True})

    # =====================================================================
    # Password reset tokens
    # =====================================================================

    async def create_password_reset_token(self, user_id: int, ttl_minutes: int) -> PasswordResetToken:
        token = PasswordResetToken(
            user_id=user_id,
            token=generate_reset_token(),
            expires_at=utc_now() + timedelta(minutes=ttl_minutes),
            used=False,
        )
        return await self.reset_tokens.create(token)

    async def get_password_reset_token(self, token: str) -> Optional[PasswordResetToken]:
        return await self.reset_tokens.find_one(token=token)

    async def validate_password_reset_token(self, token: str) -> Optional[User]:
        """Return the token's user when the token exists, is unused and has not expired."""
        reset_token = await self.get_password_reset_token(token)
        if reset_token is None or not reset_token.is_valid():
            return None
        return await self.get_user(reset_token.user_id)

    async def mark_token_used(self, token_id: int) -> Optional[PasswordResetToken]:
        return await self.reset_tokens.update(token_id, {"used": True})

    # =====================================================================
    # Contact messages
    # =====================================================================

    async def list_contact_messages(self) -> List[ContactMessage]:
        return await self.contact_messages.list(order_by=NEWEST_FIRST, descending=True)

    async def get_contact_message(self, message_id: int) -> Optional[ContactMessage]:
        return await self.contact_messages.get(message_id)

    async def create_contact_message(self, message: ContactMessage) -> ContactMessage:
        message.is_read = False
        return await self.contact_messages.create(message)

    async def set_contact_message_read(self, message_id: int, is_read: bool) -> Optional[ContactMessage]:
        return await self.contact_messages.update(message_id, {"is_read": is_read})

    async def delete_contact_message(self, message_id: int) -> bool:
        return await self.contact_messages.delete(message_id)

    # =====================================================================
    # Newsletter subscribers
    # =====================================================================

    async def list_newsletter_subscribers(self) -> List[NewsletterSubscriber]:
        return await self.subscribers.list(order_by=NEWEST_FIRST, descending=True)

    async def get_newsletter_subscriber(self, subscriber_id: int) -> Optional[NewsletterSubscriber]:
        return await self.subscribers.get(subscriber_id)

    async def get_newsletter_subscriber_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        return await self.subscribers.find_one(email=email)

    async def create_newsletter_subscriber(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        subscriber.subscription_tier = subscriber.subscription_tier or "basic"
        subscriber.interests = subscriber.interests or []
        return await self.subscribers.create(subscriber)

    async def delete_newsletter_subscriber(self, subscriber_id: int) -> bool:
        return await self.subscribers.delete(subscriber_id)

    # =====================================================================
    # Impact projects and timeline
    # =====================================================================

    async def list_impact_projects(
        self, featured: Optional[bool] = None, category: Optional[str] = None
    ) -> List[ImpactProject]:
        return await self.impact_projects.list(filters={"featured": featured, "category": category})

    async def list_timeline_events(self, project_id: Optional[int] = None) -> List[ImpactTimelineEvent]:
        return await self.timeline_events.list(filters={"project_id": project_id}, order_by=("event_date", "id"))

    # =====================================================================
    # Blog, case studies, publications, FAQs
    # =====================================================================

    async def list_blog_posts(self, published: Optional[bool] = None) -> List[BlogPost]:
        """Posts sorted by publish date (falling back to creation date), newest first."""
        posts = await self.blog_posts.list(filters={"published": published})
        return sorted(posts, key=lambda post: (post.sort_date, post.id), reverse=True)

    async def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        return await self.blog_posts.find_one(slug=slug)

    async def list_case_studies(self, published: Optional[bool] = None) -> List[CaseStudy]:
        return await self.case_studies.list(filters={"published": published}, order_by=NEWEST_FIRST, descending=True)

    async def get_case_study_by_slug(self, slug: str) -> Optional[CaseStudy]:
        return await self.case_studies.find_one(slug=slug)

    async def list_publications(self, published: Optional[bool] = None) -> List[Publication]:
        """Publications sorted by publication date, newest first; undated ones last."""
        publications = await self.publications.list(filters={"published": published})
        dated = sorted(
            (p for p in publications if p.publication_date is not None),
            key=lambda p: (p.publication_date, p.id),
            reverse=True,
        )
        undated = [p for p in publications if p.publication_date is None]
        return dated + undated

    async def list_faqs(self, category: Optional[str] = None) -> List[Faq]:
        return await self.faqs.list(filters={"category": category}, order_by=("display_order", "id"))

    # =====================================================================
    # Settings
    # =====================================================================

    async def list_settings(self) -> List[SiteSetting]:
        return await self.settings.list(order_by=("section", "key"))

    async def get_setting_by_key(self, section: str, key: str) -> Optional[SiteSetting]:
        return await self.settings.find_one(section=section, key=key)

    async def upsert_setting(self, section: str, key: str, value: Any) -> Tuple[SiteSetting, bool]:
        """Create or replace a setting. Returns the setting and whether it was created."""
        existing = await self.get_setting_by_key(section, key)
        if existing is not None:
            updated = await self.settings.update(existing.id, {"value": value})
            return updated, False
        created = await self.settings.create(SiteSetting(section=section, key=key, value=value))
        return created, True

    # =====================================================================
    # Feedback and error reports
    # =====================================================================

    async def create_feedback(self, feedback: UserFeedback) -> UserFeedback:
        return await self.feedback.create(feedback)

    async def list_feedback(
        self, resolved: Optional[bool] = None, category: Optional[str] = None
    ) -> List[UserFeedback]:
        return await self.feedback.list(
            filters={"resolved": resolved, "category": category}, order_by=NEWEST_FIRST, descending=True
        )

    async def resolve_feedback(
        self, feedback_id: int, resolved: bool, admin_notes: Optional[str] = None
    ) -> Optional[UserFeedback]:
        changes: Dict[str, Any] = {"resolved": resolved}
        if admin_notes is not None:
            changes["admin_notes"] = admin_notes
        return await self.feedback.update(feedback_id, changes)

    async def create_error_report(self, report: ErrorReport) -> ErrorReport:
        report.status = "pending"
        report.reported_at = utc_now()
        return await self.error_reports.create(report)

    async def list_error_reports(self, status: Optional[str] = None) -> List[ErrorReport]:
        return await self.error_reports.list(
            filters={"status": status}, order_by=("reported_at", "id"), descending=True
        )

    async def update_error_report_status(
        self, report_id: int, status: str, admin_notes: Optional[str] = None
    ) -> Optional[ErrorReport]:
        changes: Dict[str, Any] = {"status": status}
        if admin_notes is not None:
            changes["admin_notes"] = admin_notes
        return await self.error_reports.update(report_id, changes)

    # =====================================================================
    # Donations and subscriptions
    # =====================================================================

    async def create_donation(self, donation: Donation) -> Donation:
        return await self.donations.create(donation)

    async def list_donations(self) -> List[Donation]:
        return await self.donations.list(order_by=NEWEST_FIRST, descending=True)

    async def list_donations_for_user(self, user_id: int) -> List[Donation]:
        return await self.donations.list(filters={"user_id": user_id}, order_by=NEWEST_FIRST, descending=True)

    async def get_donation_by_session_id(self, session_id: str) -> Optional[Donation]:
        return await self.donations.find_one(stripe_session_id=session_id)

    async def create_subscription(self, subscription: Subscription) -> Subscription:
        return await self.subscriptions.create(subscription)

    async def list_subscriptions(self) -> List[Subscription]:
        return await self.subscriptions.list(order_by=NEWEST_FIRST, descending=True)

    async def get_subscription(self, subscription_id: int) -> Optional[Subscription]:
        return await self.subscriptions.get(subscription_id)

    async def list_subscriptions_for_user(self, user_id: int) -> List[Subscription]:
        return await self.subscriptions.list(filters={"user_id": user_id}, order_by=NEWEST_FIRST, descending=True)

    async def get_subscription_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Subscription]:
        return await self.subscriptions.find_one(stripe_subscription_id=stripe_subscription_id)

    async def update_subscription_status(self, subscription_id: int, status: str) -> Optional[Subscription]:
        return await self.subscriptions.update(subscription_id, {"status": status})

    async def cancel_subscription(self, subscription_id: int) -> Optional[Subscription]:
        return await self.subscriptions.update(subscription_id, {"status": "canceled", "canceled_at": utc_now()})

    async def summarize_giving(self, user_id: int) -> Dict[str, Any]:
        """Totals for the donor dashboard."""
        donations = await self.list_donations_for_user(user_id)
        subscriptions = await self.list_subscriptions_for_user(user_id)
        completed = [d for d in donations if d.status == "completed"]
        active = [s for s in subscriptions if s.status == "active"]
        monthly = sum(s.amount * _MONTHLY_FACTOR.get(s.interval, 1.0) for s in active)
        return {
            "total_donated": round(sum(d.amount for d in completed), 2),
            "donation_count": len(completed),
            "active_subscriptions": len(active),
            "monthly_commitment": round(monthly, 2),
        }

    # =====================================================================
    # Project proposals and activity logs
    # =====================================================================

    async def create_project_proposal(self, proposal: ProjectProposal) -> ProjectProposal:
        proposal.status = "pending"
        return await self.proposals.create(proposal)

    async def list_project_proposals(self, user_id: Optional[int] = None) -> List[ProjectProposal]:
        return await self.proposals.list(filters={"user_id": user_id}, order_by=NEWEST_FIRST, descending=True)

    async def update_proposal_status(
        self, proposal_id: int, status: str, admin_notes: Optional[str] = None
    ) -> Optional[ProjectProposal]:
        changes: Dict[str, Any] = {"status": status}
        if admin_notes is not None:
            changes["admin_notes"] = admin_notes
        return await self.proposals.update(proposal_id, changes)

    async def log_activity(
        self,
        user_id: Optional[int],
        action: str,
        entity_type: str,
        entity_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> ActivityLog:
        return await self.activity_logs.create(
            ActivityLog(user_id=user_id, action=action, entity_type=entity_type, entity_id=entity_id, details=details)
        )

    async def list_activity_logs(self, limit: Optional[int] = None) -> List[ActivityLog]:
        return await self.activity_logs.list(order_by=NEWEST_FIRST, descending=True, limit=limit)


def build_memory_storage() -> Storage:
    """Build a ``Storage`` backed by in-process dictionaries."""
    return Storage(InMemoryRepository, backend="memory")


def build_sql_storage(
    *, session_factory: async_sessionmaker[AsyncSession], engine: Optional[AsyncEngine] = None, backend: str = "database"
) -> Storage:
    """Build a ``Storage`` backed by SQL repositories sharing one session factory.

    Args:
        session_factory: Async session factory for creating sessions
        engine: Engine to dispose on ``close``
        backend: Label used in logs (e.g. ``postgres``, ``mssql``)
    """
    return Storage(lambda model: SqlRepository(session_factory, model), backend=backend, engine=engine)
