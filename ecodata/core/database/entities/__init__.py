"""
Database entity models.

One module per business area; importing this package registers every table
on ``Base.metadata``.
"""

from .blog import BlogPost
from .content import ImpactMetric, Partner, Service, SiteSetting, Testimonial
from .feedback import ErrorReport, UserFeedback
from .impact import ImpactProject, ImpactTimelineEvent
from .inbox import ContactMessage, NewsletterSubscriber
from .payments import Donation, Subscription
from .proposals import ActivityLog, ProjectProposal
from .resources import CaseStudy, Faq, Publication
from .users import PasswordResetToken, User

__all__ = [
    "ActivityLog",
    "BlogPost",
    "CaseStudy",
    "ContactMessage",
    "Donation",
    "ErrorReport",
    "Faq",
    "ImpactMetric",
    "ImpactProject",
    "ImpactTimelineEvent",
    "NewsletterSubscriber",
    "Partner",
    "PasswordResetToken",
    "ProjectProposal",
    "Publication",
    "Service",
    "SiteSetting",
    "Subscription",
    "Testimonial",
    "User",
    "UserFeedback",
]
