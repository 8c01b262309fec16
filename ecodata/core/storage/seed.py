"""
Initial data for a fresh store.

The admin account is always ensured. Partner logos are seeded whenever the
partners table is empty; the remaining demo content (services, testimonials,
impact metrics) only in demo mode.
"""

from typing import Any, Dict, List

from ecodata.core.logging_config import get_logger
from ecodata.core.security import hash_password
from ecodata.server.core.config import AuthConfig

from ..database.entities import ImpactMetric, Partner, Service, Testimonial, User
from .bundle import Storage

logger = get_logger(__name__)

_WIKIMEDIA = "https://upload.wikimedia.org/wikipedia/commons/thumb"

PARTNERS: List[Dict[str, Any]] = [
    {
        "name": "Google",
        "logo_url": f"{_WIKIMEDIA}/5/53/Google_%22G%22_Logo.svg/512px-Google_%22G%22_Logo.svg.png",
        "website_url": "https://www.google.com",
    },
    {
        "name": "Microsoft",
        "logo_url": f"{_WIKIMEDIA}/4/44/Microsoft_logo.svg/512px-Microsoft_logo.svg.png",
        "website_url": "https://www.microsoft.com",
    },
    {
        "name": "IBM",
        "logo_url": f"{_WIKIMEDIA}/5/51/IBM_logo.svg/512px-IBM_logo.svg.png",
        "website_url": "https://www.ibm.com",
    },
    {
        "name": "AWS",
        "logo_url": f"{_WIKIMEDIA}/9/93/Amazon_Web_Services_Logo.svg/512px-Amazon_Web_Services_Logo.svg.png",
        "website_url": "https://aws.amazon.com",
    },
    {
        "name": "Intel",
        "logo_url": f"{_WIKIMEDIA}/7/7d/Intel_logo_%282006-2020%29.svg/512px-Intel_logo_%282006-2020%29.svg.png",
        "website_url": "https://www.intel.com",
    },
    {
        "name": "NVIDIA",
        "logo_url": f"{_WIKIMEDIA}/2/21/Nvidia_logo.svg/512px-Nvidia_logo.svg.png",
        "website_url": "https://www.nvidia.com",
    },
]

SERVICES: List[Dict[str, Any]] = [
    {
        "title": "Data Analytics",
        "description": "Transform your raw data into actionable insights with our advanced analytics and visualization services.",
        "icon": "fa-chart-line",
    },
    {
        "title": "Environmental Research",
        "description": "Leverage data-driven environmental studies to understand impact and drive sustainable policy decisions.",
        "icon": "fa-globe-americas",
    },
    {
        "title": "IT Consultancy",
        "description": "Optimize your technology infrastructure with sustainable and efficient IT solutions and strategies.",
        "icon": "fa-server",
    },
    {
        "title": "Social Impact Assessment",
        "description": "Understand the social implications of your projects with our comprehensive impact assessment methodology.",
        "icon": "fa-users",
    },
    {
        "title": "Project Management",
        "description": "Execute complex data and IT projects with our experienced project management team.",
        "icon": "fa-project-diagram",
    },
    {
        "title": "Training & Workshops",
        "description": "Empower your team with data literacy and environmental assessment skills through our tailored training programs.",
        "icon": "fa-chalkboard-teacher",
    },
]

TESTIMONIALS: List[Dict[str, Any]] = [
    {
        "name": "Sarah Johnson",
        "position": "Director",
        "company": "GreenTech Solutions",
        "testimonial": "ECODATA's analytics platform helped us reduce our carbon footprint by 28% in just one year. Their team's expertise in environmental data is unmatched.",
        "rating": 5,
        "image_url": "https://randomuser.me/api/portraits/women/45.jpg",
    },
    {
        "name": "Michael Torres",
        "position": "CTO",
        "company": "Sustainable City Initiative",
        "testimonial": "Working with ECODATA transformed how we approach urban planning. Their data insights helped us design smarter, greener public spaces.",
        "rating": 5,
        "image_url": "https://randomuser.me/api/portraits/men/32.jpg",
    },
    {
        "name": "Priya Mehta",
        "position": "Program Director",
        "company": "Community Climate Fund",
        "testimonial": "ECODATA's social impact analysis helped us secure funding by clearly demonstrating the outcomes of our community initiatives.",
        "rating": 5,
        "image_url": "https://randomuser.me/api/portraits/women/68.jpg",
    },
]

IMPACT_METRICS: List[Dict[str, Any]] = [
    {
        "title": "Carbon Reduction",
        "value": "247 tonnes",
        "description": "CO₂ equivalent reduction achieved through our client projects since 2020.",
        "icon": "fa-chart-line",
        "category": "environmental",
    },
    {
        "title": "Community Engagement",
        "value": "3,500+ people",
        "description": "Community members engaged through workshops, training, and volunteer initiatives.",
        "icon": "fa-users",
        "category": "social",
    },
    {
        "title": "Resource Efficiency",
        "value": "32% average",
        "description": "Improvement in resource utilization efficiency across client operations.",
        "icon": "fa-recycle",
        "category": "efficiency",
    },
]


async def ensure_admin_user(storage: Storage, auth: AuthConfig) -> User:
    """Create the configured admin account unless a user with that name exists."""
    existing = await storage.get_user_by_username(auth.admin_username)
    if existing is not None:
        return existing
    admin = await storage.create_user(
        User(
            username=auth.admin_username,
            email=auth.admin_email,
            role="admin",
            hashed_password=hash_password(auth.admin_password, rounds=auth.bcrypt_rounds),
        )
    )
    logger.info(f"Admin user '{admin.username}' created")
    return admin


async def seed_partners(storage: Storage) -> int:
    if await storage.partners.count() > 0:
        return 0
    for row in PARTNERS:
        await storage.partners.create(Partner(category="technology", **row))
    logger.info(f"Seeded {len(PARTNERS)} partners")
    return len(PARTNERS)


async def seed_demo_content(storage: Storage) -> Dict[str, int]:
    """Insert demo services, testimonials and impact metrics into empty tables."""
    seeded: Dict[str, int] = {}
    for label, repository, model, rows in (
        ("services", storage.services, Service, SERVICES),
        ("testimonials", storage.testimonials, Testimonial, TESTIMONIALS),
        ("impact_metrics", storage.impact_metrics, ImpactMetric, IMPACT_METRICS),
    ):
        if await repository.count() > 0:
            continue
        for row in rows:
            await repository.create(model(**row))
        seeded[label] = len(rows)
    if seeded:
        logger.info(f"Seeded demo content: {seeded}")
    return seeded


async def seed_storage(storage: Storage, auth: AuthConfig, *, demo: bool) -> None:
    await ensure_admin_user(storage, auth)
    await seed_partners(storage)
    if demo:
        await seed_demo_content(storage)
