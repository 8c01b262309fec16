"""
Admin CMS resources.

Registers the generic CRUD endpoints for every editable content table, with
the extra write checks some tables need (unique slugs, existing parent
project, default blog author).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter

from ecodata.core.database.entities import (
    BlogPost,
    CaseStudy,
    Faq,
    ImpactMetric,
    ImpactProject,
    ImpactTimelineEvent,
    Partner,
    Publication,
    Service,
    Testimonial,
)
from ecodata.core.exceptions import BadRequestError, ConflictError
from ecodata.core.models.io import content, impact, resources
from ecodata.core.models.io.blog import BlogPostCreate, BlogPostRead, BlogPostUpdate
from ecodata.core.security import TokenClaims
from ecodata.core.storage import Storage

from .crud import CrudResource, build_crud_router


def unique_slug(repository: str, label: str):
    """Write check rejecting a slug already used by another row of the table."""

    async def check(storage: Storage, data: Dict[str, Any], admin: TokenClaims, entity_id: Optional[int]) -> None:
        slug = data.get("slug")
        if slug is None:
            return
        existing = await getattr(storage, repository).find_one(slug=slug)
        if existing is not None and existing.id != entity_id:
            raise ConflictError(f"{label} with this slug already exists")

    return check


_check_blog_slug = unique_slug("blog_posts", "A blog post")


async def _prepare_blog_post(storage: Storage, data: Dict[str, Any], admin: TokenClaims, entity_id: Optional[int]) -> None:
    await _check_blog_slug(storage, data, admin, entity_id)
    if entity_id is None and data.get("author_id") is None:
        data["author_id"] = admin.user_id


async def _check_project_exists(
    storage: Storage, data: Dict[str, Any], admin: TokenClaims, entity_id: Optional[int]
) -> None:
    project_id = data.get("project_id")
    if project_id is not None and await storage.impact_projects.get(project_id) is None:
        raise BadRequestError("Impact project not found")


async def _all_blog_posts(storage: Storage) -> List[BlogPost]:
    return await storage.list_blog_posts()


async def _all_case_studies(storage: Storage) -> List[CaseStudy]:
    return await storage.list_case_studies()


async def _all_publications(storage: Storage) -> List[Publication]:
    return await storage.list_publications()


async def _all_faqs(storage: Storage) -> List[Faq]:
    return await storage.list_faqs()


async def _all_timeline_events(storage: Storage) -> List[ImpactTimelineEvent]:
    return await storage.list_timeline_events()


RESOURCES: List[CrudResource] = [
    CrudResource(
        path="/services",
        label="Service",
        plural="Services",
        entity_type="service",
        repository="services",
        entity=Service,
        create_model=content.ServiceCreate,
        update_model=content.ServiceUpdate,
        read_model=content.ServiceRead,
    ),
    CrudResource(
        path="/testimonials",
        label="Testimonial",
        plural="Testimonials",
        entity_type="testimonial",
        repository="testimonials",
        entity=Testimonial,
        create_model=content.TestimonialCreate,
        update_model=content.TestimonialUpdate,
        read_model=content.TestimonialRead,
    ),
    CrudResource(
        path="/impact-metrics",
        label="Impact metric",
        plural="Impact Metrics",
        entity_type="impact_metric",
        repository="impact_metrics",
        entity=ImpactMetric,
        create_model=content.ImpactMetricCreate,
        update_model=content.ImpactMetricUpdate,
        read_model=content.ImpactMetricRead,
    ),
    CrudResource(
        path="/partners",
        label="Partner",
        plural="Partners",
        entity_type="partner",
        repository="partners",
        entity=Partner,
        create_model=content.PartnerCreate,
        update_model=content.PartnerUpdate,
        read_model=content.PartnerRead,
    ),
    CrudResource(
        path="/impact-projects",
        label="Impact project",
        plural="Impact Projects",
        entity_type="impact_project",
        repository="impact_projects",
        entity=ImpactProject,
        create_model=impact.ImpactProjectCreate,
        update_model=impact.ImpactProjectUpdate,
        read_model=impact.ImpactProjectRead,
    ),
    CrudResource(
        path="/impact-timeline-events",
        label="Timeline event",
        plural="Timeline Events",
        entity_type="impact_timeline_event",
        repository="timeline_events",
        entity=ImpactTimelineEvent,
        create_model=impact.ImpactTimelineEventCreate,
        update_model=impact.ImpactTimelineEventUpdate,
        read_model=impact.ImpactTimelineEventRead,
        before_write=_check_project_exists,
        lister=_all_timeline_events,
    ),
    CrudResource(
        path="/blog/posts",
        label="Blog post",
        plural="Blog Posts",
        entity_type="blog_post",
        repository="blog_posts",
        entity=BlogPost,
        create_model=BlogPostCreate,
        update_model=BlogPostUpdate,
        read_model=BlogPostRead,
        before_write=_prepare_blog_post,
        lister=_all_blog_posts,
    ),
    CrudResource(
        path="/case-studies",
        label="Case study",
        plural="Case Studies",
        entity_type="case_study",
        repository="case_studies",
        entity=CaseStudy,
        create_model=resources.CaseStudyCreate,
        update_model=resources.CaseStudyUpdate,
        read_model=resources.CaseStudyRead,
        before_write=unique_slug("case_studies", "A case study"),
        lister=_all_case_studies,
    ),
    CrudResource(
        path="/publications",
        label="Publication",
        plural="Publications",
        entity_type="publication",
        repository="publications",
        entity=Publication,
        create_model=resources.PublicationCreate,
        update_model=resources.PublicationUpdate,
        read_model=resources.PublicationRead,
        lister=_all_publications,
    ),
    CrudResource(
        path="/faqs",
        label="FAQ",
        plural="FAQs",
        entity_type="faq",
        repository="faqs",
        entity=Faq,
        create_model=resources.FaqCreate,
        update_model=resources.FaqUpdate,
        read_model=resources.FaqRead,
        lister=_all_faqs,
    ),
]

router = APIRouter()
for _resource in RESOURCES:
    router.include_router(build_crud_router(_resource))
