"""
Public Content Endpoints.

Read-only endpoints backing the public website pages: services,
testimonials, impact data, funding goals, blog, resources, FAQs and
site settings.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from ecodata.core.exceptions import NotFoundError
from ecodata.core.models.io.blog import BlogPostRead
from ecodata.core.models.io.content import (
    ImpactMetricRead,
    PartnerRead,
    ServiceRead,
    SettingRead,
    TestimonialRead,
)
from ecodata.core.models.io.funding import FundingGoal
from ecodata.core.models.io.impact import ImpactProjectRead, ImpactTimelineEventRead
from ecodata.core.models.io.resources import CaseStudyRead, FaqRead, PublicationRead
from ecodata.server.services.funding_goals import list_funding_goals

from .deps import StorageDep

router = APIRouter()


@router.get("/services", response_model=List[ServiceRead], summary="List Services")
async def list_services(storage: StorageDep):
    return await storage.services.list()


@router.get("/testimonials", response_model=List[TestimonialRead], summary="List Testimonials")
async def list_testimonials(storage: StorageDep):
    return await storage.testimonials.list()


@router.get("/impact-metrics", response_model=List[ImpactMetricRead], summary="List Impact Metrics")
async def list_impact_metrics(storage: StorageDep):
    return await storage.impact_metrics.list()


@router.get("/partners", response_model=List[PartnerRead], summary="List Partners")
async def list_partners(storage: StorageDep):
    return await storage.partners.list()


# =====================================================================
# Impact map
# =====================================================================


@router.get(
    "/impact-projects",
    response_model=List[ImpactProjectRead],
    summary="List Impact Projects",
    description="Projects shown on the impact map, optionally only featured ones or one category.",
)
async def list_impact_projects(
    storage: StorageDep,
    featured: Optional[bool] = None,
    category: Optional[str] = None,
):
    return await storage.list_impact_projects(featured=featured, category=category)


@router.get(
    "/impact-projects/{project_id}",
    response_model=ImpactProjectRead,
    summary="Get Impact Project",
    responses={404: {"description": "Impact project not found"}},
)
async def get_impact_project(project_id: int, storage: StorageDep):
    project = await storage.impact_projects.get(project_id)
    if project is None:
        raise NotFoundError("Impact project not found")
    return project


@router.get(
    "/impact-timeline-events",
    response_model=List[ImpactTimelineEventRead],
    summary="List Impact Timeline Events",
    description="Timeline events ordered by date, optionally for one project.",
)
async def list_impact_timeline_events(
    storage: StorageDep,
    project_id: Optional[int] = Query(default=None, alias="projectId"),
):
    return await storage.list_timeline_events(project_id=project_id)


@router.get(
    "/impact-timeline-events/{event_id}",
    response_model=ImpactTimelineEventRead,
    summary="Get Impact Timeline Event",
    responses={404: {"description": "Timeline event not found"}},
)
async def get_impact_timeline_event(event_id: int, storage: StorageDep):
    event = await storage.timeline_events.get(event_id)
    if event is None:
        raise NotFoundError("Timeline event not found")
    return event


@router.get(
    "/funding-goals",
    response_model=List[FundingGoal],
    summary="List Funding Goals",
    description="Current fundraising campaigns with their milestones.",
)
async def get_funding_goals():
    return list_funding_goals()


# =====================================================================
# Blog
# =====================================================================


@router.get(
    "/blog/posts",
    response_model=List[BlogPostRead],
    summary="List Blog Posts",
    description="Blog posts, newest first. Pass published=true or published=false to filter; all posts otherwise.",
)
@router.get("/blog-posts", response_model=List[BlogPostRead], include_in_schema=False)
async def list_blog_posts(storage: StorageDep, published: Optional[bool] = None):
    return await storage.list_blog_posts(published=published)


@router.get(
    "/blog/posts/{slug}",
    response_model=BlogPostRead,
    summary="Get Blog Post",
    responses={404: {"description": "Blog post not found"}},
)
@router.get("/blog-posts/{slug}", response_model=BlogPostRead, include_in_schema=False)
async def get_blog_post(slug: str, storage: StorageDep):
    post = await storage.get_blog_post_by_slug(slug)
    if post is None:
        raise NotFoundError("Blog post not found")
    return post


# =====================================================================
# Resources
# =====================================================================


@router.get("/case-studies", response_model=List[CaseStudyRead], summary="List Case Studies")
async def list_case_studies(storage: StorageDep, published: Optional[bool] = None):
    return await storage.list_case_studies(published=published)


@router.get(
    "/case-studies/{slug}",
    response_model=CaseStudyRead,
    summary="Get Case Study",
    responses={404: {"description": "Case study not found"}},
)
async def get_case_study(slug: str, storage: StorageDep):
    case_study = await storage.get_case_study_by_slug(slug)
    if case_study is None:
        raise NotFoundError("Case study not found")
    return case_study


@router.get("/publications", response_model=List[PublicationRead], summary="List Publications")
async def list_publications(storage: StorageDep, published: Optional[bool] = None):
    return await storage.list_publications(published=published)


@router.get(
    "/publications/{publication_id}",
    response_model=PublicationRead,
    summary="Get Publication",
    responses={404: {"description": "Publication not found"}},
)
async def get_publication(publication_id: int, storage: StorageDep):
    publication = await storage.publications.get(publication_id)
    if publication is None:
        raise NotFoundError("Publication not found")
    return publication


@router.get("/faqs", response_model=List[FaqRead], summary="List FAQs")
async def list_faqs(storage: StorageDep, category: Optional[str] = None):
    return await storage.list_faqs(category=category)


@router.get(
    "/settings/{section}/{key}",
    response_model=SettingRead,
    summary="Get Site Setting",
    responses={404: {"description": "Setting not found"}},
)
async def get_setting(section: str, key: str, storage: StorageDep):
    setting = await storage.get_setting_by_key(section, key)
    if setting is None:
        raise NotFoundError("Setting not found")
    return setting
