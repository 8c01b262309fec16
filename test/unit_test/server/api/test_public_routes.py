from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient

from ecodata.core.database.entities import (
    BlogPost,
    CaseStudy,
    Faq,
    ImpactProject,
    ImpactTimelineEvent,
    Publication,
    SiteSetting,
)
from ecodata.core.storage import Storage

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def project(storage: Storage) -> ImpactProject:
    project = await storage.impact_projects.create(
        ImpactProject(title="River sensors", description="Water quality sensors", category="environmental", featured=True)
    )
    await storage.impact_projects.create(
        ImpactProject(title="Digital skills", description="Workshops", category="social")
    )
    return project


class TestSeededContent:
    async def test_services(self, client: AsyncClient):
        response = await client.get("/api/services")

        assert response.status_code == 200
        assert [s["title"] for s in response.json()][:2] == ["Data Analytics", "Environmental Research"]

    async def test_testimonials_and_metrics(self, client: AsyncClient):
        testimonials = (await client.get("/api/testimonials")).json()
        metrics = (await client.get("/api/impact-metrics")).json()

        assert len(testimonials) == 3
        assert "imageUrl" in testimonials[0]
        assert {m["category"] for m in metrics} == {"environmental", "social", "efficiency"}

    async def test_partners(self, client: AsyncClient):
        partners = (await client.get("/api/partners")).json()

        assert len(partners) == 6
        assert partners[0]["websiteUrl"].startswith("https://")


class TestImpact:
    async def test_filters(self, client: AsyncClient, project: ImpactProject):
        assert len((await client.get("/api/impact-projects")).json()) == 2
        featured = (await client.get("/api/impact-projects", params={"featured": "true"})).json()
        social = (await client.get("/api/impact-projects", params={"category": "social"})).json()

        assert [p["title"] for p in featured] == ["River sensors"]
        assert [p["title"] for p in social] == ["Digital skills"]

    async def test_get_project(self, client: AsyncClient, project: ImpactProject):
        response = await client.get(f"/api/impact-projects/{project.id}")

        assert response.status_code == 200
        assert response.json()["featured"] is True

    async def test_missing_project(self, client: AsyncClient):
        response = await client.get("/api/impact-projects/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Impact project not found"}

    async def test_timeline_sorted_by_date(self, client: AsyncClient, storage: Storage, project: ImpactProject):
        for title, day in (("Installed", 20), ("Planned", 1)):
            await storage.timeline_events.create(
                ImpactTimelineEvent(
                    project_id=project.id, title=title, description=title, event_date=datetime(2024, 3, day)
                )
            )

        response = await client.get("/api/impact-timeline-events", params={"projectId": project.id})

        assert [e["title"] for e in response.json()] == ["Planned", "Installed"]
        assert (await client.get("/api/impact-timeline-events", params={"projectId": 999})).json() == []

    async def test_missing_timeline_event(self, client: AsyncClient):
        response = await client.get("/api/impact-timeline-events/42")

        assert response.status_code == 404
        assert response.json() == {"message": "Timeline event not found"}

    async def test_funding_goals(self, client: AsyncClient):
        goals = (await client.get("/api/funding-goals")).json()

        assert [g["id"] for g in goals] == ["reforestation", "water-quality", "community-impact", "carbon-tracking"]


class TestBlog:
    @pytest_asyncio.fixture(autouse=True)
    async def posts(self, storage: Storage):
        for slug, published, publish_date in (
            ("older", True, datetime(2024, 1, 1)),
            ("newer", True, datetime(2024, 6, 1)),
            ("draft", False, None),
        ):
            await storage.blog_posts.create(
                BlogPost(
                    title=slug.title(),
                    slug=slug,
                    content="Body",
                    excerpt="Excerpt",
                    category="news",
                    published=published,
                    publish_date=publish_date,
                    created_at=datetime(2023, 1, 1),
                )
            )

    async def test_published_posts_newest_first(self, client: AsyncClient):
        response = await client.get("/api/blog/posts", params={"published": "true"})

        assert [p["slug"] for p in response.json()] == ["newer", "older"]

    async def test_all_posts_without_filter(self, client: AsyncClient):
        response = await client.get("/api/blog/posts")

        assert len(response.json()) == 3

    async def test_legacy_path(self, client: AsyncClient):
        response = await client.get("/api/blog-posts/newer")

        assert response.status_code == 200
        assert response.json()["publishDate"].startswith("2024-06-01")

    async def test_missing_slug(self, client: AsyncClient):
        response = await client.get("/api/blog/posts/nope")

        assert response.status_code == 404
        assert response.json() == {"message": "Blog post not found"}


class TestResources:
    async def test_case_study_by_slug(self, client: AsyncClient, storage: Storage):
        await storage.case_studies.create(
            CaseStudy(slug="clean-air", title="Clean air", summary="S", content="C", published=True)
        )

        assert (await client.get("/api/case-studies/clean-air")).json()["title"] == "Clean air"
        assert (await client.get("/api/case-studies/missing")).status_code == 404

    async def test_publications_undated_last(self, client: AsyncClient, storage: Storage):
        for title, date in (("Undated", None), ("Old", datetime(2022, 1, 1)), ("New", datetime(2024, 1, 1))):
            await storage.publications.create(
                Publication(title=title, summary="S", publication_date=date, published=True)
            )

        titles = [p["title"] for p in (await client.get("/api/publications")).json()]

        assert titles == ["New", "Old", "Undated"]

    async def test_faqs_ordered_and_filtered(self, client: AsyncClient, storage: Storage):
        await storage.faqs.create(Faq(question="Second?", answer="A", category="donations", display_order=2))
        await storage.faqs.create(Faq(question="First?", answer="A", category="donations", display_order=1))
        await storage.faqs.create(Faq(question="Other?", answer="A", category="general"))

        response = await client.get("/api/faqs", params={"category": "donations"})

        assert [f["question"] for f in response.json()] == ["First?", "Second?"]


class TestSettings:
    async def test_get_setting(self, client: AsyncClient, storage: Storage):
        await storage.settings.create(SiteSetting(section="contact", key="phone", value="01234 567890"))

        response = await client.get("/api/settings/contact/phone")

        assert response.status_code == 200
        assert response.json()["value"] == "01234 567890"

    async def test_missing_setting(self, client: AsyncClient):
        response = await client.get("/api/settings/contact/fax")

        assert response.status_code == 404
        assert response.json() == {"message": "Setting not found"}
