import pytest
from httpx import AsyncClient

from ecodata.core.database.entities import Donation, Subscription
from ecodata.core.security import create_access_token
from ecodata.core.storage import Storage

pytestmark = pytest.mark.asyncio

PROPOSAL_BODY = {
    "title": "Community air monitors",
    "description": "Low-cost air quality monitors for three primary schools.",
    "category": "environmental",
    "fundingNeeded": 4500,
    "location": "Leeds",
}


class TestAuthentication:
    async def test_missing_token_is_401(self, client: AsyncClient):
        response = await client.get("/api/user/profile")

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required"}

    async def test_bad_token_is_403(self, client: AsyncClient):
        response = await client.get("/api/user/profile", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 403
        assert response.json() == {"message": "Invalid or expired token"}

    async def test_deleted_account_is_404(self, client: AsyncClient):
        headers = {"Authorization": f"Bearer {create_access_token(999, 'ghost', 'user')}"}

        response = await client.get("/api/user/profile", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestProfile:
    async def test_profile_hides_password(self, client: AsyncClient, user_headers: dict):
        response = await client.get("/api/user/profile", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "donor"
        assert data["firstName"] == "Dana"
        assert data["hasUsedFreeConsultation"] is False
        assert "hashedPassword" not in data

    async def test_partial_update(self, client: AsyncClient, user_headers: dict):
        response = await client.put(
            "/api/user/profile",
            json={"bio": "Tree hugger", "interests": ["forests"], "firstName": None, "role": "admin"},
            headers=user_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Tree hugger"
        assert data["interests"] == ["forests"]
        assert data["firstName"] == "Dana"
        assert data["role"] == "user"

    async def test_email_taken_by_another_account(self, client: AsyncClient, user_headers: dict):
        response = await client.put(
            "/api/user/profile", json={"email": "admin@ecodatacic.org"}, headers=user_headers
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Email already registered"}


class TestGiving:
    async def test_history_and_summary(self, client: AsyncClient, storage: Storage, user_headers: dict, donor):
        await storage.create_donation(Donation(amount=20, currency="gbp", status="completed", user_id=donor.id))
        await storage.create_donation(Donation(amount=5, currency="gbp", status="pending", user_id=donor.id))
        await storage.create_donation(Donation(amount=50, currency="gbp", status="completed"))
        await storage.create_subscription(
            Subscription(amount=10, currency="gbp", interval="month", status="active", user_id=donor.id)
        )
        await storage.create_subscription(
            Subscription(amount=120, currency="gbp", interval="year", status="active", user_id=donor.id)
        )
        await storage.create_subscription(
            Subscription(amount=99, currency="gbp", interval="month", status="canceled", user_id=donor.id)
        )

        donations = (await client.get("/api/user/donations", headers=user_headers)).json()
        subscriptions = (await client.get("/api/user/subscriptions", headers=user_headers)).json()
        summary = (await client.get("/api/user/summary", headers=user_headers)).json()

        assert len(donations) == 2
        assert len(subscriptions) == 3
        assert summary == {
            "totalDonated": 20.0,
            "donationCount": 1,
            "activeSubscriptions": 2,
            "monthlyCommitment": 20.0,
            "hasUsedFreeConsultation": False,
        }


class TestConsultation:
    async def test_free_consultation_is_one_off(self, client: AsyncClient, user_headers: dict):
        first = await client.post("/api/user/consultation", headers=user_headers)

        assert first.status_code == 200
        assert first.json() == {
            "message": "Free consultation usage marked successfully",
            "hasUsedFreeConsultation": True,
        }

        second = await client.post("/api/user/consultation", headers=user_headers)

        assert second.status_code == 400
        assert second.json() == {
            "message": "User has already used their free consultation",
            "hasUsedFreeConsultation": True,
        }


class TestProposals:
    async def test_submit_and_list(self, client: AsyncClient, storage: Storage, user_headers: dict, donor):
        response = await client.post(
            "/api/user/proposals", json={**PROPOSAL_BODY, "status": "approved"}, headers=user_headers
        )

        assert response.status_code == 201
        proposal = response.json()
        assert proposal["status"] == "pending"
        assert proposal["userId"] == donor.id
        assert proposal["fundingNeeded"] == 4500

        listed = (await client.get("/api/user/proposals", headers=user_headers)).json()
        assert [p["id"] for p in listed] == [proposal["id"]]

        log = (await storage.list_activity_logs())[0]
        assert (log.action, log.entity_type, log.entity_id) == ("create", "project_proposal", proposal["id"])

    async def test_only_own_proposals_are_listed(self, client: AsyncClient, admin_headers: dict, user_headers: dict):
        await client.post("/api/user/proposals", json=PROPOSAL_BODY, headers=admin_headers)

        assert (await client.get("/api/user/proposals", headers=user_headers)).json() == []

    async def test_invalid_proposal(self, client: AsyncClient, user_headers: dict):
        response = await client.post(
            "/api/user/proposals", json={**PROPOSAL_BODY, "description": "short"}, headers=user_headers
        )

        assert response.status_code == 400
