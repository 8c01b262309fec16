from typing import AsyncGenerator
from unittest.mock import Mock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ecodata.core.security import create_access_token
from ecodata.core.storage import Storage, build_memory_storage
from ecodata.core.storage.seed import ensure_admin_user, seed_demo_content, seed_partners
from ecodata.server.core.config import AuthConfig, StripeConfig
from ecodata.server.services.email_service import EmailService, get_email_service
from ecodata.server.services.payments import PaymentService, get_payment_service

ADMIN_AUTH = AuthConfig(admin_username="admin", admin_password="admin123", admin_email="admin@ecodatacic.org")


@pytest_asyncio.fixture(name="storage")
async def storage_fixture() -> Storage:
    """Fresh in-memory storage seeded like a development server."""
    storage = build_memory_storage()
    await ensure_admin_user(storage, ADMIN_AUTH)
    await seed_partners(storage)
    await seed_demo_content(storage)
    return storage


@pytest.fixture(name="email_service")
def email_service_fixture() -> Mock:
    """Email service double; every send reports success."""
    service = Mock(spec=EmailService)
    for name in (
        "send_email",
        "send_contact_notification",
        "send_contact_confirmation",
        "send_newsletter_confirmation",
        "send_new_subscriber_notification",
        "send_password_reset_email",
        "send_password_change_confirmation",
    ):
        getattr(service, name).return_value = True
    service.password_reset_url.side_effect = lambda token: f"http://localhost:5000/password-recovery?token={token}"
    return service


@pytest.fixture(name="payment_service")
def payment_service_fixture() -> PaymentService:
    """Configured payment service without a webhook secret; Stripe calls must be patched per test."""
    return PaymentService(StripeConfig(secret_key="sk_test_123"))


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    storage: Storage, email_service: Mock, payment_service: PaymentService
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client bound to the test storage and service doubles."""
    from ecodata.server.main import app

    app.state.storage = storage
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_payment_service] = lambda: payment_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
    del app.state.storage


@pytest_asyncio.fixture(name="admin_headers")
async def admin_headers_fixture(storage: Storage) -> dict:
    admin = await storage.get_user_by_username("admin")
    return {"Authorization": f"Bearer {create_access_token(admin.id, admin.username, admin.role)}"}


@pytest_asyncio.fixture(name="donor")
async def donor_fixture(storage: Storage):
    from ecodata.core.database.entities import User
    from ecodata.core.security import hash_password

    return await storage.create_user(
        User(
            username="donor",
            email="donor@example.org",
            role="user",
            first_name="Dana",
            hashed_password=hash_password("secret123", rounds=4),
        )
    )


@pytest.fixture(name="user_headers")
def user_headers_fixture(donor) -> dict:
    return {"Authorization": f"Bearer {create_access_token(donor.id, donor.username, donor.role)}"}
