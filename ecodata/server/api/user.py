"""
Donor Dashboard Endpoints.

Endpoints for the logged-in donor: profile, giving history, the one-off free
consultation and project proposals. All require a bearer token.
"""

from typing import List

from fastapi import APIRouter, status

from ecodata.core.database.entities import ProjectProposal, User
from ecodata.core.exceptions import BadRequestError, ConflictError, NotFoundError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io.payments import DonationRead, DonorSummary, SubscriptionRead
from ecodata.core.models.io.proposals import ProjectProposalCreate, ProjectProposalRead
from ecodata.core.models.io.users import ConsultationStatus, ProfileUpdate, UserProfile
from ecodata.core.storage import Storage

from .deps import CurrentUserDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


async def _load_user(storage: Storage, user_id: int) -> User:
    user = await storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get(
    "/profile",
    response_model=UserProfile,
    summary="Get Profile",
    responses={404: {"description": "Account no longer exists"}},
)
async def get_profile(claims: CurrentUserDep, storage: StorageDep):
    return await _load_user(storage, claims.user_id)


@router.put(
    "/profile",
    response_model=UserProfile,
    summary="Update Profile",
    description="Update name, email, bio, interests and notification preference. Other fields are ignored.",
    responses={400: {"description": "Email already used by another account"}},
)
async def update_profile(body: ProfileUpdate, claims: CurrentUserDep, storage: StorageDep):
    user = await _load_user(storage, claims.user_id)
    changes = body.changes()
    if "email" in changes and changes["email"] != user.email:
        other = await storage.get_user_by_email(changes["email"])
        if other is not None and other.id != user.id:
            raise ConflictError("Email already registered")
    if not changes:
        return user
    return await storage.update_user(user.id, changes)


@router.get("/donations", response_model=List[DonationRead], summary="List My Donations")
async def list_my_donations(claims: CurrentUserDep, storage: StorageDep):
    return await storage.list_donations_for_user(claims.user_id)


@router.get("/subscriptions", response_model=List[SubscriptionRead], summary="List My Recurring Donations")
async def list_my_subscriptions(claims: CurrentUserDep, storage: StorageDep):
    return await storage.list_subscriptions_for_user(claims.user_id)


@router.get(
    "/summary",
    response_model=DonorSummary,
    summary="Giving Summary",
    description="Totals for the dashboard header: completed donations and active recurring gifts.",
)
async def get_giving_summary(claims: CurrentUserDep, storage: StorageDep):
    user = await _load_user(storage, claims.user_id)
    totals = await storage.summarize_giving(user.id)
    return DonorSummary(**totals, has_used_free_consultation=user.has_used_free_consultation)


@router.post(
    "/consultation",
    response_model=ConsultationStatus,
    summary="Use Free Consultation",
    responses={400: {"description": "Free consultation already used"}},
)
async def use_free_consultation(claims: CurrentUserDep, storage: StorageDep):
    user = await _load_user(storage, claims.user_id)
    if user.has_used_free_consultation:
        raise BadRequestError(
            "User has already used their free consultation",
            extra={"hasUsedFreeConsultation": True},
        )
    updated = await storage.mark_free_consultation_used(user.id)
    logger.info(f"User {user.id} used their free consultation")
    return ConsultationStatus(
        message="Free consultation usage marked successfully",
        has_used_free_consultation=updated.has_used_free_consultation,
    )


@router.get("/proposals", response_model=List[ProjectProposalRead], summary="List My Project Proposals")
async def list_my_proposals(claims: CurrentUserDep, storage: StorageDep):
    return await storage.list_project_proposals(user_id=claims.user_id)


@router.post(
    "/proposals",
    response_model=ProjectProposalRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Project Proposal",
)
async def submit_proposal(body: ProjectProposalCreate, claims: CurrentUserDep, storage: StorageDep):
    proposal = await storage.create_project_proposal(ProjectProposal(**body.model_dump(), user_id=claims.user_id))
    await storage.log_activity(claims.user_id, "create", "project_proposal", proposal.id, {"title": proposal.title})
    return proposal
