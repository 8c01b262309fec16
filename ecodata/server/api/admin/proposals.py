"""
Admin review of project proposals, and the activity log.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from ecodata.core.exceptions import NotFoundError
from ecodata.core.models.io import MessageResponse
from ecodata.core.models.io.proposals import ActivityLogRead, ProjectProposalRead, ProposalStatusUpdate

from ..deps import AdminDep, StorageDep

router = APIRouter()


@router.get("/proposals", response_model=List[ProjectProposalRead], summary="List Project Proposals")
async def list_proposals(storage: StorageDep, admin: AdminDep):
    return await storage.list_project_proposals()


@router.put(
    "/proposals/{proposal_id}/status",
    response_model=ProjectProposalRead,
    summary="Update Proposal Status",
    responses={404: {"description": "Proposal not found"}},
)
async def update_proposal_status(proposal_id: int, body: ProposalStatusUpdate, storage: StorageDep, admin: AdminDep):
    proposal = await storage.update_proposal_status(proposal_id, body.status, body.admin_notes)
    if proposal is None:
        raise NotFoundError("Proposal not found")
    await storage.log_activity(admin.user_id, "update", "project_proposal", proposal_id, {"status": body.status})
    return proposal


@router.delete("/proposals/{proposal_id}", response_model=MessageResponse, summary="Delete Project Proposal")
async def delete_proposal(proposal_id: int, storage: StorageDep, admin: AdminDep):
    if not await storage.proposals.delete(proposal_id):
        raise NotFoundError("Proposal not found")
    await storage.log_activity(admin.user_id, "delete", "project_proposal", proposal_id)
    return MessageResponse(message="Proposal deleted successfully")


@router.get("/activity-logs", response_model=List[ActivityLogRead], summary="List Activity Logs")
async def list_activity_logs(storage: StorageDep, admin: AdminDep, limit: Optional[int] = Query(default=100, ge=1)):
    """Most recent admin and donor actions, newest first."""
    return await storage.list_activity_logs(limit=limit)
