"""
Admin review of visitor feedback and error reports.
"""

from typing import List, Optional

from fastapi import APIRouter

from ecodata.core.exceptions import NotFoundError
from ecodata.core.models.io import MessageResponse
from ecodata.core.models.io.feedback import (
    ErrorReportRead,
    ErrorReportStatusUpdate,
    FeedbackRead,
    FeedbackResolution,
)

from ..deps import AdminDep, StorageDep

router = APIRouter()

# =====================================================================
# Feedback
# =====================================================================


@router.get("/feedback", response_model=List[FeedbackRead], summary="List Feedback")
async def list_feedback(
    storage: StorageDep,
    admin: AdminDep,
    resolved: Optional[bool] = None,
    category: Optional[str] = None,
):
    return await storage.list_feedback(resolved=resolved, category=category)


@router.get("/feedback/{feedback_id}", response_model=FeedbackRead, summary="Get Feedback")
async def get_feedback(feedback_id: int, storage: StorageDep, admin: AdminDep):
    feedback = await storage.feedback.get(feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found")
    return feedback


@router.patch(
    "/feedback/{feedback_id}",
    response_model=FeedbackRead,
    summary="Resolve Feedback",
    description="Mark feedback resolved or unresolved, optionally with admin notes.",
)
async def resolve_feedback(feedback_id: int, body: FeedbackResolution, storage: StorageDep, admin: AdminDep):
    feedback = await storage.resolve_feedback(feedback_id, body.resolved, body.admin_notes)
    if feedback is None:
        raise NotFoundError("Feedback not found")
    await storage.log_activity(admin.user_id, "update", "user_feedback", feedback_id, {"resolved": body.resolved})
    return feedback


@router.delete("/feedback/{feedback_id}", response_model=MessageResponse, summary="Delete Feedback")
async def delete_feedback(feedback_id: int, storage: StorageDep, admin: AdminDep):
    if not await storage.feedback.delete(feedback_id):
        raise NotFoundError("Feedback not found")
    await storage.log_activity(admin.user_id, "delete", "user_feedback", feedback_id)
    return MessageResponse(message="Feedback deleted successfully")


# =====================================================================
# Error reports
# =====================================================================


@router.get("/error-reports", response_model=List[ErrorReportRead], summary="List Error Reports")
async def list_error_reports(storage: StorageDep, admin: AdminDep, status: Optional[str] = None):
    return await storage.list_error_reports(status=status)


@router.get("/error-reports/{report_id}", response_model=ErrorReportRead, summary="Get Error Report")
async def get_error_report(report_id: int, storage: StorageDep, admin: AdminDep):
    report = await storage.error_reports.get(report_id)
    if report is None:
        raise NotFoundError("Error report not found")
    return report


@router.put("/error-reports/{report_id}/status", response_model=ErrorReportRead, summary="Update Error Report Status")
async def update_error_report_status(
    report_id: int, body: ErrorReportStatusUpdate, storage: StorageDep, admin: AdminDep
):
    report = await storage.update_error_report_status(report_id, body.status, body.admin_notes)
    if report is None:
        raise NotFoundError("Error report not found")
    await storage.log_activity(admin.user_id, "update", "error_report", report_id, {"status": body.status})
    return report


@router.delete("/error-reports/{report_id}", response_model=MessageResponse, summary="Delete Error Report")
async def delete_error_report(report_id: int, storage: StorageDep, admin: AdminDep):
    if not await storage.error_reports.delete(report_id):
        raise NotFoundError("Error report not found")
    await storage.log_activity(admin.user_id, "delete", "error_report", report_id)
    return MessageResponse(message="Error report deleted successfully")
