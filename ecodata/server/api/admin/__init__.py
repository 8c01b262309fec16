"""
Admin API.

Every route requires a bearer token whose role is ``admin``; writes are
recorded in the activity log.
"""

from fastapi import APIRouter

from . import content, feedback, giving, inbox, proposals, settings

router = APIRouter()
router.include_router(content.router)
router.include_router(inbox.router)
router.include_router(feedback.router)
router.include_router(settings.router)
router.include_router(giving.router)
router.include_router(proposals.router)

__all__ = ["router"]
