"""
Admin inbox: contact messages and newsletter subscribers.
"""

from typing import List

from fastapi import APIRouter

from ecodata.core.exceptions import NotFoundError
from ecodata.core.models.io import MessageResponse
from ecodata.core.models.io.inbox import ContactMessageRead, ContactReadStatus, NewsletterSubscriberRead

from ..deps import AdminDep, StorageDep

router = APIRouter()


@router.get("/messages", response_model=List[ContactMessageRead], summary="List Contact Messages")
async def list_messages(storage: StorageDep, admin: AdminDep):
    """Contact form submissions, newest first."""
    return await storage.list_contact_messages()


@router.put(
    "/messages/{message_id}/read",
    response_model=ContactMessageRead,
    summary="Mark Message Read",
    description="Set or clear the read flag of a contact message.",
    responses={404: {"description": "Message not found"}},
)
async def set_message_read(message_id: int, body: ContactReadStatus, storage: StorageDep, admin: AdminDep):
    message = await storage.set_contact_message_read(message_id, body.is_read)
    if message is None:
        raise NotFoundError("Message not found")
    return message


@router.delete("/messages/{message_id}", response_model=MessageResponse, summary="Delete Contact Message")
async def delete_message(message_id: int, storage: StorageDep, admin: AdminDep):
    if not await storage.delete_contact_message(message_id):
        raise NotFoundError("Message not found")
    await storage.log_activity(admin.user_id, "delete", "contact_message", message_id)
    return MessageResponse(message="Message deleted successfully")


@router.get("/subscribers", response_model=List[NewsletterSubscriberRead], summary="List Newsletter Subscribers")
async def list_subscribers(storage: StorageDep, admin: AdminDep):
    return await storage.list_newsletter_subscribers()


@router.delete("/subscribers/{subscriber_id}", response_model=MessageResponse, summary="Delete Newsletter Subscriber")
async def delete_subscriber(subscriber_id: int, storage: StorageDep, admin: AdminDep):
    if not await storage.delete_newsletter_subscriber(subscriber_id):
        raise NotFoundError("Subscriber not found")
    await storage.log_activity(admin.user_id, "delete", "newsletter_subscriber", subscriber_id)
    return MessageResponse(message="Subscriber deleted successfully")
