"""
Public Form Endpoints.

Contact form, newsletter sign-up, visitor feedback and error reports.
Contact and newsletter submissions send their notification emails in the
background so the visitor does not wait on SMTP.
"""

from fastapi import APIRouter, BackgroundTasks, Request, status
from fastapi.responses import JSONResponse

from ecodata.core.database.entities import ContactMessage, ErrorReport, NewsletterSubscriber, UserFeedback
from ecodata.core.exceptions import ConflictError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io import CreatedResponse
from ecodata.core.models.io.feedback import ErrorReportCreate, FeedbackCreate
from ecodata.core.models.io.inbox import ContactMessageCreate, NewsletterSubscribeRequest

from .deps import EmailServiceDep, OptionalUserDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/contact",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Contact Form",
    description="Store a contact message and notify the admins. Submissions with the honeypot field filled are acknowledged but dropped.",
    responses={
        200: {"description": "Submission dropped as spam"},
        400: {"description": "Invalid form data"},
    },
)
async def submit_contact_form(
    body: ContactMessageCreate,
    background_tasks: BackgroundTasks,
    storage: StorageDep,
    email_service: EmailServiceDep,
):
    if body.is_spam():
        logger.info("Dropped contact form submission caught by honeypot")
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "Message received"})

    message = await storage.create_contact_message(
        ContactMessage.model_validate(body.model_dump(exclude={"website"}))
    )
    background_tasks.add_task(email_service.send_contact_notification, message)
    background_tasks.add_task(email_service.send_contact_confirmation, message)
    return CreatedResponse(message="Your message has been sent successfully", id=message.id)


@router.post(
    "/newsletter/subscribe",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to Newsletter",
    responses={
        200: {"description": "Submission dropped as spam"},
        400: {"description": "Invalid data or email already subscribed"},
    },
)
async def subscribe_newsletter(
    body: NewsletterSubscribeRequest,
    background_tasks: BackgroundTasks,
    storage: StorageDep,
    email_service: EmailServiceDep,
):
    if body.is_spam():
        logger.info("Dropped newsletter sign-up caught by honeypot")
        return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "Subscription received"})

    if await storage.get_newsletter_subscriber_by_email(body.email):
        raise ConflictError("This email is already subscribed")

    subscriber = await storage.create_newsletter_subscriber(
        NewsletterSubscriber.model_validate(body.model_dump(exclude={"website"}))
    )
    background_tasks.add_task(email_service.send_newsletter_confirmation, subscriber)
    background_tasks.add_task(email_service.send_new_subscriber_notification, subscriber)
    return CreatedResponse(message="You have been subscribed successfully", id=subscriber.id)


@router.post(
    "/feedback",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Feedback",
    description="Record visitor feedback. The account is attached when a valid bearer token is sent.",
)
async def submit_feedback(body: FeedbackCreate, request: Request, storage: StorageDep, claims: OptionalUserDep):
    feedback = await storage.create_feedback(
        UserFeedback(
            **body.model_dump(),
            user_id=claims.user_id if claims else None,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    )
    return CreatedResponse(message="Thank you for your feedback!", id=feedback.id)


@router.post(
    "/error-reports",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report an Error",
    description="Record a problem report from the website's error widget.",
)
async def submit_error_report(body: ErrorReportCreate, request: Request, storage: StorageDep):
    data = body.model_dump()
    if not data.get("browser_info"):
        data["browser_info"] = request.headers.get("user-agent") or "Unknown browser"
    report = await storage.create_error_report(ErrorReport(**data))
    return CreatedResponse(
        message="Thank you for reporting this issue. Our team will look into it.",
        id=report.id,
    )
