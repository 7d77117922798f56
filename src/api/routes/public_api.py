"""Public email endpoints used by the frontend without authentication."""

from datetime import datetime, timezone

from fastapi import APIRouter

from src.core.config import get_settings
from src.schemas.common import ApiHealthResponse, MessageResponse
from src.schemas.email import ContactRequest, SendInviteRequest, SendInviteResponse, SendWelcomeRequest
from src.services.email_service import EmailService

router = APIRouter(prefix="/api", tags=["public"])


@router.get(
    "/health",
    response_model=ApiHealthResponse,
    summary="Email API health",
    description="Reports the environment and whether email delivery is configured.",
)
async def api_health() -> ApiHealthResponse:
    """Return API status for the frontend."""
    settings = get_settings()
    return ApiHealthResponse(
        message="JAZBAA API is running",
        timestamp=datetime.now(timezone.utc),
        environment=settings.app_env,
        email_configured=settings.email_configured,
    )


@router.post(
    "/send-invite",
    response_model=SendInviteResponse,
    summary="Send invite email",
    description="Sends the registration invite email for an existing invite token.",
    responses={502: {"description": "Email could not be delivered"}},
)
async def send_invite(data: SendInviteRequest) -> SendInviteResponse:
    """Send an invite email.

    Args:
        data: Recipient and invite token.

    Returns:
        SendInviteResponse: Confirmation and the registration link.
    """
    result = await EmailService().send_invite_email(data.email, data.token)
    return SendInviteResponse(
        message="Invite email sent successfully",
        invite_link=result["invite_link"],
    )


@router.post(
    "/send-welcome",
    response_model=MessageResponse,
    summary="Send welcome email",
    description="Sends the post-registration welcome email with the public profile link.",
    responses={502: {"description": "Email could not be delivered"}},
)
async def send_welcome(data: SendWelcomeRequest) -> MessageResponse:
    """Send a welcome email."""
    await EmailService().send_welcome_email(data.email, data.startup_name, data.slug)
    return MessageResponse(message="Welcome email sent successfully")


@router.post(
    "/contact",
    response_model=MessageResponse,
    summary="Submit contact form",
    description="Forwards a contact request to the team inbox and acknowledges it to the sender.",
    responses={502: {"description": "Team notification could not be delivered"}},
)
async def contact(data: ContactRequest) -> MessageResponse:
    """Handle a contact form submission.

    Args:
        data: Contact form fields.

    Returns:
        MessageResponse: Confirmation message.
    """
    await EmailService().send_contact_emails(
        name=data.name,
        email=data.email,
        message=data.message,
        phone=data.phone,
        contact_type=data.contact_type,
    )
    return MessageResponse(message="Contact request submitted successfully")
