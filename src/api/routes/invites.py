"""Startup invite API routes."""

import logging

from fastapi import APIRouter, Query, status

from src.api.deps import AdminUser
from src.api.middleware.error_handler import EmailDeliveryError
from src.schemas.invite import (
    AdminInviteResponse,
    InviteCreate,
    InviteIssueResponse,
    ResolvedInviteResponse,
)
from src.services.email_service import EmailService
from src.services.invite_service import InviteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invites", tags=["invites"])


@router.post(
    "",
    response_model=InviteIssueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue an invite",
    description=(
        "Creates a single-use registration invite and emails the link. "
        "If the email fails the invite still exists and the link is returned for manual sharing. Admin only."
    ),
)
async def issue_invite(data: InviteCreate, admin: AdminUser) -> InviteIssueResponse:
    """Issue a startup invite and send the invite email.

    Args:
        data: Email address to invite.
        admin: The authenticated admin.

    Returns:
        InviteIssueResponse: The invite, its link and email delivery status.
    """
    invite = await InviteService().issue_invite(data.email, issued_by=str(admin.user_id))
    email_service = EmailService()

    email_sent = True
    warning = None
    try:
        await email_service.send_invite_email(invite["email"], invite["token"])
    except EmailDeliveryError as e:
        email_sent = False
        warning = "Invite created, but the email could not be sent. Share the invite link manually."
        logger.warning("Invite %s created without email: %s", invite["id"], e.message)

    return InviteIssueResponse(
        **invite,
        invite_link=email_service.invite_link(invite["token"]),
        email_sent=email_sent,
        warning=warning,
    )


@router.get(
    "",
    response_model=list[AdminInviteResponse],
    summary="List invites",
    description="Lists invites newest first, optionally for one email address. Admin only.",
)
async def list_invites(
    admin: AdminUser,
    email: str | None = Query(default=None, description="Only invites sent to this address"),
) -> list[AdminInviteResponse]:
    """List invites for the admin dashboard."""
    invites = await InviteService().list_invites(email)
    email_service = EmailService()
    return [
        AdminInviteResponse(**invite, invite_link=email_service.invite_link(invite["token"]))
        for invite in invites
    ]


@router.get(
    "/{token}",
    response_model=ResolvedInviteResponse,
    summary="Resolve an invite",
    description="Checks that an invite token can still be used to register.",
    responses={
        404: {"description": "Invite not found"},
        409: {"description": "Invite already used"},
    },
)
async def resolve_invite(token: str) -> ResolvedInviteResponse:
    """Resolve an invite token for the registration form."""
    invite = await InviteService().resolve_invite(token)
    return ResolvedInviteResponse(**invite, default_contact_email=invite["email"])
