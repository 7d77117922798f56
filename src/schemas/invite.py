"""Invite Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.invite import InviteStatus


class InviteCreate(BaseModel):
    """Schema for issuing a startup invite."""

    model_config = ConfigDict(from_attributes=True)

    email: EmailStr = Field(..., description="Email address to invite")


class InviteResponse(BaseModel):
    """Schema for invite API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Invite unique identifier")
    email: str = Field(description="Invited email address")
    status: InviteStatus = Field(description="Current invite status")
    invited_by: str = Field(description="User ID of the admin who issued the invite")
    invited_at: datetime = Field(description="When the invite was issued")
    invite_number: int = Field(default=1, description="How many invites this email has received, including this one")
    startup_slug: str | None = Field(default=None, description="Slug of the profile registered with this invite")
    registered_at: datetime | None = Field(default=None, description="When the invite was consumed")


class AdminInviteResponse(InviteResponse):
    """Invite as shown to admins, including the registration token."""

    token: str = Field(description="Opaque registration token")
    invite_link: str = Field(description="Registration link for this invite")


class InviteIssueResponse(AdminInviteResponse):
    """Result of issuing an invite.

    Email delivery is reported separately: the invite exists even when
    the email could not be sent, and the link can be shared manually.
    """

    email_sent: bool = Field(description="Whether the invite email was delivered")
    warning: str | None = Field(default=None, description="Delivery warning to show the admin")


class ResolvedInviteResponse(BaseModel):
    """Invite context handed to the registration form."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Invite unique identifier")
    email: str = Field(description="Invited email address")
    status: InviteStatus = Field(description="Current invite status")
    invite_number: int = Field(default=1, description="Invite sequence number for this email")
    default_contact_email: str = Field(description="Prefilled contact email for the registration form")
