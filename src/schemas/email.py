"""Schemas for the public email endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.schemas.common import MessageResponse


class SendInviteRequest(BaseModel):
    """Request to (re)send an invite email for an existing token."""

    model_config = ConfigDict(from_attributes=True)

    email: EmailStr = Field(..., description="Recipient")
    token: str = Field(..., min_length=1, description="Invite token")


class SendInviteResponse(MessageResponse):
    """Invite email result with the link for manual sharing."""

    invite_link: str = Field(description="Registration link contained in the email")


class SendWelcomeRequest(BaseModel):
    """Request to send the welcome email after registration."""

    model_config = ConfigDict(from_attributes=True)

    email: EmailStr = Field(..., description="Recipient")
    startup_name: str = Field(..., min_length=1, description="Registered startup name")
    slug: str = Field(..., min_length=1, description="Profile slug")


class ContactRequest(BaseModel):
    """Contact form submission."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255, description="Sender name")
    email: EmailStr = Field(..., description="Sender email")
    phone: str | None = Field(default=None, max_length=50, description="Sender phone")
    message: str = Field(..., min_length=1, max_length=5000, description="Message body")
    contact_type: str | None = Field(default=None, description="founders, call, deck or csr")
