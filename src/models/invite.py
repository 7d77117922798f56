"""Invite model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict


class InviteStatus(str, Enum):
    """Invite status values stored in the invites table."""

    PENDING = "pending"
    REGISTERED = "registered"
    EXPIRED = "expired"


class Invite(TypedDict):
    """Invite table row representation.

    The token is looked up by query rather than used as the row key, so
    a token can be reissued without changing the invite id.
    """

    id: str
    email: str
    token: str
    status: InviteStatus
    invited_by: str
    invited_at: datetime
    invite_number: int
    startup_slug: str | None
    registered_at: datetime | None


class InviteCreate(TypedDict):
    """Data required to create an invite."""

    email: str
    token: str
    status: InviteStatus
    invited_by: str
    invited_at: datetime
    invite_number: int


class InviteReconciliation(TypedDict):
    """Row recording a live profile whose invite is still pending."""

    id: str
    slug: str
    invite_id: str
    error: str
    resolved: bool
    created_at: datetime
