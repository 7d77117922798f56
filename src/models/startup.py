"""Startup model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict


class StartupStatus(str, Enum):
    """Startup profile status values."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class InterestKind(str, Enum):
    """Investor interest sets kept on a startup row."""

    INVESTMENT = "investment"
    HIRING = "hiring"

    @property
    def column(self) -> str:
        """Name of the array column holding this kind of interest."""
        if self is InterestKind.INVESTMENT:
            return "interested_investors"
        return "hiring_investors"


class TeamMember(TypedDict, total=False):
    """Team member entry stored in the startup's team JSON column."""

    name: str
    role: str
    headshot: str | None
    linkedin: str | None
    github: str | None
    portfolio: str | None
    pitch_video: str | None
    hiring: bool


class Startup(TypedDict):
    """Startup table row representation.

    Rows live in the primary startups table keyed by slug; the backup
    table holds the same shape plus backup_created_at and
    original_collection.
    """

    slug: str
    name: str
    tagline: str
    story: str
    sector: str
    badges: list[str]
    team: list[TeamMember]
    website: str | None
    app_store: str | None
    play_store: str | None
    demo_url: str | None
    qr_code: str | None
    contact_email: str | None
    contact_phone: str | None
    product_video: str | None
    pitch_deck: str | None
    problem: str | None
    solution: str | None
    collaboration_message: str | None
    logo: str | None
    status: StartupStatus
    created_at: datetime
    created_by: str
    interested_investors: list[str]
    hiring_investors: list[str]
    is_template_compatible: bool
    template_version: str
    profile_created_at: datetime
    last_updated: datetime


class StartupLikes(TypedDict):
    """Per-slug like counter row, kept apart from the profile row."""

    slug: str
    likes: int
    last_updated: datetime
