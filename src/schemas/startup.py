"""Startup Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.startup import InterestKind, StartupStatus

DEFAULT_SECTOR = "Technology"
TEMPLATE_VERSION = "1.0"

# Optional free-text and URL fields stored as null when left blank
OPTIONAL_TEXT_FIELDS = (
    "website",
    "app_store",
    "play_store",
    "demo_url",
    "qr_code",
    "contact_email",
    "contact_phone",
    "product_video",
    "pitch_deck",
    "problem",
    "solution",
    "collaboration_message",
    "logo",
)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TeamMemberInput(BaseModel):
    """Team member as submitted on the registration form."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(default="", description="Member name")
    role: str = Field(default="", description="Member role")
    headshot: str | None = Field(default=None, description="Headshot URL, if already hosted")
    linkedin: str | None = Field(default=None, description="LinkedIn URL")
    github: str | None = Field(default=None, description="GitHub URL")
    portfolio: str | None = Field(default=None, description="Portfolio URL")
    pitch_video: str | None = Field(default=None, description="Individual pitch video URL")
    hiring: bool = Field(default=False, description="Whether this member is open to being hired")

    @field_validator("headshot", "linkedin", "github", "portfolio", "pitch_video")
    @classmethod
    def empty_optional_to_none(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


class TeamMember(TeamMemberInput):
    """Team member as stored on a published profile."""

    name: str = Field(description="Member name")
    role: str = Field(description="Member role")


class StartupRegistrationForm(BaseModel):
    """Registration form submitted through an invite link.

    Required text fields are checked by the profile assembler rather
    than here, so a missing field is reported by name together with
    any other missing fields.
    """

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(default="", description="Startup name")
    tagline: str = Field(default="", description="One-line pitch")
    story: str = Field(default="", description="Founding story")
    sector: str = Field(default=DEFAULT_SECTOR, description="Sector, e.g. Technology or HealthTech")
    badges: list[str] = Field(default_factory=list, description="Badges such as 'AI/ML' or 'Hiring'")
    team: list[TeamMemberInput] = Field(default_factory=list, description="Team members in display order")
    website: str | None = None
    app_store: str | None = None
    play_store: str | None = None
    demo_url: str | None = None
    qr_code: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    product_video: str | None = None
    pitch_deck: str | None = Field(default=None, description="Pitch deck URL, if already hosted")
    problem: str | None = None
    solution: str | None = None
    collaboration_message: str | None = None
    logo: str | None = Field(default=None, description="Logo URL, if already hosted")

    @field_validator(*OPTIONAL_TEXT_FIELDS)
    @classmethod
    def empty_optional_to_none(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


class StartupRecord(BaseModel):
    """Fully assembled startup profile, ready to be written by slug.

    Optional fields that were not provided are None, never "".
    """

    model_config = ConfigDict(from_attributes=True)

    slug: str
    name: str
    tagline: str
    story: str
    sector: str = DEFAULT_SECTOR
    badges: list[str] = Field(default_factory=list)
    team: list[TeamMember] = Field(default_factory=list)
    website: str | None = None
    app_store: str | None = None
    play_store: str | None = None
    demo_url: str | None = None
    qr_code: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    product_video: str | None = None
    pitch_deck: str | None = None
    problem: str | None = None
    solution: str | None = None
    collaboration_message: str | None = None
    logo: str | None = None
    status: StartupStatus = StartupStatus.ACTIVE
    created_at: datetime
    created_by: str
    interested_investors: list[str] = Field(default_factory=list)
    hiring_investors: list[str] = Field(default_factory=list)
    is_template_compatible: bool = True
    template_version: str = TEMPLATE_VERSION
    profile_created_at: datetime
    last_updated: datetime

    def to_row(self) -> dict:
        """Serialize for a full-row upsert."""
        return self.model_dump(mode="json")


class StartupProfileResponse(BaseModel):
    """Startup profile as served to display code.

    Every text field is populated; URL fields are explicitly null when
    absent.
    """

    model_config = ConfigDict(from_attributes=True)

    slug: str
    name: str
    tagline: str
    story: str
    sector: str
    badges: list[str]
    team: list[TeamMemberInput]
    website: str | None
    app_store: str | None
    play_store: str | None
    demo_url: str | None
    qr_code: str | None
    contact_email: str
    contact_phone: str
    product_video: str | None
    pitch_deck: str | None
    problem: str
    solution: str
    collaboration_message: str
    logo: str | None
    status: StartupStatus
    created_at: datetime | None
    created_by: str | None
    interested_investors: list[str]
    hiring_investors: list[str]
    profile_created_at: datetime | None
    last_updated: datetime | None


class StartupUpdate(BaseModel):
    """Admin edit of a published profile. The slug cannot be changed."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    name: str | None = None
    tagline: str | None = None
    story: str | None = None
    sector: str | None = None
    badges: list[str] | None = None
    team: list[TeamMember] | None = None
    website: str | None = None
    app_store: str | None = None
    play_store: str | None = None
    demo_url: str | None = None
    qr_code: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    product_video: str | None = None
    pitch_deck: str | None = None
    problem: str | None = None
    solution: str | None = None
    collaboration_message: str | None = None
    logo: str | None = None
    status: StartupStatus | None = None

    @field_validator(*OPTIONAL_TEXT_FIELDS)
    @classmethod
    def empty_optional_to_none(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


class InterestToggleRequest(BaseModel):
    """Request schema for toggling investor interest."""

    model_config = ConfigDict(from_attributes=True)

    kind: InterestKind = Field(description="Which interest set to toggle")


class InterestToggleResponse(BaseModel):
    """Membership after an interest toggle."""

    model_config = ConfigDict(from_attributes=True)

    slug: str = Field(description="Startup slug")
    kind: InterestKind = Field(description="Interest set that was toggled")
    investor_id: str = Field(description="Investor whose membership was toggled")
    is_member: bool = Field(description="Whether the investor is now in the set")


class LikeCountResponse(BaseModel):
    """Current like count for a startup."""

    model_config = ConfigDict(from_attributes=True)

    slug: str = Field(description="Startup slug")
    likes: int = Field(description="Number of likes")


class RegistrationResponse(BaseModel):
    """Outcome of a completed registration.

    The profile is live whenever this is returned; warnings describe
    secondary steps that did not complete.
    """

    model_config = ConfigDict(from_attributes=True)

    slug: str = Field(description="Permanent public identifier of the profile")
    profile_url: str = Field(description="Public profile URL")
    welcome_email_sent: bool = Field(description="Whether the welcome email was delivered")
    invite_reconciliation_required: bool = Field(
        default=False,
        description="True when the invite could not be marked registered",
    )
    warnings: list[str] = Field(default_factory=list, description="Non-fatal problems")
