"""Turns a validated registration form into a publishable startup record."""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from src.api.middleware.error_handler import ValidationError
from src.models.startup import StartupStatus
from src.schemas.startup import DEFAULT_SECTOR, StartupRecord, StartupRegistrationForm, TeamMember
from src.services.asset_service import (
    LOGO_FOLDER,
    PITCH_DECK_FOLDER,
    TEAM_PHOTO_FOLDER,
    AssetService,
    RegistrationAttachments,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "tagline", "story")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    """Derive the URL slug for a startup name.

    Lowercases, collapses every run of characters outside ``[a-z0-9]``
    into a single hyphen and trims hyphens from both ends. Applying it
    to its own output returns the same slug.
    """
    return _NON_SLUG_CHARS.sub("-", (name or "").lower()).strip("-")


def _missing(loc: list[Any], label: str) -> dict[str, Any]:
    return {"loc": loc, "msg": f"{label} is required", "type": "missing"}


class ProfileAssemblyService:
    """Builds StartupRecord instances from registration submissions."""

    def __init__(self) -> None:
        """Initialize assembler with the asset store."""
        self.assets = AssetService()

    def check_required_fields(self, form: StartupRegistrationForm) -> None:
        """Reject forms missing required text.

        Raises:
            ValidationError: Naming every missing field, including
                team member names and roles.
        """
        details = [
            _missing([field_name], field_name)
            for field_name in REQUIRED_FIELDS
            if not getattr(form, field_name).strip()
        ]

        for index, member in enumerate(form.team):
            if not member.name.strip():
                details.append(_missing(["team", index, "name"], f"team[{index}].name"))
            if not member.role.strip():
                details.append(_missing(["team", index, "role"], f"team[{index}].role"))

        if details:
            fields = ", ".join(
                ".".join(str(part) for part in detail["loc"]) for detail in details
            )
            raise ValidationError(f"Missing required fields: {fields}", details=details)

    def check_attachments(self, form: StartupRegistrationForm, attachments: RegistrationAttachments) -> None:
        """Validate every attachment before anything is uploaded.

        Raises:
            ValidationError: On a wrong file type, oversize file, or a
                headshot for a team member that does not exist.
        """
        if attachments.logo:
            self.assets.validate_image(attachments.logo, "logo")

        if attachments.pitch_deck:
            self.assets.validate_pitch_deck(attachments.pitch_deck)

        for index, headshot in attachments.headshots.items():
            if index < 0 or index >= len(form.team):
                raise ValidationError(
                    f"Headshot {index} does not match a team member",
                    details=[{"loc": [f"headshot_{index}"], "msg": "No team member at this index", "type": "value_error"}],
                )
            self.assets.validate_image(headshot, f"headshot_{index}")

    async def assemble_profile(
        self,
        form: StartupRegistrationForm,
        attachments: RegistrationAttachments,
        created_by: str,
    ) -> StartupRecord:
        """Validate, upload assets and build the record to publish.

        Args:
            form: Parsed registration form.
            attachments: Uploaded files keyed by purpose.
            created_by: Email of the invite the registration came from.

        Returns:
            StartupRecord: Complete profile keyed by its slug.

        Raises:
            ValidationError: If required fields or attachments are invalid.
            UploadError: If an asset could not be stored at all.
        """
        self.check_required_fields(form)
        self.check_attachments(form, attachments)

        name = form.name.strip()
        slug = generate_slug(name)
        if not slug:
            raise ValidationError(
                "Startup name must contain at least one letter or digit",
                details=[{"loc": ["name"], "msg": "Cannot derive a URL from this name", "type": "value_error"}],
            )

        logo = form.logo
        if attachments.logo:
            logo = await self.assets.store_asset(attachments.logo, LOGO_FOLDER, prefix=slug)

        pitch_deck = form.pitch_deck
        if attachments.pitch_deck:
            pitch_deck = await self.assets.store_asset(attachments.pitch_deck, PITCH_DECK_FOLDER, prefix=slug)

        team = []
        for index, member in enumerate(form.team):
            data = member.model_dump()
            data["name"] = member.name.strip()
            data["role"] = member.role.strip()
            headshot = attachments.headshots.get(index)
            if headshot:
                data["headshot"] = await self.assets.store_asset(
                    headshot,
                    TEAM_PHOTO_FOLDER,
                    prefix=generate_slug(data["name"]) or slug,
                )
            team.append(TeamMember(**data))

        now = datetime.now(timezone.utc)
        record = StartupRecord(
            **form.model_dump(exclude={"name", "tagline", "story", "sector", "badges", "team", "logo", "pitch_deck"}),
            slug=slug,
            name=name,
            tagline=form.tagline.strip(),
            story=form.story.strip(),
            sector=form.sector.strip() or DEFAULT_SECTOR,
            badges=list(dict.fromkeys(badge.strip() for badge in form.badges if badge.strip())),
            team=team,
            logo=logo,
            pitch_deck=pitch_deck,
            status=StartupStatus.ACTIVE,
            created_at=now,
            created_by=created_by,
            interested_investors=[],
            hiring_investors=[],
            profile_created_at=now,
            last_updated=now,
        )

        logger.info("Assembled profile %s with %d team members", slug, len(team))
        return record
