"""Startup profile read and mutation service."""

import logging
from datetime import datetime, timezone
from typing import Any

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.startup import InterestKind, StartupStatus
from src.schemas.startup import DEFAULT_SECTOR, StartupUpdate

logger = logging.getLogger(__name__)

TEXT_PLACEHOLDERS: dict[str, str] = {
    "name": "Unknown Startup",
    "tagline": "No tagline available",
    "story": "No story available",
    "sector": DEFAULT_SECTOR,
    "problem": "Problem description not available",
    "solution": "Solution description not available",
    "collaboration_message": "We are open to collaboration, funding, and partnerships.",
    "contact_email": "Not provided",
    "contact_phone": "Not provided",
}

URL_FIELDS = (
    "website",
    "app_store",
    "play_store",
    "demo_url",
    "qr_code",
    "product_video",
    "pitch_deck",
    "logo",
)

LIST_FIELDS = ("badges", "interested_investors", "hiring_investors")

PASSTHROUGH_FIELDS = (
    "created_at",
    "created_by",
    "profile_created_at",
    "last_updated",
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_profile(row: dict[str, Any]) -> dict[str, Any]:
    """Fill display placeholders for a stored profile row.

    Missing or blank text becomes a readable placeholder, missing lists
    become empty lists and missing URLs become explicit None, so display
    code never has to guard against absent fields.
    """
    profile: dict[str, Any] = {"slug": row["slug"]}

    for field_name, placeholder in TEXT_PLACEHOLDERS.items():
        value = row.get(field_name)
        profile[field_name] = placeholder if _is_blank(value) else value

    for field_name in URL_FIELDS:
        value = row.get(field_name)
        profile[field_name] = None if _is_blank(value) else value

    for field_name in LIST_FIELDS:
        profile[field_name] = list(row.get(field_name) or [])

    profile["team"] = [member for member in (row.get("team") or []) if isinstance(member, dict)]
    profile["status"] = row.get("status") or StartupStatus.ACTIVE.value

    for field_name in PASSTHROUGH_FIELDS:
        profile[field_name] = row.get(field_name)

    return profile


class StartupService:
    """Service for reading and editing published startup profiles."""

    def __init__(self) -> None:
        """Initialize startup service with Supabase client and table names."""
        settings = get_settings()
        self.client = get_supabase_client()
        self.table = settings.startups_table
        self.backup_table = settings.backup_startups_table

    async def get_row(self, slug: str, table: str | None = None) -> dict[str, Any] | None:
        """Get a raw profile row by slug.

        Args:
            slug: Startup slug.
            table: Table to read, defaults to the primary table.

        Returns:
            dict | None: The stored row or None if not found.
        """
        response = (
            self.client.table(table or self.table)
            .select("*")
            .eq("slug", slug)
            .maybe_single()
            .execute()
        )

        return response.data if response and response.data else None

    async def resolve_profile(self, slug: str) -> dict[str, Any]:
        """Load a profile for display, falling back to the backup table.

        Args:
            slug: Startup slug from the profile URL.

        Returns:
            dict: Normalised profile.

        Raises:
            NotFoundError: If neither table holds the slug.
        """
        row = await self.get_row(slug)

        if not row:
            row = await self.get_row(slug, self.backup_table)
            if row:
                logger.warning("Profile %s served from backup table", slug)

        if not row:
            raise NotFoundError(
                f"Startup profile '{slug}' not found. It may have moved or been deleted."
            )

        return normalize_profile(row)

    async def list_startups(self, status: StartupStatus | None = None) -> list[dict[str, Any]]:
        """List published profiles, newest first.

        Args:
            status: Optional status filter.

        Returns:
            list[dict]: Normalised profiles.
        """
        query = self.client.table(self.table).select("*")

        if status:
            query = query.eq("status", status.value)

        response = query.order("created_at", desc=True).execute()

        return [normalize_profile(row) for row in response.data or []]

    async def update_startup(self, slug: str, changes: StartupUpdate) -> dict[str, Any]:
        """Apply an admin edit to a profile.

        The slug is the profile's permanent identifier and is never
        rewritten. The backup copy is refreshed on a best-effort basis.

        Args:
            slug: Startup slug.
            changes: Fields to change.

        Returns:
            dict: Normalised profile after the edit.

        Raises:
            NotFoundError: If the profile does not exist.
            ValidationError: If no fields were supplied.
        """
        update_data = changes.model_dump(exclude_unset=True, mode="json")

        if not update_data:
            raise ValidationError("No fields to update")

        for field_name in ("name", "tagline", "story"):
            if field_name in update_data and _is_blank(update_data[field_name]):
                raise ValidationError(
                    f"{field_name} cannot be empty",
                    details=[{"loc": [field_name], "msg": f"{field_name} is required", "type": "missing"}],
                )

        update_data["last_updated"] = datetime.now(timezone.utc).isoformat()

        response = (
            self.client.table(self.table)
            .update(update_data)
            .eq("slug", slug)
            .execute()
        )

        if not response.data:
            raise NotFoundError(f"Startup profile '{slug}' not found")

        row = response.data[0]

        try:
            (
                self.client.table(self.backup_table)
                .update(update_data)
                .eq("slug", slug)
                .execute()
            )
        except Exception as e:
            logger.warning("Backup refresh failed for %s: %s", slug, str(e))

        logger.info("Profile %s updated: %s", slug, ", ".join(sorted(update_data)))
        return normalize_profile(row)

    async def toggle_interest(self, slug: str, investor_id: str, kind: InterestKind) -> bool:
        """Add or remove an investor from one of a startup's interest sets.

        The current set is read fresh and the change is applied with an
        atomic array add/remove, so concurrent toggles for different
        investors never overwrite each other.

        Args:
            slug: Startup slug.
            investor_id: Investor to toggle.
            kind: Which interest set to toggle.

        Returns:
            bool: True if the investor is now in the set.

        Raises:
            NotFoundError: If the profile does not exist.
        """
        column = kind.column
        response = (
            self.client.table(self.table)
            .select(f"slug, {column}")
            .eq("slug", slug)
            .maybe_single()
            .execute()
        )

        row = response.data if response and response.data else None
        if not row:
            raise NotFoundError(f"Startup profile '{slug}' not found")

        is_member = investor_id in (row.get(column) or [])
        function = "startup_array_remove" if is_member else "startup_array_add"

        self.client.rpc(
            function,
            {"p_slug": slug, "p_column": column, "p_value": investor_id},
        ).execute()

        logger.info(
            "Investor %s %s %s interest in %s",
            investor_id,
            "removed" if is_member else "added",
            kind.value,
            slug,
        )
        return not is_member
