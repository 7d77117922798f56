"""Writes assembled profiles to the primary and backup tables."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.api.middleware.error_handler import (
    AlreadyUsedError,
    BackupPersistError,
    InviteStatusUpdateError,
    PersistError,
)
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.schemas.startup import StartupRecord
from src.services.invite_service import InviteService

logger = logging.getLogger(__name__)

RECONCILIATION_TABLE = "invite_reconciliations"


@dataclass
class PublishResult:
    """Outcome of publishing a profile."""

    slug: str
    replaced_existing: bool = False
    backup_saved: bool = True
    invite_reconciliation_required: bool = False


class ProfilePublishService:
    """Publishes a startup profile and consumes its invite.

    The steps are not transactional. Once the primary write succeeds the
    profile is live, and later failures are logged and compensated
    rather than surfaced. The one exception is losing the invite to a
    concurrent registration, which reverts this submission.
    """

    def __init__(self) -> None:
        """Initialize publisher with Supabase client and table names."""
        settings = get_settings()
        self.client = get_supabase_client()
        self.table = settings.startups_table
        self.backup_table = settings.backup_startups_table
        self.invite_service = InviteService()

    async def get_existing(self, slug: str) -> dict[str, Any] | None:
        """Fetch the primary profile row currently stored under slug."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )

        return response.data[0] if response.data else None

    async def write_primary(self, row: dict[str, Any]) -> None:
        """Upsert the profile into the primary table.

        Raises:
            PersistError: If the write did not succeed.
        """
        try:
            response = (
                self.client.table(self.table)
                .upsert(row, on_conflict="slug")
                .execute()
            )
        except Exception as e:
            logger.error("Primary write failed for %s: %s", row["slug"], str(e))
            raise PersistError() from e

        if not response.data:
            logger.error("Primary write for %s returned no rows", row["slug"])
            raise PersistError()

    async def write_backup(self, row: dict[str, Any]) -> None:
        """Upsert a copy of the profile into the backup table.

        Raises:
            BackupPersistError: If the write did not succeed.
        """
        backup_row = {
            **row,
            "backup_created_at": datetime.now(timezone.utc).isoformat(),
            "original_collection": self.table,
        }

        try:
            (
                self.client.table(self.backup_table)
                .upsert(backup_row, on_conflict="slug")
                .execute()
            )
        except Exception as e:
            raise BackupPersistError(f"Backup write failed for {row['slug']}: {e}") from e

    async def consume_invite(self, invite_id: str, slug: str) -> None:
        """Mark the invite registered.

        Raises:
            AlreadyUsedError: If another registration consumed the invite first.
            InviteStatusUpdateError: If the invite row could not be updated.
        """
        try:
            await self.invite_service.mark_registered(invite_id, slug)
        except AlreadyUsedError:
            raise
        except Exception as e:
            raise InviteStatusUpdateError(f"Invite {invite_id} not marked registered for {slug}: {e}") from e

    async def revert_profile(self, slug: str, previous: dict[str, Any] | None) -> None:
        """Undo this submission's writes to the primary and backup tables.

        Restores the row that was overwritten, or removes the new one.
        Failures are logged only.
        """
        try:
            if previous is None:
                self.client.table(self.table).delete().eq("slug", slug).execute()
                self.client.table(self.backup_table).delete().eq("slug", slug).execute()
            else:
                self.client.table(self.table).upsert(previous, on_conflict="slug").execute()
                await self.write_backup(previous)
        except Exception as e:
            logger.error("Could not revert profile %s after losing its invite: %s", slug, str(e))

    async def record_reconciliation(self, slug: str, invite_id: str, error: str) -> None:
        """Queue an invite for manual status repair.

        Failure here is logged only; the profile is already live.
        """
        try:
            (
                self.client.table(RECONCILIATION_TABLE)
                .insert({
                    "slug": slug,
                    "invite_id": str(invite_id),
                    "error": error,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                    "resolved": False,
                })
                .execute()
            )
        except Exception as e:
            logger.error(
                "Could not record invite reconciliation for %s (invite %s): %s",
                slug,
                invite_id,
                str(e),
            )

    async def publish_profile(self, record: StartupRecord, invite: dict[str, Any]) -> PublishResult:
        """Publish a profile and mark its invite registered.

        Args:
            record: Assembled profile.
            invite: The resolved invite row the registration came from.

        Returns:
            PublishResult: Slug plus the state of the secondary steps.

        Raises:
            PersistError: If the primary write failed. Nothing else is
                attempted in that case.
            AlreadyUsedError: If a concurrent registration consumed the
                invite first. This submission's writes are reverted.
        """
        row = record.to_row()
        slug = record.slug
        result = PublishResult(slug=slug)

        try:
            previous = await self.get_existing(slug)
        except Exception as e:
            logger.error("Could not check existing profile %s: %s", slug, str(e))
            raise PersistError() from e

        result.replaced_existing = previous is not None

        if result.replaced_existing:
            logger.warning("Profile %s already exists and will be overwritten", slug)

        await self.write_primary(row)
        logger.info("Profile %s published", slug)

        try:
            await self.write_backup(row)
        except BackupPersistError as e:
            result.backup_saved = False
            logger.warning("%s", e.message)

        try:
            await self.consume_invite(invite["id"], slug)
        except AlreadyUsedError:
            logger.warning("Invite %s was consumed concurrently, reverting %s", invite["id"], slug)
            await self.revert_profile(slug, previous)
            raise
        except InviteStatusUpdateError as e:
            result.invite_reconciliation_required = True
            logger.error("%s", e.message)
            await self.record_reconciliation(slug, invite["id"], e.message)

        return result
