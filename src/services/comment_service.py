"""Investor comment service."""

import logging
from datetime import datetime, timezone
from typing import Any

from src.api.middleware.error_handler import ValidationError
from src.core.supabase import get_supabase_client
from src.models.comment import CommentType
from src.services.startup_service import StartupService

logger = logging.getLogger(__name__)


class CommentService:
    """Service for append-only investor comments on startups."""

    def __init__(self) -> None:
        """Initialize comment service with Supabase client."""
        self.client = get_supabase_client()
        self.startup_service = StartupService()

    async def add_comment(
        self,
        slug: str,
        investor_id: str,
        investor_name: str,
        text: str,
        kind: CommentType = CommentType.GENERAL,
    ) -> dict[str, Any]:
        """Append a comment to a startup.

        Args:
            slug: Startup slug.
            investor_id: Commenting investor.
            investor_name: Investor display name, stored with the comment.
            text: Comment text.
            kind: Comment category.

        Returns:
            dict: The created comment row.

        Raises:
            ValidationError: If the text is empty.
            NotFoundError: If the startup does not exist.
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError(
                "Comment cannot be empty",
                details=[{"loc": ["comment"], "msg": "Comment is required", "type": "missing"}],
            )

        await self.startup_service.resolve_profile(slug)

        comment_data = {
            "investor_id": investor_id,
            "investor_name": investor_name,
            "startup_id": slug,
            "comment": text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": kind.value,
        }

        response = (
            self.client.table("comments")
            .insert(comment_data)
            .execute()
        )

        comment = response.data[0]
        logger.info("Investor %s commented on %s (%s)", investor_id, slug, kind.value)
        return comment

    async def list_comments_for_startup(self, slug: str) -> list[dict[str, Any]]:
        """List comments on one startup, newest first."""
        response = (
            self.client.table("comments")
            .select("*")
            .eq("startup_id", slug)
            .order("timestamp", desc=True)
            .execute()
        )

        return response.data or []

    async def list_comments(self, kind: CommentType | None = None) -> list[dict[str, Any]]:
        """List all comments across startups, newest first.

        Args:
            kind: Optional category filter.
        """
        query = self.client.table("comments").select("*")

        if kind:
            query = query.eq("type", kind.value)

        response = query.order("timestamp", desc=True).execute()

        return response.data or []
