"""Per-startup like counter service."""

import logging
from datetime import datetime, timezone

from src.core.supabase import get_supabase_client

logger = logging.getLogger(__name__)

LIKES_TABLE = "startup_likes"


class LikeService:
    """Service for anonymous like counters.

    Counters live in their own table so that liking never rewrites the
    profile row.
    """

    def __init__(self) -> None:
        """Initialize like service with Supabase client."""
        self.client = get_supabase_client()

    async def get_like_count(self, slug: str) -> int:
        """Get the like count, creating a zero counter if none exists."""
        response = (
            self.client.table(LIKES_TABLE)
            .select("likes")
            .eq("slug", slug)
            .maybe_single()
            .execute()
        )

        if response and response.data:
            return int(response.data.get("likes") or 0)

        (
            self.client.table(LIKES_TABLE)
            .upsert(
                {
                    "slug": slug,
                    "likes": 0,
                    "last_updated": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="slug",
                ignore_duplicates=True,
            )
            .execute()
        )
        return 0

    async def _increment(self, slug: str, delta: int) -> int:
        response = self.client.rpc(
            "increment_startup_likes",
            {"p_slug": slug, "p_delta": delta},
        ).execute()

        likes = response.data
        if isinstance(likes, list):
            likes = likes[0] if likes else 0
        if isinstance(likes, dict):
            likes = likes.get("likes", 0)

        return max(int(likes or 0), 0)

    async def like(self, slug: str) -> int:
        """Add one like and return the new count."""
        likes = await self._increment(slug, 1)
        logger.info("Startup %s liked (%d)", slug, likes)
        return likes

    async def unlike(self, slug: str) -> int:
        """Remove one like and return the new count. Never goes below zero."""
        likes = await self._increment(slug, -1)
        logger.info("Startup %s unliked (%d)", slug, likes)
        return likes
