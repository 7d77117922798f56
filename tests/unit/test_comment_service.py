"""Unit tests for CommentService."""

import pytest

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.models.comment import CommentType
from src.services.comment_service import CommentService


@pytest.fixture
def comment_service(fake_supabase) -> CommentService:
    """Create CommentService with one published startup."""
    fake_supabase.tables["startups"] = [{"slug": "feed-app", "name": "Feed App"}]
    return CommentService()


class TestAddComment:
    """Tests for add_comment method."""

    @pytest.mark.asyncio
    async def test_stores_comment_with_timestamp(self, comment_service: CommentService, fake_supabase) -> None:
        """Test that a comment is appended with its author and type."""
        comment = await comment_service.add_comment(
            "feed-app",
            investor_id="inv-1",
            investor_name="Priya",
            text="  Great traction  ",
            kind=CommentType.INVESTMENT,
        )

        assert comment["comment"] == "Great traction"
        assert comment["startup_id"] == "feed-app"
        assert comment["investor_name"] == "Priya"
        assert comment["type"] == "investment"
        assert comment["timestamp"]
        assert len(fake_supabase.rows("comments")) == 1

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, comment_service: CommentService, fake_supabase) -> None:
        """Test that whitespace-only comments are not stored."""
        with pytest.raises(ValidationError):
            await comment_service.add_comment("feed-app", "inv-1", "Priya", "   ")

        assert fake_supabase.rows("comments") == []

    @pytest.mark.asyncio
    async def test_unknown_startup_rejected(self, comment_service: CommentService) -> None:
        """Test that comments need an existing startup."""
        with pytest.raises(NotFoundError):
            await comment_service.add_comment("nope", "inv-1", "Priya", "Hello")


class TestListComments:
    """Tests for comment listing."""

    @pytest.mark.asyncio
    async def test_comments_are_append_only_and_newest_first(
        self, comment_service: CommentService, fake_supabase
    ) -> None:
        """Test that repeated comments are all kept and listed newest first."""
        fake_supabase.tables["comments"] = [
            {"id": "c1", "startup_id": "feed-app", "comment": "first", "type": "general",
             "timestamp": "2026-01-01T00:00:00+00:00"},
            {"id": "c2", "startup_id": "feed-app", "comment": "second", "type": "hiring",
             "timestamp": "2026-01-02T00:00:00+00:00"},
            {"id": "c3", "startup_id": "other", "comment": "elsewhere", "type": "general",
             "timestamp": "2026-01-03T00:00:00+00:00"},
        ]

        comments = await comment_service.list_comments_for_startup("feed-app")

        assert [c["comment"] for c in comments] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_filter_by_type(self, comment_service: CommentService, fake_supabase) -> None:
        """Test the admin type filter."""
        fake_supabase.tables["comments"] = [
            {"id": "c1", "startup_id": "a", "comment": "x", "type": "general", "timestamp": "1"},
            {"id": "c2", "startup_id": "b", "comment": "y", "type": "hiring", "timestamp": "2"},
        ]

        comments = await comment_service.list_comments(CommentType.HIRING)

        assert [c["id"] for c in comments] == ["c2"]
