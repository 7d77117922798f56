"""Admin comment overview route."""

from fastapi import APIRouter, Query

from src.api.deps import AdminUser
from src.models.comment import CommentType
from src.schemas.comment import CommentResponse
from src.services.comment_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get(
    "",
    response_model=list[CommentResponse],
    summary="List all comments",
    description="Lists investor comments across all startups, newest first. Admin only.",
)
async def list_comments(
    admin: AdminUser,
    kind: CommentType | None = Query(default=None, alias="type", description="Filter by comment type"),
) -> list[CommentResponse]:
    """List every investor comment."""
    comments = await CommentService().list_comments(kind)
    return [CommentResponse(**comment) for comment in comments]
