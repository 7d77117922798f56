"""Startup profile API routes."""

from fastapi import APIRouter, Query, status

from src.api.deps import AdminUser, CurrentUser, InvestorUser
from src.models.startup import StartupStatus
from src.schemas.comment import CommentCreate, CommentResponse
from src.schemas.startup import (
    InterestToggleRequest,
    InterestToggleResponse,
    LikeCountResponse,
    StartupProfileResponse,
    StartupUpdate,
)
from src.services.comment_service import CommentService
from src.services.like_service import LikeService
from src.services.startup_service import StartupService

router = APIRouter(prefix="/startups", tags=["startups"])


@router.get(
    "",
    response_model=list[StartupProfileResponse],
    summary="List startups",
    description="Lists published startup profiles, newest first.",
)
async def list_startups(
    status_filter: StartupStatus | None = Query(default=None, alias="status", description="Filter by status"),
) -> list[StartupProfileResponse]:
    """List startup profiles for the showcase and dashboards."""
    profiles = await StartupService().list_startups(status_filter)
    return [StartupProfileResponse(**profile) for profile in profiles]


@router.get(
    "/{slug}",
    response_model=StartupProfileResponse,
    summary="Get startup profile",
    description="Returns a startup profile by slug, falling back to the backup copy when needed.",
    responses={404: {"description": "Profile not found"}},
)
async def get_startup(slug: str) -> StartupProfileResponse:
    """Get a public startup profile."""
    profile = await StartupService().resolve_profile(slug)
    return StartupProfileResponse(**profile)


@router.patch(
    "/{slug}",
    response_model=StartupProfileResponse,
    summary="Update startup profile",
    description="Edits profile fields. The slug cannot be changed. Admin only.",
    responses={404: {"description": "Profile not found"}},
)
async def update_startup(slug: str, data: StartupUpdate, admin: AdminUser) -> StartupProfileResponse:
    """Apply an admin edit to a startup profile."""
    profile = await StartupService().update_startup(slug, data)
    return StartupProfileResponse(**profile)


@router.post(
    "/{slug}/interest",
    response_model=InterestToggleResponse,
    summary="Toggle investor interest",
    description="Adds the investor to the chosen interest set, or removes them if already present. Investors only.",
    responses={404: {"description": "Profile not found"}},
)
async def toggle_interest(
    slug: str,
    data: InterestToggleRequest,
    investor: InvestorUser,
) -> InterestToggleResponse:
    """Toggle the current investor's interest in a startup."""
    investor_id = investor.investor_id or str(investor.user_id)
    is_member = await StartupService().toggle_interest(slug, investor_id, data.kind)
    return InterestToggleResponse(
        slug=slug,
        kind=data.kind,
        investor_id=investor_id,
        is_member=is_member,
    )


@router.get(
    "/{slug}/comments",
    response_model=list[CommentResponse],
    summary="List comments on a startup",
    description="Lists investor comments on a startup, newest first.",
)
async def list_startup_comments(slug: str, user: CurrentUser) -> list[CommentResponse]:
    """List comments left on a startup."""
    comments = await CommentService().list_comments_for_startup(slug)
    return [CommentResponse(**comment) for comment in comments]


@router.post(
    "/{slug}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a startup",
    description="Adds an investor comment. Comments cannot be edited or deleted. Investors only.",
    responses={404: {"description": "Profile not found"}},
)
async def add_comment(slug: str, data: CommentCreate, investor: InvestorUser) -> CommentResponse:
    """Add an investor comment to a startup."""
    comment = await CommentService().add_comment(
        slug,
        investor_id=investor.investor_id or str(investor.user_id),
        investor_name=investor.display_name or investor.email or "Investor",
        text=data.comment,
        kind=data.type,
    )
    return CommentResponse(**comment)


@router.get(
    "/{slug}/likes",
    response_model=LikeCountResponse,
    summary="Get like count",
    responses={404: {"description": "Profile not found"}},
)
async def get_likes(slug: str) -> LikeCountResponse:
    """Get the like count for a startup."""
    await StartupService().resolve_profile(slug)
    likes = await LikeService().get_like_count(slug)
    return LikeCountResponse(slug=slug, likes=likes)


@router.post(
    "/{slug}/likes",
    response_model=LikeCountResponse,
    summary="Like a startup",
    responses={404: {"description": "Profile not found"}},
)
async def like_startup(slug: str) -> LikeCountResponse:
    """Add a like to a startup."""
    await StartupService().resolve_profile(slug)
    likes = await LikeService().like(slug)
    return LikeCountResponse(slug=slug, likes=likes)


@router.delete(
    "/{slug}/likes",
    response_model=LikeCountResponse,
    summary="Unlike a startup",
    responses={404: {"description": "Profile not found"}},
)
async def unlike_startup(slug: str) -> LikeCountResponse:
    """Remove a like from a startup."""
    await StartupService().resolve_profile(slug)
    likes = await LikeService().unlike(slug)
    return LikeCountResponse(slug=slug, likes=likes)
