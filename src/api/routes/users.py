"""Platform user API routes."""

from fastapi import APIRouter, Query, status

from src.api.deps import AdminUser, CurrentAccount
from src.models.user import UserRole
from src.schemas.user import UserCreate, UserResponse
from src.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current account",
    description="Returns the platform account of the authenticated user, including their role.",
)
async def get_me(account: CurrentAccount) -> UserResponse:
    """Get the current user's account."""
    return UserResponse(
        uid=str(account.user_id),
        email=account.email or "",
        role=account.role,
        display_name=account.display_name,
        college_id=account.college_id,
        investor_id=account.investor_id,
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Creates an admin, investor or college account. Admin only.",
)
async def create_user(data: UserCreate, admin: AdminUser) -> UserResponse:
    """Create a platform user.

    Args:
        data: Account details.
        admin: The authenticated admin.

    Returns:
        UserResponse: The created account.
    """
    user = await UserService().create_user(data)
    return UserResponse(**user)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="Lists platform accounts, optionally filtered by role. Admin only.",
)
async def list_users(
    admin: AdminUser,
    role: UserRole | None = Query(default=None, description="Filter by role"),
) -> list[UserResponse]:
    """List platform users."""
    users = await UserService().list_users(role)
    return [UserResponse(**user) for user in users]
