"""Authentication API routes."""

from fastapi import APIRouter

from src.schemas.auth import LoginRequest, LoginResponse
from src.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login user",
    description="Authenticate an admin, investor or college user with email and password.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(data: LoginRequest) -> LoginResponse:
    """Login with email and password.

    Args:
        data: Login credentials.

    Returns:
        LoginResponse: Access token, refresh token and user info.
    """
    result = await AuthService().login(email=data.email, password=data.password)
    return LoginResponse(**result)
