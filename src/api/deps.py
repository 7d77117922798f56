"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt, extract_bearer_token
from src.api.middleware.error_handler import AuthorizationError
from src.models.user import UserRole
from src.schemas.auth import AccountContext, UserContext
from src.services.user_service import UserService


async def get_current_user(
    authorization: Annotated[str, Header(description="Bearer token")] = "",
) -> UserContext:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (Bearer token).

    Returns:
        UserContext: The authenticated user's context.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    try:
        payload = decode_jwt(extract_bearer_token(authorization))
        return payload.to_user_context()

    except AuthError as e:
        detail = "Token has expired" if e.code == AuthErrorCode.TOKEN_EXPIRED else e.message
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token subject is not a valid user id",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


CurrentUser = Annotated[UserContext, Depends(get_current_user)]


async def get_current_account(user: CurrentUser) -> AccountContext:
    """Join the authenticated user with their platform account.

    Raises:
        AuthorizationError: 403 if the user has no platform account.
    """
    account = await UserService().get_user(user.user_id)

    if not account:
        raise AuthorizationError("No platform account exists for this user")

    return AccountContext(
        user_id=user.user_id,
        email=account.get("email") or user.email,
        role=account["role"],
        display_name=account.get("display_name"),
        college_id=account.get("college_id"),
        investor_id=account.get("investor_id"),
    )


CurrentAccount = Annotated[AccountContext, Depends(get_current_account)]


def require_role(*roles: UserRole):
    """Build a dependency that admits only accounts holding one of roles."""

    async def check_role(account: CurrentAccount) -> AccountContext:
        if account.role not in roles:
            allowed = ", ".join(role.value for role in roles)
            raise AuthorizationError(f"This action requires one of these roles: {allowed}")
        return account

    return check_role


AdminUser = Annotated[AccountContext, Depends(require_role(UserRole.ADMIN))]
InvestorUser = Annotated[AccountContext, Depends(require_role(UserRole.INVESTOR))]
