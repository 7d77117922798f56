"""Platform user management service."""

import logging
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.core.supabase import get_supabase_client
from src.models.user import UserRole
from src.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Service for admin-created platform accounts.

    Every account is a Supabase Auth user plus a row in the users table
    holding its role and role-specific identifier.
    """

    def __init__(self) -> None:
        """Initialize user service with Supabase client."""
        self.client = get_supabase_client()

    async def create_user(self, data: UserCreate) -> dict[str, Any]:
        """Create an auth user and its platform account row.

        Args:
            data: Account details, already checked for role/id consistency.

        Returns:
            dict: The created users row.

        Raises:
            ValidationError: If the auth user could not be created.
        """
        email = data.email.strip().lower()

        try:
            auth_response = self.client.auth.admin.create_user(
                {
                    "email": email,
                    "password": data.password,
                    "email_confirm": True,
                    "user_metadata": {
                        "role": data.role.value,
                        "display_name": data.display_name,
                    },
                }
            )
        except Exception as e:
            error_msg = str(e)
            logger.error("Auth user creation failed for %s: %s", email, error_msg)
            if "already" in error_msg.lower():
                raise ValidationError("An account with this email already exists") from e
            raise ValidationError(f"Could not create user: {error_msg}") from e

        uid = str(auth_response.user.id)

        user_data = {
            "uid": uid,
            "email": email,
            "role": data.role.value,
            "display_name": data.display_name,
            "college_id": data.college_id if data.role == UserRole.COLLEGE else None,
            "investor_id": data.investor_id if data.role == UserRole.INVESTOR else None,
        }

        try:
            response = (
                self.client.table("users")
                .insert(user_data)
                .execute()
            )
        except Exception:
            logger.error("Users row insert failed for %s, removing auth user", uid)
            self.client.auth.admin.delete_user(uid)
            raise

        logger.info("Created %s user %s (%s)", data.role.value, uid, email)
        return response.data[0]

    async def get_user(self, uid: UUID | str) -> dict[str, Any] | None:
        """Get a platform account by auth user id.

        Returns:
            dict | None: The users row or None if not found.
        """
        response = (
            self.client.table("users")
            .select("*")
            .eq("uid", str(uid))
            .maybe_single()
            .execute()
        )

        return response.data if response and response.data else None

    async def require_user(self, uid: UUID | str) -> dict[str, Any]:
        """Get a platform account, raising if it does not exist.

        Raises:
            NotFoundError: If no users row exists for uid.
        """
        user = await self.get_user(uid)
        if not user:
            raise NotFoundError("User account not found")
        return user

    async def list_users(self, role: UserRole | None = None) -> list[dict[str, Any]]:
        """List platform accounts.

        Args:
            role: Optional role filter.

        Returns:
            list[dict]: Users rows ordered by email.
        """
        query = self.client.table("users").select("*")

        if role:
            query = query.eq("role", role.value)

        response = query.order("email").execute()

        return response.data or []
