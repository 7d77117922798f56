"""Authentication business logic service."""

import logging
from typing import Any

from src.api.middleware.error_handler import AuthenticationError
from src.core.supabase import create_auth_client

logger = logging.getLogger(__name__)


class AuthService:
    """Service for signing platform users in."""

    def __init__(self) -> None:
        """Initialize auth service with isolated Supabase client.

        Uses create_auth_client() instead of get_supabase_client() so
        that signing in never replaces the Authorization header of the
        shared backend client.
        """
        self.client = create_auth_client()

    async def login(
        self,
        email: str,
        password: str,
    ) -> dict[str, Any]:
        """Login user with email and password.

        Args:
            email: User's email address.
            password: User's password.

        Returns:
            dict: Login response with access_token, refresh_token, and user info.

        Raises:
            AuthenticationError: If the credentials are rejected.
        """
        try:
            response = self.client.auth.sign_in_with_password(
                {
                    "email": email.strip().lower(),
                    "password": password,
                }
            )
        except Exception as e:
            error_msg = str(e)
            logger.warning("Login failed for %s: %s", email, error_msg)

            if "email not confirmed" in error_msg.lower():
                raise AuthenticationError("Please verify your email before logging in") from e

            raise AuthenticationError("Invalid email or password") from e

        if not response.user or not response.session:
            raise AuthenticationError("Login failed: No session created")

        user = response.user
        session = response.session

        logger.info("User logged in: %s", user.id)

        return {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "user_id": str(user.id),
            "email": user.email or email,
            "expires_in": session.expires_in or 3600,
        }
