"""Startup invite business logic service."""

import logging
import secrets
from datetime import datetime, timezone
from typing import Any

from src.api.middleware.error_handler import AlreadyUsedError, NotFoundError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.invite import InviteStatus

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def generate_invite_token() -> str:
    """Generate an unguessable, URL-safe invite token (256 bits)."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class InviteService:
    """Service for issuing and resolving startup registration invites."""

    def __init__(self) -> None:
        """Initialize invite service with Supabase client."""
        self.client = get_supabase_client()
        self.table = get_settings().invites_table

    async def count_invites_for_email(self, email: str) -> int:
        """Count invites previously issued to an email address."""
        response = (
            self.client.table(self.table)
            .select("id")
            .eq("email", email)
            .execute()
        )

        return len(response.data or [])

    async def issue_invite(self, email: str, issued_by: str) -> dict[str, Any]:
        """Create a pending invite for an email address.

        Args:
            email: Address to invite.
            issued_by: User ID of the admin issuing the invite.

        Returns:
            dict: The created invite row, including its token.

        Raises:
            ValidationError: If the email address is malformed.
        """
        email = email.strip().lower()
        if "@" not in email:
            raise ValidationError(
                "A valid email address is required",
                details=[{"loc": ["email"], "msg": "Invalid email address", "type": "value_error"}],
            )

        previous = await self.count_invites_for_email(email)

        invite_data = {
            "email": email,
            "token": generate_invite_token(),
            "status": InviteStatus.PENDING.value,
            "invited_by": str(issued_by),
            "invited_at": datetime.now(timezone.utc).isoformat(),
            "invite_number": previous + 1,
        }

        response = (
            self.client.table(self.table)
            .insert(invite_data)
            .execute()
        )

        invite = response.data[0]
        logger.info("Invite #%d issued to %s (id: %s)", invite_data["invite_number"], email, invite.get("id"))
        return invite

    async def get_invite_by_token(self, token: str) -> dict[str, Any] | None:
        """Look up an invite by its token.

        Returns:
            dict | None: The invite row or None if no invite has this token.
        """
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("token", token)
            .limit(1)
            .execute()
        )

        return response.data[0] if response.data else None

    async def resolve_invite(self, token: str) -> dict[str, Any]:
        """Validate an invite token for registration.

        Args:
            token: Token from the registration link.

        Returns:
            dict: The pending invite row.

        Raises:
            NotFoundError: If no invite has this token.
            AlreadyUsedError: If the invite is no longer pending.
        """
        invite = await self.get_invite_by_token(token) if token else None

        if not invite:
            raise NotFoundError("Invite not found. Please check your invite link.")

        if invite["status"] == InviteStatus.REGISTERED.value:
            raise AlreadyUsedError(
                "This invite link has already been used to register a startup",
                details=[{"loc": ["token"], "msg": invite.get("startup_slug") or "registered", "type": "already_used"}],
            )

        if invite["status"] != InviteStatus.PENDING.value:
            raise AlreadyUsedError(f"This invite link is no longer valid ({invite['status']})")

        return invite

    async def mark_registered(self, invite_id: str, slug: str) -> dict[str, Any]:
        """Mark a pending invite as consumed by the startup registered under slug.

        The update only matches a pending invite, so of two registrations
        racing on one token exactly one consumes it.

        Returns:
            dict: The updated invite row.

        Raises:
            AlreadyUsedError: If the invite is no longer pending.
            NotFoundError: If the invite does not exist.
        """
        response = (
            self.client.table(self.table)
            .update({
                "status": InviteStatus.REGISTERED.value,
                "startup_slug": slug,
                "registered_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", str(invite_id))
            .eq("status", InviteStatus.PENDING.value)
            .execute()
        )

        if response.data:
            return response.data[0]

        current = (
            self.client.table(self.table)
            .select("id, status, startup_slug")
            .eq("id", str(invite_id))
            .limit(1)
            .execute()
        )

        if not current.data:
            raise NotFoundError(f"Invite {invite_id} not found")

        logger.warning(
            "Invite %s was consumed by %s before %s could claim it",
            invite_id,
            current.data[0].get("startup_slug"),
            slug,
        )
        raise AlreadyUsedError(
            "This invite link has already been used to register a startup",
            details=[{"loc": ["token"], "msg": current.data[0].get("startup_slug") or "registered", "type": "already_used"}],
        )

    async def list_invites(self, email: str | None = None) -> list[dict[str, Any]]:
        """List invites, newest first.

        Args:
            email: Optional filter to one address's invite history.

        Returns:
            list[dict]: Invite rows.
        """
        query = self.client.table(self.table).select("*")

        if email:
            query = query.eq("email", email.strip().lower())

        response = query.order("invited_at", desc=True).execute()

        return response.data or []
