"""Invite-driven startup registration workflow."""

import logging
from typing import Any

from src.api.middleware.error_handler import EmailDeliveryError
from src.schemas.startup import StartupRegistrationForm
from src.services.asset_service import RegistrationAttachments
from src.services.email_service import EmailService
from src.services.invite_service import InviteService
from src.services.profile_assembly_service import ProfileAssemblyService
from src.services.profile_publish_service import ProfilePublishService

logger = logging.getLogger(__name__)


class RegistrationService:
    """Runs a registration from invite token to live profile.

    Steps run in order: resolve the invite, assemble the profile,
    publish it, then send the welcome email. Validation, upload and
    primary write failures abort before the invite is touched.
    """

    def __init__(self) -> None:
        """Initialize registration workflow with its collaborating services."""
        self.invite_service = InviteService()
        self.assembler = ProfileAssemblyService()
        self.publisher = ProfilePublishService()
        self.email_service = EmailService()

    async def register(
        self,
        token: str,
        form: StartupRegistrationForm,
        attachments: RegistrationAttachments | None = None,
    ) -> dict[str, Any]:
        """Register a startup through an invite link.

        Args:
            token: Invite token from the registration link.
            form: Registration form data.
            attachments: Uploaded logo, pitch deck and headshots.

        Returns:
            dict: slug, profile_url, welcome_email_sent,
                invite_reconciliation_required and warnings.

        Raises:
            NotFoundError: If the invite does not exist.
            AlreadyUsedError: If the invite was already consumed.
            ValidationError: If the form or attachments are invalid.
            UploadError: If an asset could not be stored.
            PersistError: If the profile could not be saved.
        """
        invite = await self.invite_service.resolve_invite(token)

        record = await self.assembler.assemble_profile(
            form,
            attachments or RegistrationAttachments(),
            created_by=invite["email"],
        )

        result = await self.publisher.publish_profile(record, invite)

        warnings: list[str] = []
        if result.invite_reconciliation_required:
            warnings.append("Your profile is live, but the invite could not be closed. Our team has been notified.")

        welcome_email_sent = True
        try:
            await self.email_service.send_welcome_email(invite["email"], record.name, result.slug)
        except EmailDeliveryError as e:
            welcome_email_sent = False
            logger.warning("Welcome email for %s not delivered: %s", result.slug, e.message)
            warnings.append("Your profile is live, but the welcome email could not be sent.")

        logger.info("Registration complete for %s via invite %s", result.slug, invite["id"])

        return {
            "slug": result.slug,
            "profile_url": self.email_service.profile_link(result.slug),
            "welcome_email_sent": welcome_email_sent,
            "invite_reconciliation_required": result.invite_reconciliation_required,
            "warnings": warnings,
        }
