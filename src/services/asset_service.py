"""Uploaded asset validation and storage with inline fallback."""

import base64
import logging
import re
import secrets
import time
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from src.api.middleware.error_handler import UploadError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client

logger = logging.getLogger(__name__)

LOGO_FOLDER = "startup-logos"
TEAM_PHOTO_FOLDER = "team-photos"
PITCH_DECK_FOLDER = "pitch-decks"

PITCH_DECK_MIME_TYPES = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
}
PITCH_DECK_EXTENSIONS = {"pdf", "pptx"}


@dataclass
class Attachment:
    """A file submitted with the registration form."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename or "").suffix.lstrip(".").lower()


@dataclass
class RegistrationAttachments:
    """Files submitted alongside a registration form.

    Headshots are keyed by the index of the team member they belong to.
    """

    logo: Attachment | None = None
    pitch_deck: Attachment | None = None
    headshots: dict[int, Attachment] = field(default_factory=dict)


def generate_file_name(original_name: str, prefix: str | None = None) -> str:
    """Build a collision-resistant storage file name.

    Format: ``<prefix>_<base>_<millis>_<random>.<ext>``.
    """
    path = PurePosixPath(original_name or "upload")
    extension = path.suffix.lstrip(".") or "jpg"
    base_name = re.sub(r"[^a-zA-Z0-9]", "_", path.stem) or "file"
    timestamp = int(time.time() * 1000)
    random_part = secrets.token_hex(6)
    lead = f"{prefix}_" if prefix else ""
    return f"{lead}{base_name}_{timestamp}_{random_part}.{extension}"


def to_data_uri(attachment: Attachment) -> str:
    """Encode an attachment as a base64 data URI."""
    if not attachment.data:
        raise UploadError(f"{attachment.filename or 'File'} is empty and cannot be stored")
    encoded = base64.b64encode(attachment.data).decode("ascii")
    content_type = attachment.content_type or "application/octet-stream"
    return f"data:{content_type};base64,{encoded}"


class AssetService:
    """Stores registration assets in Supabase Storage.

    Registration must never block on storage availability, so any
    upload failure falls back to embedding the asset in the record as a
    data URI.
    """

    def __init__(self) -> None:
        """Initialize asset service with Supabase client and upload limits."""
        settings = get_settings()
        self.client = get_supabase_client()
        self.bucket = settings.storage_bucket
        self.max_image_size = settings.max_image_size_bytes
        self.max_pitch_deck_size = settings.max_pitch_deck_size_bytes

    def validate_image(self, attachment: Attachment, field_name: str) -> None:
        """Check that an attachment is an image within the size limit.

        Raises:
            ValidationError: If the type or size is not acceptable.
        """
        if not (attachment.content_type or "").startswith("image/"):
            raise ValidationError(
                f"{field_name} must be an image",
                details=[{"loc": [field_name], "msg": "File must be an image", "type": "file_type"}],
            )
        if attachment.size > self.max_image_size:
            limit_mb = self.max_image_size / (1024 * 1024)
            raise ValidationError(
                f"{field_name} must be smaller than {limit_mb:.0f}MB",
                details=[{"loc": [field_name], "msg": f"File size must be less than {limit_mb:.0f}MB", "type": "file_size"}],
            )

    def validate_pitch_deck(self, attachment: Attachment, field_name: str = "pitch_deck") -> None:
        """Check that an attachment is a PDF or PPTX within the size limit.

        Raises:
            ValidationError: If the type or size is not acceptable.
        """
        is_deck = (
            attachment.content_type in PITCH_DECK_MIME_TYPES
            or attachment.extension in PITCH_DECK_EXTENSIONS
        )
        if not is_deck:
            raise ValidationError(
                "Pitch deck must be a PDF or PPTX file",
                details=[{"loc": [field_name], "msg": "Allowed types: pdf, pptx", "type": "file_type"}],
            )
        if attachment.size > self.max_pitch_deck_size:
            limit_mb = self.max_pitch_deck_size / (1024 * 1024)
            raise ValidationError(
                f"Pitch deck must be smaller than {limit_mb:.0f}MB",
                details=[{"loc": [field_name], "msg": f"File size must be less than {limit_mb:.0f}MB", "type": "file_size"}],
            )

    def upload(self, attachment: Attachment, folder: str, prefix: str | None = None) -> str:
        """Upload to the storage bucket and return the public URL.

        Raises:
            UploadError: If storage rejects the upload.
        """
        storage_path = f"{folder}/{generate_file_name(attachment.filename, prefix)}"
        try:
            bucket = self.client.storage.from_(self.bucket)
            bucket.upload(
                path=storage_path,
                file=attachment.data,
                file_options={"content-type": attachment.content_type or "application/octet-stream"},
            )
            public_url = bucket.get_public_url(storage_path)
        except Exception as e:
            raise UploadError(f"Failed to upload {attachment.filename}: {e}") from e

        if not public_url:
            raise UploadError(f"No public URL returned for {storage_path}")

        return public_url

    async def store_asset(self, attachment: Attachment, folder: str, prefix: str | None = None) -> str:
        """Store an asset, preferring storage and falling back to a data URI.

        Args:
            attachment: Validated file to store.
            folder: Storage folder, e.g. ``startup-logos``.
            prefix: Optional file name prefix, usually the owner's name.

        Returns:
            str: Public URL or ``data:`` URI.

        Raises:
            UploadError: If neither storage nor inline embedding worked.
        """
        try:
            url = self.upload(attachment, folder, prefix)
            logger.info("Uploaded %s to %s", attachment.filename, url)
            return url
        except UploadError as e:
            logger.warning("Storage upload failed, embedding %s inline: %s", attachment.filename, e.message)

        return to_data_uri(attachment)
