"""Unit tests for AssetService."""

import base64
import re
from unittest.mock import MagicMock, patch

import pytest

from src.api.middleware.error_handler import UploadError, ValidationError
from src.services.asset_service import (
    LOGO_FOLDER,
    Attachment,
    AssetService,
    generate_file_name,
    to_data_uri,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def asset_service(fake_supabase) -> AssetService:
    """Create AssetService backed by the in-memory client."""
    return AssetService()


def image(name: str = "logo.png", data: bytes = PNG_BYTES, content_type: str = "image/png") -> Attachment:
    return Attachment(filename=name, content_type=content_type, data=data)


class TestGenerateFileName:
    """Tests for generate_file_name."""

    def test_follows_prefix_base_time_random_pattern(self) -> None:
        """Test the generated name layout."""
        name = generate_file_name("My Logo!.png", prefix="feed-app")

        assert re.fullmatch(r"feed-app_My_Logo__\d+_[0-9a-f]{12}\.png", name)

    def test_names_do_not_collide(self) -> None:
        """Test that the same upload twice gets two names."""
        assert generate_file_name("a.png") != generate_file_name("a.png")


class TestValidation:
    """Tests for attachment validation."""

    def test_accepts_image(self, asset_service: AssetService) -> None:
        """Test that a small image passes."""
        asset_service.validate_image(image(), "logo")

    def test_rejects_non_image(self, asset_service: AssetService) -> None:
        """Test that a PDF is not accepted as a logo."""
        with pytest.raises(ValidationError) as exc_info:
            asset_service.validate_image(image("logo.pdf", content_type="application/pdf"), "logo")

        assert exc_info.value.details[0]["loc"] == ["logo"]

    def test_rejects_oversize_image(self, asset_service: AssetService) -> None:
        """Test the 5MB image limit."""
        big = image(data=b"x" * (5 * 1024 * 1024 + 1))

        with pytest.raises(ValidationError):
            asset_service.validate_image(big, "headshot_0")

    def test_accepts_pptx_by_extension(self, asset_service: AssetService) -> None:
        """Test that a deck with a generic content type but pptx extension passes."""
        deck = Attachment(filename="deck.pptx", content_type="application/octet-stream", data=b"PK")

        asset_service.validate_pitch_deck(deck)

    def test_rejects_word_document_deck(self, asset_service: AssetService) -> None:
        """Test that other document types are rejected."""
        deck = Attachment(filename="deck.docx", content_type="application/msword", data=b"doc")

        with pytest.raises(ValidationError):
            asset_service.validate_pitch_deck(deck)

    def test_rejects_oversize_deck(self, asset_service: AssetService) -> None:
        """Test the 10MB pitch deck limit."""
        deck = Attachment(filename="deck.pdf", content_type="application/pdf", data=b"x" * (10 * 1024 * 1024 + 1))

        with pytest.raises(ValidationError):
            asset_service.validate_pitch_deck(deck)


class TestStoreAsset:
    """Tests for store_asset method."""

    @pytest.mark.asyncio
    async def test_returns_public_url_on_upload(self, asset_service: AssetService, fake_supabase) -> None:
        """Test that a successful upload yields the bucket's public URL."""
        url = await asset_service.store_asset(image(), LOGO_FOLDER, prefix="feed-app")

        assert url.startswith("https://test-project.supabase.co/storage/v1/object/public/startup-assets/startup-logos/")
        assert list(fake_supabase.files.values()) == [PNG_BYTES]

    @pytest.mark.asyncio
    async def test_falls_back_to_data_uri_when_storage_fails(
        self, asset_service: AssetService, fake_supabase
    ) -> None:
        """Test that storage failure never blocks registration."""
        fake_supabase.storage_fails = True

        url = await asset_service.store_asset(image(), LOGO_FOLDER)

        assert url == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

    @pytest.mark.asyncio
    async def test_falls_back_when_bucket_lookup_fails(self, test_settings) -> None:
        """Test that an error opening the bucket is handled like a failed upload."""
        client = MagicMock()
        client.storage.from_.side_effect = RuntimeError("bucket not found")
        with patch("src.services.asset_service.get_supabase_client", return_value=client):
            service = AssetService()

        url = await service.store_asset(image(), LOGO_FOLDER)

        assert url.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_raises_when_fallback_also_fails(self, asset_service: AssetService, fake_supabase) -> None:
        """Test that an empty file that cannot be uploaded raises UploadError."""
        fake_supabase.storage_fails = True

        with pytest.raises(UploadError):
            await asset_service.store_asset(image(data=b""), LOGO_FOLDER)


def test_data_uri_defaults_content_type() -> None:
    """Test that a missing content type falls back to octet-stream."""
    uri = to_data_uri(Attachment(filename="x", content_type="", data=b"abc"))

    assert uri == "data:application/octet-stream;base64,YWJj"
