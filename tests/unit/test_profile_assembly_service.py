"""Unit tests for ProfileAssemblyService and slug generation."""

import pytest

from src.api.middleware.error_handler import ValidationError
from src.schemas.startup import StartupRegistrationForm
from src.services.asset_service import Attachment, RegistrationAttachments
from src.services.profile_assembly_service import ProfileAssemblyService, generate_slug

PNG = Attachment(filename="logo.png", content_type="image/png", data=b"\x89PNG" + b"\x00" * 16)
DECK = Attachment(filename="deck.pdf", content_type="application/pdf", data=b"%PDF-1.4 pitch")


@pytest.fixture
def assembler(fake_supabase) -> ProfileAssemblyService:
    """Create ProfileAssemblyService backed by the in-memory client."""
    return ProfileAssemblyService()


def make_form(**overrides: object) -> StartupRegistrationForm:
    data = {
        "name": "Feed App",
        "tagline": "Meals for students",
        "story": "Started in a hostel kitchen.",
        "team": [{"name": "Asha", "role": "CEO"}],
    }
    data.update(overrides)
    return StartupRegistrationForm(**data)


class TestGenerateSlug:
    """Tests for generate_slug."""

    @pytest.mark.parametrize(
        ("name", "slug"),
        [
            ("Feed App", "feed-app"),
            ("My  Cool-Startup!!", "my-cool-startup"),
            ("  --Acme--  ", "acme"),
            ("ACME!!", "acme"),
            ("Café 24/7", "caf-24-7"),
            ("!!!", ""),
        ],
    )
    def test_slug_examples(self, name: str, slug: str) -> None:
        """Test lowercasing, run collapsing and trimming."""
        assert generate_slug(name) == slug

    @pytest.mark.parametrize("name", ["Feed App", "My  Cool-Startup!!", "x_y_z", "Ünïcode Co"])
    def test_slug_is_idempotent(self, name: str) -> None:
        """Test that slugging a slug changes nothing."""
        slug = generate_slug(name)
        assert generate_slug(slug) == slug


class TestRequiredFields:
    """Tests for required field checks."""

    @pytest.mark.asyncio
    async def test_empty_name_is_named_in_error(self, assembler: ProfileAssemblyService) -> None:
        """Test that a blank name is reported by field name."""
        with pytest.raises(ValidationError) as exc_info:
            await assembler.assemble_profile(make_form(name="   "), RegistrationAttachments(), "f@example.com")

        assert "name" in exc_info.value.message
        assert [d["loc"] for d in exc_info.value.details] == [["name"]]

    @pytest.mark.asyncio
    async def test_all_missing_fields_reported_together(self, assembler: ProfileAssemblyService) -> None:
        """Test that every missing field appears in one error."""
        form = make_form(name="", tagline="", story="", team=[{"name": "", "role": "CTO"}])

        with pytest.raises(ValidationError) as exc_info:
            await assembler.assemble_profile(form, RegistrationAttachments(), "f@example.com")

        locs = [d["loc"] for d in exc_info.value.details]
        assert locs == [["name"], ["tagline"], ["story"], ["team", 0, "name"]]

    @pytest.mark.asyncio
    async def test_validation_happens_before_upload(self, assembler: ProfileAssemblyService, fake_supabase) -> None:
        """Test that nothing is uploaded when a field is missing."""
        with pytest.raises(ValidationError):
            await assembler.assemble_profile(
                make_form(story=""),
                RegistrationAttachments(logo=PNG),
                "f@example.com",
            )

        assert fake_supabase.files == {}

    @pytest.mark.asyncio
    async def test_headshot_without_team_member_rejected(self, assembler: ProfileAssemblyService) -> None:
        """Test that a headshot index beyond the team is rejected."""
        with pytest.raises(ValidationError):
            await assembler.assemble_profile(
                make_form(),
                RegistrationAttachments(headshots={3: PNG}),
                "f@example.com",
            )

    @pytest.mark.asyncio
    async def test_punctuation_only_name_rejected(self, assembler: ProfileAssemblyService) -> None:
        """Test that a name with no letters or digits cannot become a slug."""
        with pytest.raises(ValidationError):
            await assembler.assemble_profile(make_form(name="!!!"), RegistrationAttachments(), "f@example.com")


class TestAssembleProfile:
    """Tests for the assembled record."""

    @pytest.mark.asyncio
    async def test_builds_complete_record(self, assembler: ProfileAssemblyService) -> None:
        """Test slug, defaults and bookkeeping on a minimal form."""
        record = await assembler.assemble_profile(make_form(), RegistrationAttachments(), "founder@example.com")

        assert record.slug == "feed-app"
        assert record.sector == "Technology"
        assert record.status == "active"
        assert record.created_by == "founder@example.com"
        assert record.interested_investors == []
        assert record.hiring_investors == []
        assert record.is_template_compatible is True
        assert record.template_version == "1.0"
        assert record.profile_created_at == record.last_updated

    @pytest.mark.asyncio
    async def test_blank_optionals_become_none(self, assembler: ProfileAssemblyService) -> None:
        """Test that optional blanks are stored as null, never empty strings."""
        form = make_form(website="", demo_url="   ", problem="", contact_email="hello@feed.app")

        row = (await assembler.assemble_profile(form, RegistrationAttachments(), "f@example.com")).to_row()

        assert row["website"] is None
        assert row["demo_url"] is None
        assert row["problem"] is None
        assert row["contact_email"] == "hello@feed.app"
        assert "" not in row.values()

    @pytest.mark.asyncio
    async def test_uploads_logo_and_headshots(self, assembler: ProfileAssemblyService, fake_supabase) -> None:
        """Test that attachments are stored and linked into the record."""
        form = make_form(team=[{"name": "Asha", "role": "CEO"}, {"name": "Ravi", "role": "CTO"}])
        attachments = RegistrationAttachments(logo=PNG, headshots={1: PNG})

        record = await assembler.assemble_profile(form, attachments, "f@example.com")

        assert "/startup-logos/feed-app_logo_" in record.logo
        assert record.team[0].headshot is None
        assert "/team-photos/ravi_logo_" in record.team[1].headshot
        assert len(fake_supabase.files) == 2

    @pytest.mark.asyncio
    async def test_logo_falls_back_to_data_uri(self, assembler: ProfileAssemblyService, fake_supabase) -> None:
        """Test that a failing store still yields a usable logo."""
        fake_supabase.storage_fails = True

        record = await assembler.assemble_profile(make_form(), RegistrationAttachments(logo=PNG), "f@example.com")

        assert record.logo.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_uploads_pitch_deck(self, assembler: ProfileAssemblyService, fake_supabase) -> None:
        """Test that an uploaded deck replaces any deck link on the form."""
        form = make_form(pitch_deck="https://drive.example.com/old-deck")

        record = await assembler.assemble_profile(form, RegistrationAttachments(pitch_deck=DECK), "f@example.com")

        assert "/pitch-decks/feed-app_deck_" in record.pitch_deck
        assert record.pitch_deck.endswith(".pdf")
        assert list(fake_supabase.files.values()) == [DECK.data]

    @pytest.mark.asyncio
    async def test_pitch_deck_falls_back_to_data_uri(
        self, assembler: ProfileAssemblyService, fake_supabase
    ) -> None:
        """Test that a deck is embedded when storage is down."""
        fake_supabase.storage_fails = True

        record = await assembler.assemble_profile(make_form(), RegistrationAttachments(pitch_deck=DECK), "f@example.com")

        assert record.pitch_deck.startswith("data:application/pdf;base64,")

    @pytest.mark.asyncio
    async def test_pitch_deck_link_kept_without_upload(self, assembler: ProfileAssemblyService) -> None:
        """Test that a deck link typed into the form is stored as given."""
        form = make_form(pitch_deck="https://drive.example.com/deck")

        record = await assembler.assemble_profile(form, RegistrationAttachments(), "f@example.com")

        assert record.pitch_deck == "https://drive.example.com/deck"

    @pytest.mark.asyncio
    async def test_badges_deduplicated(self, assembler: ProfileAssemblyService) -> None:
        """Test that the badge set holds no duplicates."""
        form = make_form(badges=["AI/ML", "Hiring", "AI/ML", " "])

        record = await assembler.assemble_profile(form, RegistrationAttachments(), "f@example.com")

        assert record.badges == ["AI/ML", "Hiring"]
