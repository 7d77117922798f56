"""Unit tests for UserService."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.models.user import UserRole
from src.schemas.user import UserCreate
from src.services.user_service import UserService


@pytest.fixture
def user_service(fake_supabase) -> UserService:
    """Create UserService backed by the in-memory client."""
    return UserService()


class TestUserCreateSchema:
    """Tests for role identifier rules on UserCreate."""

    def test_investor_requires_investor_id(self) -> None:
        """Test that investors must carry an investor id."""
        with pytest.raises(PydanticValidationError):
            UserCreate(email="i@example.com", password="password123", role=UserRole.INVESTOR)

    def test_admin_cannot_carry_college_id(self) -> None:
        """Test that identifiers are only allowed on their own role."""
        with pytest.raises(PydanticValidationError):
            UserCreate(
                email="a@example.com",
                password="password123",
                role=UserRole.ADMIN,
                college_id="college-1",
            )


class TestCreateUser:
    """Tests for create_user method."""

    @pytest.mark.asyncio
    async def test_creates_auth_user_and_row(self, user_service: UserService, fake_supabase) -> None:
        """Test that a users row is written with the auth uid."""
        user = await user_service.create_user(
            UserCreate(
                email="Priya@Example.com",
                password="password123",
                role=UserRole.INVESTOR,
                display_name="Priya",
                investor_id="inv-42",
            )
        )

        assert user["email"] == "priya@example.com"
        assert user["role"] == "investor"
        assert user["investor_id"] == "inv-42"
        assert user["college_id"] is None
        assert fake_supabase.rows("users")[0]["uid"] == user["uid"]

    @pytest.mark.asyncio
    async def test_row_failure_removes_auth_user(self, user_service: UserService, fake_supabase) -> None:
        """Test that a failed row insert does not leave an orphan auth user."""
        fake_supabase.failing_tables.add("users")

        with pytest.raises(RuntimeError):
            await user_service.create_user(
                UserCreate(email="a@example.com", password="password123", role=UserRole.ADMIN)
            )

        fake_supabase.auth.admin.delete_user.assert_called_once()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, user_service: UserService, fake_supabase) -> None:
        """Test that an existing auth email is reported as a validation error."""

        def reject(attributes: dict) -> None:
            raise RuntimeError("A user with this email address has already been registered")

        fake_supabase.auth.admin.create_user = reject

        with pytest.raises(ValidationError) as exc_info:
            await user_service.create_user(
                UserCreate(email="a@example.com", password="password123", role=UserRole.ADMIN)
            )

        assert "already exists" in exc_info.value.message


class TestGetUsers:
    """Tests for user lookup and listing."""

    @pytest.mark.asyncio
    async def test_require_user_missing(self, user_service: UserService) -> None:
        """Test that an unknown uid raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await user_service.require_user("00000000-0000-0000-0000-000000000000")

    @pytest.mark.asyncio
    async def test_list_by_role(self, user_service: UserService, fake_supabase) -> None:
        """Test role filtering and email ordering."""
        fake_supabase.tables["users"] = [
            {"uid": "1", "email": "z@example.com", "role": "investor"},
            {"uid": "2", "email": "a@example.com", "role": "investor"},
            {"uid": "3", "email": "m@example.com", "role": "admin"},
        ]

        users = await user_service.list_users(UserRole.INVESTOR)

        assert [u["email"] for u in users] == ["a@example.com", "z@example.com"]
