"""User Pydantic schemas for API request/response models."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from src.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for an admin creating a platform user."""

    model_config = ConfigDict(from_attributes=True)

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=8, max_length=100, description="Initial password")
    role: UserRole = Field(..., description="Platform role, fixed at creation")
    display_name: str | None = Field(default=None, max_length=255, description="Display name")
    college_id: str | None = Field(default=None, description="College id, required for college users")
    investor_id: str | None = Field(default=None, description="Investor id, required for investors")

    @model_validator(mode="after")
    def check_role_identifiers(self) -> "UserCreate":
        """Each role carries exactly the identifier it needs."""
        if self.role == UserRole.COLLEGE and not self.college_id:
            raise ValueError("college_id is required for college users")
        if self.role == UserRole.INVESTOR and not self.investor_id:
            raise ValueError("investor_id is required for investor users")
        if self.role != UserRole.COLLEGE and self.college_id:
            raise ValueError("college_id is only allowed for college users")
        if self.role != UserRole.INVESTOR and self.investor_id:
            raise ValueError("investor_id is only allowed for investor users")
        return self


class UserResponse(BaseModel):
    """Schema for user API responses."""

    model_config = ConfigDict(from_attributes=True)

    uid: str = Field(description="Auth user id")
    email: str = Field(description="Login email")
    role: UserRole = Field(description="Platform role")
    display_name: str | None = Field(default=None, description="Display name")
    college_id: str | None = Field(default=None, description="College id")
    investor_id: str | None = Field(default=None, description="Investor id")
