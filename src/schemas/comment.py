"""Comment Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.comment import CommentType


class CommentCreate(BaseModel):
    """Schema for an investor comment on a startup."""

    model_config = ConfigDict(from_attributes=True)

    comment: str = Field(..., min_length=1, max_length=5000, description="Comment text")
    type: CommentType = Field(default=CommentType.GENERAL, description="Comment category")


class CommentResponse(BaseModel):
    """Schema for comment API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Comment unique identifier")
    investor_id: str = Field(description="Investor who wrote the comment")
    investor_name: str = Field(description="Investor display name at time of writing")
    startup_id: str = Field(description="Slug of the startup commented on")
    comment: str = Field(description="Comment text")
    timestamp: datetime = Field(description="When the comment was written")
    type: CommentType = Field(description="Comment category")
