"""Comment model type definitions for database operations."""

from datetime import datetime
from enum import Enum
from typing import TypedDict


class CommentType(str, Enum):
    """Comment categories an investor can leave on a startup."""

    INVESTMENT = "investment"
    HIRING = "hiring"
    GENERAL = "general"


class Comment(TypedDict):
    """Comment table row representation. Comments are append-only."""

    id: str
    investor_id: str
    investor_name: str
    startup_id: str
    comment: str
    timestamp: datetime
    type: CommentType
