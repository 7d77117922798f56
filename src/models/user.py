"""User model type definitions for database operations."""

from enum import Enum
from typing import TypedDict


class UserRole(str, Enum):
    """Roles a platform user can hold. Fixed at creation."""

    ADMIN = "admin"
    INVESTOR = "investor"
    COLLEGE = "college"


class User(TypedDict):
    """Users table row representation.

    Keyed by the Supabase Auth user id. College users carry college_id,
    investors carry investor_id, admins carry neither.
    """

    uid: str
    email: str
    role: UserRole
    display_name: str | None
    college_id: str | None
    investor_id: str | None
