"""Database model type definitions."""

from src.models.comment import Comment, CommentType
from src.models.invite import Invite, InviteReconciliation, InviteStatus
from src.models.startup import InterestKind, Startup, StartupLikes, StartupStatus, TeamMember
from src.models.user import User, UserRole

__all__ = [
    "Comment",
    "CommentType",
    "Invite",
    "InviteReconciliation",
    "InviteStatus",
    "InterestKind",
    "Startup",
    "StartupLikes",
    "StartupStatus",
    "TeamMember",
    "User",
    "UserRole",
]
