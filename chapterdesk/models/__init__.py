from .base import BaseModel
from .user import User, UserRole, ADMIN_ROLES
from .zone import Zone
from .chapter import Chapter
from .member import Member
from .role_assignment import (
    ChapterRoleType, ZoneRoleType, RoleHistoryAction,
    ChapterRoleAssignment, ZoneRoleAssignment,
    ChapterRoleHistory, ZoneRoleHistory,
)

__all__ = [
    "BaseModel", "User", "UserRole", "ADMIN_ROLES", "Zone", "Chapter", "Member",
    "ChapterRoleType", "ZoneRoleType", "RoleHistoryAction",
    "ChapterRoleAssignment", "ZoneRoleAssignment",
    "ChapterRoleHistory", "ZoneRoleHistory",
]
