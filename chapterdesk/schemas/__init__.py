from .role_assignment import (
    MemberSummary, ChapterRoleAssignRequest, ZoneRoleAssignRequest,
    ChapterRoleAssignment, ZoneRoleAssignment, RemovedRoleAssignment,
    RoleHistoryEntry, MemberRoles
)
from .access_scope import (
    OwnChapterAccess, AccessScope, RoleContext,
    UserSummary, HeldChapterRole, CurrentUserAccess
)

__all__ = [
    # Role assignment schemas
    "MemberSummary", "ChapterRoleAssignRequest", "ZoneRoleAssignRequest",
    "ChapterRoleAssignment", "ZoneRoleAssignment", "RemovedRoleAssignment",
    "RoleHistoryEntry", "MemberRoles",

    # Access scope schemas
    "OwnChapterAccess", "AccessScope", "RoleContext",
    "UserSummary", "HeldChapterRole", "CurrentUserAccess",
]
