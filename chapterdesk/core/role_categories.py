# File: chapterdesk/core/role_categories.py
"""
Single classification table from role type to access category.

OB  office bearers, chapter-local leadership
DC  chapter-local coordinator and mentor roles
RD  zone-level leadership, cascades to every chapter in the zone

New role types are registered here and nowhere else.
"""
import enum
from typing import Dict, FrozenSet, Optional, Union

from chapterdesk.models.role_assignment import ChapterRoleType, ZoneRoleType


class AccessCategory(str, enum.Enum):
    OB = "OB"
    RD = "RD"
    DC = "DC"


RoleType = Union[ChapterRoleType, ZoneRoleType]

ROLE_CATEGORIES: Dict[RoleType, AccessCategory] = {
    ChapterRoleType.CHAPTER_HEAD: AccessCategory.OB,
    ChapterRoleType.SECRETARY: AccessCategory.OB,
    ChapterRoleType.TREASURER: AccessCategory.OB,
    ChapterRoleType.GUARDIAN: AccessCategory.DC,
    ChapterRoleType.DISTRICT_COORDINATOR: AccessCategory.DC,
    ChapterRoleType.REGIONAL_COORDINATOR: AccessCategory.DC,
    ChapterRoleType.DEVELOPMENT_COORDINATOR: AccessCategory.DC,
    ZoneRoleType.REGIONAL_DIRECTOR: AccessCategory.RD,
    ZoneRoleType.JOINT_SECRETARY: AccessCategory.RD,
}


def categorize_role(role_type: RoleType) -> Optional[AccessCategory]:
    return ROLE_CATEGORIES.get(role_type)


def roles_in_category(category: AccessCategory) -> FrozenSet[RoleType]:
    return frozenset(role for role, cat in ROLE_CATEGORIES.items() if cat == category)


def is_office_bearer_role(role_type: RoleType) -> bool:
    return categorize_role(role_type) == AccessCategory.OB


class PrimaryRole(str, enum.Enum):
    """Coarse display label, never a substitute for the category breakdown."""
    REGIONAL_DIRECTOR = "regional_director"
    DEVELOPMENT_COORDINATOR = "development_coordinator"
    OFFICE_BEARER = "office_bearer"
    MEMBER = "member"
