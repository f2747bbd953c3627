"""
Access Scope Resolver

Derives which chapters an identity may act upon from its live role
assignments. Zone roles expand to every chapter in the zone.
"""

import logging
from typing import Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError

from chapterdesk.core.role_categories import AccessCategory, PrimaryRole, categorize_role, roles_in_category
from chapterdesk.crud.role_assignment import CHAPTER, ZONE, RoleAssignmentRepository
from chapterdesk.models.member import Member
from chapterdesk.schemas.access_scope import AccessScope, OwnChapterAccess, RoleContext

logger = logging.getLogger(__name__)

BASE_PERMISSIONS = ["dashboard.read", "performance.read"]

ACCESS_LEVEL_PERMISSIONS: Dict[str, List[str]] = {
    "zone": BASE_PERMISSIONS + ["zone.read", "chapter.read", "member.read", "export.read"],
    "chapter": BASE_PERMISSIONS + ["chapter.read", "member.read", "export.read"],
    "single-chapter": BASE_PERMISSIONS + ["chapter.read", "member.read"],
    "own-chapter": BASE_PERMISSIONS + ["chapter.read"],
    "none": [],
}


def _distinct(ids: Iterable[int]) -> List[int]:
    return list(dict.fromkeys(ids))


def primary_role_for_scope(scope: AccessScope) -> PrimaryRole:
    """Priority order: RD, then DC, then OB, then plain member."""
    if scope.zones or scope.RD:
        return PrimaryRole.REGIONAL_DIRECTOR
    if scope.DC:
        return PrimaryRole.DEVELOPMENT_COORDINATOR
    if scope.OB:
        return PrimaryRole.OFFICE_BEARER
    return PrimaryRole.MEMBER


def _context_label(access_level: str, count: int) -> str:
    if access_level == "zone":
        return "Chapters Under Your Zone" if count == 1 else "Chapters Under Your Zones"
    if access_level == "chapter":
        return "Your Assigned Chapter" if count == 1 else "Your Assigned Chapters"
    if access_level in ("single-chapter", "own-chapter"):
        return "Your Chapter"
    return "Your Data Scope"


class AccessScopeResolver:

    def __init__(self, repository: RoleAssignmentRepository):
        self.repository = repository

    def resolve_access_scope(self, user_id: int) -> AccessScope:
        member = self.repository.get_member_for_user(user_id)
        if member is None:
            # Not every account is a member
            logger.debug(f"No member profile for user {user_id}, returning empty scope")
            return AccessScope()
        return self.resolve_member_scope(member)

    def resolve_member_scope(self, member: Member) -> AccessScope:
        member_id = member.id
        home_chapter_id = member.chapter_id
        buckets: Dict[AccessCategory, List[int]] = {category: [] for category in AccessCategory}

        for assignment in self.repository.list_member_assignments(CHAPTER, member_id):
            category = categorize_role(assignment.role_type)
            if category is None:
                logger.warning(f"⚠️ Unclassified chapter role {assignment.role_type} on assignment {assignment.id}")
                continue
            buckets[category].append(assignment.chapter_id)

        zone_ids: List[int] = []
        try:
            # Savepoint, so a failure leaves the caller's session untouched
            with self.repository.db.begin_nested():
                zone_roles = self.repository.list_member_assignments(
                    ZONE, member_id, role_types=roles_in_category(AccessCategory.RD)
                )
                zone_ids = _distinct(role.zone_id for role in zone_roles)
                buckets[AccessCategory.RD].extend(self.repository.get_chapter_ids_in_zones(zone_ids))
        except SQLAlchemyError as e:
            # OB and DC survive a failed zone lookup
            logger.warning(f"⚠️ Zone role lookup failed for member {member_id}, returning scope without RD access: {e}")
            zone_ids = []
            buckets[AccessCategory.RD] = []

        scope = AccessScope(
            OB=_distinct(buckets[AccessCategory.OB]),
            RD=_distinct(buckets[AccessCategory.RD]),
            DC=_distinct(buckets[AccessCategory.DC]),
            zones=zone_ids,
        )

        if home_chapter_id is not None:
            covered = set(scope.OB) | set(scope.RD) | set(scope.DC)
            if home_chapter_id not in covered:
                scope.own_chapter = OwnChapterAccess(chapter_id=home_chapter_id)

        logger.debug(
            f"Access scope for member {member_id}: OB={scope.OB} RD={scope.RD} DC={scope.DC} "
            f"own_chapter={home_chapter_id if scope.own_chapter else None}"
        )
        return scope

    def infer_primary_role(self, user_id: int) -> PrimaryRole:
        return primary_role_for_scope(self.resolve_access_scope(user_id))

    def describe_role_context(self, user_id: int) -> RoleContext:
        """Dashboard view of the scope: primary role, access level, label and permissions."""
        scope = self.resolve_access_scope(user_id)
        primary_role = primary_role_for_scope(scope)
        authorized_zones: List[int] = []

        if primary_role == PrimaryRole.REGIONAL_DIRECTOR:
            access_level = "zone"
            authorized_chapters = list(scope.RD)
            authorized_zones = list(scope.zones)
            label_count = len(authorized_zones)
        elif primary_role == PrimaryRole.DEVELOPMENT_COORDINATOR:
            access_level = "chapter"
            authorized_chapters = list(scope.DC)
            label_count = len(authorized_chapters)
        elif primary_role == PrimaryRole.OFFICE_BEARER:
            access_level = "single-chapter"
            authorized_chapters = list(scope.OB)
            label_count = len(authorized_chapters)
        elif scope.own_chapter is not None:
            access_level = "own-chapter"
            authorized_chapters = [scope.own_chapter.chapter_id]
            label_count = 1
        else:
            access_level = "none"
            authorized_chapters = []
            label_count = 0

        return RoleContext(
            primary_role=primary_role,
            access_level=access_level,
            context_label=_context_label(access_level, label_count),
            authorized_chapters=authorized_chapters,
            authorized_zones=authorized_zones,
            permissions=list(ACCESS_LEVEL_PERMISSIONS[access_level]),
            scope=scope,
        )
