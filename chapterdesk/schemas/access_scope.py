# File: chapterdesk/schemas/access_scope.py
from pydantic import BaseModel
from typing import List, Literal, Optional
from chapterdesk.core.role_categories import AccessCategory, PrimaryRole
from chapterdesk.models.role_assignment import ChapterRoleType

class OwnChapterAccess(BaseModel):
    chapter_id: int
    access_type: Literal["own_chapter"] = "own_chapter"

class AccessScope(BaseModel):
    """Chapters an identity may act upon, grouped by access category."""
    OB: List[int] = []
    RD: List[int] = []
    DC: List[int] = []
    # Zones whose RD roles produced the RD chapters
    zones: List[int] = []
    # Home chapter, present only when no category already covers it
    own_chapter: Optional[OwnChapterAccess] = None

    def chapters_for(self, category: AccessCategory) -> List[int]:
        return list(getattr(self, AccessCategory(category).value))

    def has_category(self, category: AccessCategory) -> bool:
        return bool(self.chapters_for(category))

    def can_access_chapter(self, chapter_id: int, *categories: AccessCategory) -> bool:
        """
        True when chapter_id is in one of the given categories.
        With no categories, any category or the own-chapter entry counts.
        """
        if categories:
            return any(chapter_id in self.chapters_for(cat) for cat in categories)
        return chapter_id in self.accessible_chapter_ids()

    def accessible_chapter_ids(self) -> List[int]:
        ids = set(self.OB) | set(self.RD) | set(self.DC)
        if self.own_chapter is not None:
            ids.add(self.own_chapter.chapter_id)
        return sorted(ids)

    def as_groups(self) -> List[dict]:
        """List form used in login payloads: [{"role": "OB", "chapters": [...]}, ...]."""
        return [{"role": cat.value, "chapters": self.chapters_for(cat)} for cat in AccessCategory]

class RoleContext(BaseModel):
    primary_role: PrimaryRole
    access_level: str  # zone | chapter | single-chapter | own-chapter | none
    context_label: str
    authorized_chapters: List[int] = []
    authorized_zones: List[int] = []
    permissions: List[str]
    scope: AccessScope

class UserSummary(BaseModel):
    id: int
    email: str
    full_name: str
    role: str
    is_active: bool

class HeldChapterRole(BaseModel):
    role_type: ChapterRoleType
    chapter_id: int

class CurrentUserAccess(BaseModel):
    user: UserSummary
    is_member: bool
    member_id: Optional[int] = None
    chapter_id: Optional[int] = None
    roles: List[HeldChapterRole] = []
    accessible_chapters: List[dict] = []
    access_scope: AccessScope
