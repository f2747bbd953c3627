# File: chapterdesk/models/role_assignment.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from chapterdesk.models.base import BaseModel
import enum

class ChapterRoleType(enum.Enum):
    CHAPTER_HEAD = "chapterHead"
    SECRETARY = "secretary"
    TREASURER = "treasurer"
    GUARDIAN = "guardian"
    DISTRICT_COORDINATOR = "districtCoordinator"
    REGIONAL_COORDINATOR = "regionalCoordinator"
    DEVELOPMENT_COORDINATOR = "developmentCoordinator"

class ZoneRoleType(enum.Enum):
    REGIONAL_DIRECTOR = "RegionalDirector"
    JOINT_SECRETARY = "JointSecretary"

class RoleHistoryAction(enum.Enum):
    ASSIGNED = "assigned"
    REMOVED = "removed"
    REMOVED_DIRECT_ACTION = "removed_direct_action"


def _enum_column(enum_cls, **kwargs):
    # Stored as the plain value string so the tables stay portable
    return Column(
        Enum(enum_cls, values_callable=lambda obj: [e.value for e in obj], native_enum=False, length=50),
        **kwargs
    )


class ChapterRoleAssignment(BaseModel):
    """Live holder of a chapter role slot."""
    __tablename__ = "chapter_role_assignments"

    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    chapter_id = Column(Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False)
    role_type = _enum_column(ChapterRoleType, nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("chapter_id", "role_type", name="uq_chapter_role_slot"),
    )

    member = relationship("Member", back_populates="chapter_roles")
    chapter = relationship("Chapter")

    @property
    def unit_id(self) -> int:
        return self.chapter_id


class ZoneRoleAssignment(BaseModel):
    """Live holder of a zone role slot."""
    __tablename__ = "zone_role_assignments"

    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    zone_id = Column(Integer, ForeignKey("zones.id", ondelete="CASCADE"), nullable=False)
    role_type = _enum_column(ZoneRoleType, nullable=False)
    assigned_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("zone_id", "role_type", name="uq_zone_role_slot"),
    )

    member = relationship("Member", back_populates="zone_roles")
    zone = relationship("Zone")

    @property
    def unit_id(self) -> int:
        return self.zone_id


# History rows outlive the live row they describe, so role_id is a plain
# integer and not a foreign key.

class ChapterRoleHistory(BaseModel):
    __tablename__ = "chapter_role_history"

    role_id = Column(Integer, nullable=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    chapter_id = Column(Integer, ForeignKey("chapters.id", ondelete="CASCADE"), nullable=False)
    role_type = _enum_column(ChapterRoleType, nullable=False)
    action = _enum_column(RoleHistoryAction, nullable=False)
    performed_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    performed_by_name = Column(String(255), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_chapter_role_history_slot", "chapter_id", "role_type", "end_date"),
    )

    member = relationship("Member")

    @property
    def unit_id(self) -> int:
        return self.chapter_id


class ZoneRoleHistory(BaseModel):
    __tablename__ = "zone_role_history"

    role_id = Column(Integer, nullable=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    zone_id = Column(Integer, ForeignKey("zones.id", ondelete="CASCADE"), nullable=False)
    role_type = _enum_column(ZoneRoleType, nullable=False)
    action = _enum_column(RoleHistoryAction, nullable=False)
    performed_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    performed_by_name = Column(String(255), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_zone_role_history_slot", "zone_id", "role_type", "end_date"),
    )

    member = relationship("Member")

    @property
    def unit_id(self) -> int:
        return self.zone_id
