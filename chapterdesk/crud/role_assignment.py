# File: chapterdesk/crud/role_assignment.py
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Type

from sqlalchemy.orm import Session, joinedload

from chapterdesk.models.base import BaseModel
from chapterdesk.models.chapter import Chapter
from chapterdesk.models.member import Member
from chapterdesk.models.role_assignment import (
    ChapterRoleAssignment, ChapterRoleHistory, ChapterRoleType,
    RoleHistoryAction, ZoneRoleAssignment, ZoneRoleHistory, ZoneRoleType,
)
from chapterdesk.models.zone import Zone


@dataclass(frozen=True)
class UnitKind:
    """Tables and columns backing one kind of organizational unit."""
    name: str
    unit_model: Type[BaseModel]
    live_model: Type[BaseModel]
    history_model: Type[BaseModel]
    unit_column: str
    role_enum: Type

    def unit_filter(self, model, unit_id: int):
        return getattr(model, self.unit_column) == unit_id


CHAPTER = UnitKind(
    name="chapter",
    unit_model=Chapter,
    live_model=ChapterRoleAssignment,
    history_model=ChapterRoleHistory,
    unit_column="chapter_id",
    role_enum=ChapterRoleType,
)

ZONE = UnitKind(
    name="zone",
    unit_model=Zone,
    live_model=ZoneRoleAssignment,
    history_model=ZoneRoleHistory,
    unit_column="zone_id",
    role_enum=ZoneRoleType,
)


class RoleAssignmentRepository:
    """
    Data access for live role assignments and their history.

    Holds one session for the lifetime of a request. Nothing here commits;
    transaction boundaries belong to the service layer.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------
    # Units and members
    # ---------------------------
    def get_unit(self, kind: UnitKind, unit_id: int):
        return self.db.query(kind.unit_model).filter(kind.unit_model.id == unit_id).first()

    def get_member(self, member_id: int) -> Optional[Member]:
        return self.db.query(Member).filter(Member.id == member_id).first()

    def get_member_for_user(self, user_id: int) -> Optional[Member]:
        return self.db.query(Member).filter(Member.user_id == user_id).first()

    def get_chapter_ids_in_zones(self, zone_ids: Iterable[int]) -> List[int]:
        zone_ids = list(zone_ids)
        if not zone_ids:
            return []
        rows = (
            self.db.query(Chapter.id)
            .filter(Chapter.zone_id.in_(zone_ids))
            .order_by(Chapter.id)
            .all()
        )
        return [row.id for row in rows]

    # ---------------------------
    # Live assignments
    # ---------------------------
    def get_live_assignment(self, kind: UnitKind, unit_id: int, role_type):
        model = kind.live_model
        return self.db.query(model).filter(
            kind.unit_filter(model, unit_id),
            model.role_type == role_type
        ).first()

    def get_live_assignment_by_id(self, kind: UnitKind, assignment_id: int, lock: bool = False):
        model = kind.live_model
        query = self.db.query(model).filter(model.id == assignment_id)
        if lock:
            query = query.with_for_update()
        return query.first()

    def list_live_assignments(self, kind: UnitKind, unit_id: int) -> list:
        model = kind.live_model
        return (
            self.db.query(model)
            .options(joinedload(model.member))
            .filter(kind.unit_filter(model, unit_id))
            .order_by(model.id)
            .all()
        )

    def list_member_assignments(self, kind: UnitKind, member_id: int, role_types=None) -> list:
        model = kind.live_model
        query = self.db.query(model).filter(model.member_id == member_id)
        if role_types is not None:
            query = query.filter(model.role_type.in_(list(role_types)))
        return query.order_by(model.id).all()

    def add_live_assignment(self, kind: UnitKind, unit_id: int, role_type, member_id: int, assigned_at: datetime):
        assignment = kind.live_model(
            member_id=member_id,
            role_type=role_type,
            assigned_at=assigned_at,
            **{kind.unit_column: unit_id}
        )
        self.db.add(assignment)
        # Flush so the uniqueness constraint fires inside the caller's transaction
        self.db.flush()
        return assignment

    def delete_live_assignment(self, assignment) -> None:
        self.db.delete(assignment)
        self.db.flush()

    # ---------------------------
    # History
    # ---------------------------
    def add_history(
        self,
        kind: UnitKind,
        *,
        unit_id: int,
        role_id: Optional[int],
        member_id: int,
        role_type,
        action: RoleHistoryAction,
        performed_by_id: Optional[int],
        performed_by_name: str,
        start_date: datetime,
        end_date: Optional[datetime] = None
    ):
        record = kind.history_model(
            role_id=role_id,
            member_id=member_id,
            role_type=role_type,
            action=action,
            performed_by_id=performed_by_id,
            performed_by_name=performed_by_name,
            start_date=start_date,
            end_date=end_date,
            **{kind.unit_column: unit_id}
        )
        self.db.add(record)
        self.db.flush()
        return record

    def get_open_history(self, kind: UnitKind, unit_id: int, role_type) -> list:
        """Open 'assigned' rows for a slot, newest first."""
        model = kind.history_model
        return (
            self.db.query(model)
            .filter(
                kind.unit_filter(model, unit_id),
                model.role_type == role_type,
                model.action == RoleHistoryAction.ASSIGNED,
                model.end_date.is_(None)
            )
            .order_by(model.start_date.desc(), model.id.desc())
            .all()
        )

    def list_history(self, kind: UnitKind, unit_id: int, role_type=None, skip: int = 0, limit: int = 100) -> list:
        model = kind.history_model
        query = (
            self.db.query(model)
            .options(joinedload(model.member))
            .filter(kind.unit_filter(model, unit_id))
        )
        if role_type is not None:
            query = query.filter(model.role_type == role_type)
        return (
            query.order_by(model.start_date.desc(), model.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
