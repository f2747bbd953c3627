"""
Role Assignment Service

Assigns and removes chapter-level and zone-level roles. Every change writes the
live assignment table and the append-only history table in one transaction.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from chapterdesk.core.config import settings
from chapterdesk.core.exceptions import InvalidRoleError, NotFoundError, RoleConflictError
from chapterdesk.core.role_categories import is_office_bearer_role
from chapterdesk.crud.role_assignment import CHAPTER, ZONE, RoleAssignmentRepository, UnitKind
from chapterdesk.db.database import unit_of_work
from chapterdesk.models.role_assignment import RoleHistoryAction
from chapterdesk.models.user import User
from chapterdesk import schemas

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def actor_label(actor: Optional[User]) -> Tuple[Optional[int], str]:
    """Performer id and display name recorded in history rows."""
    if actor is None:
        return None, settings.SYSTEM_ACTOR_NAME
    return actor.id, actor.full_name or actor.email


class RoleAssignmentService:

    def __init__(self, repository: RoleAssignmentRepository, clock: Callable[[], datetime] = utcnow):
        self.repository = repository
        self.db = repository.db
        self.clock = clock

    def _coerce_role_type(self, kind: UnitKind, role_type):
        if isinstance(role_type, kind.role_enum):
            return role_type
        try:
            return kind.role_enum(role_type)
        except ValueError:
            allowed = ", ".join(r.value for r in kind.role_enum)
            raise InvalidRoleError(f"Role type must be one of: {allowed}")

    def _require_unit(self, kind: UnitKind, unit_id: int):
        unit = self.repository.get_unit(kind, unit_id)
        if unit is None:
            raise NotFoundError(f"{kind.name.capitalize()} not found")
        return unit

    def assign_role(self, kind: UnitKind, unit_id: int, role_type, member_id: int, actor: Optional[User] = None):
        """
        Give the (unit, role_type) slot to a member.

        - Empty slot: creates the live row and an open 'assigned' history row.
        - Same member already holds it: returns the existing row, no history written.
        - Different member holds it: RoleConflictError, the holder must be removed first.

        A concurrent assignment that wins the race trips the slot's unique
        constraint; the losing call surfaces as RoleConflictError.
        """
        role_type = self._coerce_role_type(kind, role_type)
        performed_by_id, performed_by_name = actor_label(actor)
        logger.info(f"🎯 Assigning {kind.name} role {role_type.value} in {kind.name} {unit_id} to member {member_id} by {performed_by_name}")

        try:
            with unit_of_work(self.db):
                self._require_unit(kind, unit_id)

                member = self.repository.get_member(member_id)
                if member is None:
                    raise NotFoundError("Member not found")

                existing = self.repository.get_live_assignment(kind, unit_id, role_type)
                if existing is not None:
                    if existing.member_id == member_id:
                        logger.info(f"ℹ️ Member {member_id} already holds {role_type.value} in {kind.name} {unit_id}, nothing to do")
                        return existing
                    logger.warning(
                        f"❌ {role_type.value} in {kind.name} {unit_id} is held by member {existing.member_id}, "
                        f"refusing to reassign to member {member_id}"
                    )
                    raise RoleConflictError(
                        f"Role '{role_type.value}' is already assigned to member {existing.member_id} "
                        f"in this {kind.name}. Remove the current assignment first."
                    )

                # Only checked for new holders; an existing holder keeps the slot after moving chapters
                if (kind is CHAPTER
                        and settings.ENFORCE_HOME_CHAPTER_FOR_OFFICE_BEARERS
                        and is_office_bearer_role(role_type)
                        and member.chapter_id != unit_id):
                    raise InvalidRoleError(
                        f"For role '{role_type.value}', the member must belong to the same chapter."
                    )

                now = self.clock()
                assignment = self.repository.add_live_assignment(kind, unit_id, role_type, member_id, now)
                self.repository.add_history(
                    kind,
                    unit_id=unit_id,
                    role_id=assignment.id,
                    member_id=member_id,
                    role_type=role_type,
                    action=RoleHistoryAction.ASSIGNED,
                    performed_by_id=performed_by_id,
                    performed_by_name=performed_by_name,
                    start_date=now,
                )
        except IntegrityError as e:
            logger.warning(f"❌ Concurrent assignment for {role_type.value} in {kind.name} {unit_id}: {e.orig}")
            raise RoleConflictError(
                f"Role '{role_type.value}' was assigned concurrently in this {kind.name}. Reload and retry."
            ) from e

        logger.info(f"✅ Role {role_type.value} assigned to member {member_id} in {kind.name} {unit_id} (assignment {assignment.id})")
        return assignment

    def remove_role(
        self,
        kind: UnitKind,
        assignment_id: int,
        actor: Optional[User] = None,
        unit_id: Optional[int] = None
    ) -> schemas.RemovedRoleAssignment:
        """
        End a live assignment: close its open history row and delete the live row.

        When unit_id is given the assignment must belong to that unit. If the
        slot has no open history row, a compensating 'removed_direct_action'
        row is written instead and the removal still succeeds.
        """
        performed_by_id, performed_by_name = actor_label(actor)
        logger.info(f"🗑️ Removing {kind.name} role assignment {assignment_id} by {performed_by_name}")

        with unit_of_work(self.db):
            assignment = self.repository.get_live_assignment_by_id(kind, assignment_id, lock=True)
            if assignment is None or (unit_id is not None and assignment.unit_id != unit_id):
                raise NotFoundError("Role assignment not found")

            now = self.clock()
            slot_unit_id = assignment.unit_id
            open_rows = self.repository.get_open_history(kind, slot_unit_id, assignment.role_type)

            if open_rows:
                if len(open_rows) > 1:
                    logger.warning(
                        f"⚠️ {len(open_rows)} open history rows for {assignment.role_type.value} in "
                        f"{kind.name} {slot_unit_id}, closing all of them"
                    )
                for row in open_rows:
                    row.end_date = now
                    row.action = RoleHistoryAction.REMOVED
                history_action = RoleHistoryAction.REMOVED
            else:
                logger.warning(
                    f"⚠️ No open history row for {assignment.role_type.value} in {kind.name} {slot_unit_id} "
                    f"(assignment {assignment.id}, member {assignment.member_id}); writing compensating record"
                )
                self.repository.add_history(
                    kind,
                    unit_id=slot_unit_id,
                    role_id=assignment.id,
                    member_id=assignment.member_id,
                    role_type=assignment.role_type,
                    action=RoleHistoryAction.REMOVED_DIRECT_ACTION,
                    performed_by_id=performed_by_id,
                    performed_by_name=performed_by_name,
                    start_date=now,
                    end_date=now,
                )
                history_action = RoleHistoryAction.REMOVED_DIRECT_ACTION

            removed = schemas.RemovedRoleAssignment(
                id=assignment.id,
                member_id=assignment.member_id,
                unit_type=kind.name,
                unit_id=slot_unit_id,
                role_type=assignment.role_type,
                assigned_at=assignment.assigned_at,
                removed_at=now,
                history_action=history_action,
            )
            self.repository.delete_live_assignment(assignment)

        logger.info(f"✅ Removed {removed.role_type.value} from member {removed.member_id} in {kind.name} {removed.unit_id}")
        return removed

    def list_roles(self, kind: UnitKind, unit_id: int) -> list:
        self._require_unit(kind, unit_id)
        return self.repository.list_live_assignments(kind, unit_id)

    def list_member_roles(self, member_id: int) -> schemas.MemberRoles:
        if self.repository.get_member(member_id) is None:
            raise NotFoundError("Member not found")
        return schemas.MemberRoles(
            member_id=member_id,
            chapter_roles=[
                schemas.ChapterRoleAssignment.model_validate(a)
                for a in self.repository.list_member_assignments(CHAPTER, member_id)
            ],
            zone_roles=[
                schemas.ZoneRoleAssignment.model_validate(a)
                for a in self.repository.list_member_assignments(ZONE, member_id)
            ],
        )

    def get_role_history(
        self,
        kind: UnitKind,
        unit_id: int,
        role_type=None,
        skip: int = 0,
        limit: Optional[int] = None
    ) -> List:
        self._require_unit(kind, unit_id)
        if role_type is not None:
            role_type = self._coerce_role_type(kind, role_type)
        if limit is None:
            limit = settings.ROLE_HISTORY_PAGE_SIZE
        return self.repository.list_history(kind, unit_id, role_type=role_type, skip=skip, limit=limit)
