# File: chapterdesk/api/v1/endpoints/auth.py
import logging
from typing import Any
from fastapi import APIRouter, Depends
from chapterdesk import schemas
from chapterdesk.core.deps import get_access_scope_resolver, get_current_active_user, get_role_repository
from chapterdesk.crud.role_assignment import CHAPTER, RoleAssignmentRepository
from chapterdesk.models.user import User
from chapterdesk.services.access_scope_service import AccessScopeResolver

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/me", response_model=schemas.CurrentUserAccess)
def read_current_user(
    *,
    current_user: User = Depends(get_current_active_user),
    repository: RoleAssignmentRepository = Depends(get_role_repository),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Any:
    """Profile, held chapter roles and access scope, as embedded in the login response."""
    member = repository.get_member_for_user(current_user.id)
    roles = []
    if member is not None:
        roles = [
            schemas.HeldChapterRole(role_type=a.role_type, chapter_id=a.chapter_id)
            for a in repository.list_member_assignments(CHAPTER, member.id)
        ]

    scope = resolver.resolve_access_scope(current_user.id)
    logger.info(f"👤 Session info for user {current_user.id}: member={member.id if member else None}, roles={len(roles)}")

    return schemas.CurrentUserAccess(
        user=schemas.UserSummary(
            id=current_user.id,
            email=current_user.email,
            full_name=current_user.full_name,
            role=current_user.role.value,
            is_active=bool(current_user.is_active),
        ),
        is_member=member is not None,
        member_id=member.id if member else None,
        chapter_id=member.chapter_id if member else None,
        roles=roles,
        accessible_chapters=scope.as_groups(),
        access_scope=scope,
    )
