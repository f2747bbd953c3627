# File: chapterdesk/api/v1/endpoints/chapter_roles.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from chapterdesk import schemas
from chapterdesk.core.deps import get_current_active_user, get_role_assignment_service
from chapterdesk.core.permissions import require_access_category, require_chapter_access
from chapterdesk.core.role_categories import AccessCategory
from chapterdesk.crud.role_assignment import CHAPTER
from chapterdesk.models.role_assignment import ChapterRoleType
from chapterdesk.models.user import User
from chapterdesk.services.role_assignment_service import RoleAssignmentService

router = APIRouter()

chapter_manager = require_chapter_access(AccessCategory.OB, AccessCategory.RD)

@router.get(
    "/chapters/{chapter_id}/roles",
    response_model=List[schemas.ChapterRoleAssignment],
    dependencies=[Depends(chapter_manager)]
)
def get_chapter_roles(
    *,
    chapter_id: int,
    service: RoleAssignmentService = Depends(get_role_assignment_service)
) -> Any:
    """List all live role assignments for a chapter."""
    return service.list_roles(CHAPTER, chapter_id)

@router.post(
    "/chapters/{chapter_id}/roles",
    response_model=schemas.ChapterRoleAssignment,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(chapter_manager)]
)
def assign_chapter_role(
    *,
    chapter_id: int,
    request: schemas.ChapterRoleAssignRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Assign a role in a chapter. Repeating an existing assignment is a no-op."""
    return service.assign_role(CHAPTER, chapter_id, request.role_type, request.member_id, actor=current_user)

@router.delete(
    "/chapters/{chapter_id}/roles/{assignment_id}",
    response_model=schemas.RemovedRoleAssignment,
    dependencies=[Depends(chapter_manager)]
)
def remove_chapter_role(
    *,
    chapter_id: int,
    assignment_id: int,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
    current_user: User = Depends(get_current_active_user)
) -> Any:
    """Remove a role assignment and close its history record."""
    return service.remove_role(CHAPTER, assignment_id, actor=current_user, unit_id=chapter_id)

@router.get(
    "/chapters/{chapter_id}/roles/history",
    response_model=List[schemas.RoleHistoryEntry],
    dependencies=[Depends(chapter_manager)]
)
def get_chapter_role_history(
    *,
    chapter_id: int,
    role_type: Optional[ChapterRoleType] = None,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    service: RoleAssignmentService = Depends(get_role_assignment_service)
) -> Any:
    """Role assignment history for a chapter, newest first."""
    return service.get_role_history(CHAPTER, chapter_id, role_type=role_type, skip=skip, limit=limit)

@router.get(
    "/members/{member_id}/roles",
    response_model=schemas.MemberRoles,
    dependencies=[Depends(require_access_category(AccessCategory.OB, AccessCategory.RD))]
)
def get_member_roles(
    *,
    member_id: int,
    service: RoleAssignmentService = Depends(get_role_assignment_service)
) -> Any:
    """All chapter and zone roles currently held by a member."""
    return service.list_member_roles(member_id)
