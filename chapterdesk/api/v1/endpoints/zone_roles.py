# File: chapterdesk/api/v1/endpoints/zone_roles.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from chapterdesk import schemas
from chapterdesk.core.deps import get_access_scope_resolver, get_current_active_user, get_role_assignment_service
from chapterdesk.core.permissions import is_admin, require_admin
from chapterdesk.crud.role_assignment import ZONE
from chapterdesk.models.role_assignment import ZoneRoleType
from chapterdesk.models.user import User
from chapterdesk.schemas.access_scope import AccessScope
from chapterdesk.services.access_scope_service import AccessScopeResolver
from chapterdesk.services.role_assignment_service import RoleAssignmentService

router = APIRouter()

def require_zone_access(
    zone_id: int,
    current_user: User = Depends(get_current_active_user),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Optional[AccessScope]:
    if is_admin(current_user):
        return None

    scope = resolver.resolve_access_scope(current_user.id)
    if zone_id not in scope.zones:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have the required role for this zone."
        )
    return scope

@router.get(
    "/zones/{zone_id}/roles",
    response_model=List[schemas.ZoneRoleAssignment],
    dependencies=[Depends(require_zone_access)]
)
def get_zone_roles(
    *,
    zone_id: int,
    service: RoleAssignmentService = Depends(get_role_assignment_service)
) -> Any:
    """List all live role assignments for a zone."""
    return service.list_roles(ZONE, zone_id)

@router.post(
    "/zones/{zone_id}/roles",
    response_model=schemas.ZoneRoleAssignment,
    status_code=status.HTTP_201_CREATED
)
def assign_zone_role(
    *,
    zone_id: int,
    request: schemas.ZoneRoleAssignRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
    current_user: User = Depends(require_admin)
) -> Any:
    """Assign a zone-level role. Only administrators manage zone roles."""
    return service.assign_role(ZONE, zone_id, request.role_type, request.member_id, actor=current_user)

@router.delete(
    "/zones/{zone_id}/roles/{assignment_id}",
    response_model=schemas.RemovedRoleAssignment
)
def remove_zone_role(
    *,
    zone_id: int,
    assignment_id: int,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
    current_user: User = Depends(require_admin)
) -> Any:
    return service.remove_role(ZONE, assignment_id, actor=current_user, unit_id=zone_id)

@router.get(
    "/zones/{zone_id}/roles/history",
    response_model=List[schemas.RoleHistoryEntry],
    dependencies=[Depends(require_zone_access)]
)
def get_zone_role_history(
    *,
    zone_id: int,
    role_type: Optional[ZoneRoleType] = None,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    service: RoleAssignmentService = Depends(get_role_assignment_service)
) -> Any:
    return service.get_role_history(ZONE, zone_id, role_type=role_type, skip=skip, limit=limit)
