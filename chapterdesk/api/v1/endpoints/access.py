# File: chapterdesk/api/v1/endpoints/access.py
from typing import Any
from fastapi import APIRouter, Depends
from chapterdesk import schemas
from chapterdesk.core.deps import get_access_scope_resolver, get_current_active_user
from chapterdesk.core.permissions import require_admin
from chapterdesk.models.user import User
from chapterdesk.services.access_scope_service import AccessScopeResolver

router = APIRouter()

@router.get("/me", response_model=schemas.AccessScope)
def get_my_access_scope(
    *,
    current_user: User = Depends(get_current_active_user),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Any:
    """Chapters the caller may act upon, grouped by OB, RD and DC."""
    return resolver.resolve_access_scope(current_user.id)

@router.get("/me/primary-role", response_model=dict)
def get_my_primary_role(
    *,
    current_user: User = Depends(get_current_active_user),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Any:
    """Single display label. Use /access/me for authorization decisions."""
    return {"primary_role": resolver.infer_primary_role(current_user.id).value}

@router.get("/me/context", response_model=schemas.RoleContext)
def get_my_role_context(
    *,
    current_user: User = Depends(get_current_active_user),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Any:
    return resolver.describe_role_context(current_user.id)

@router.get("/users/{user_id}", response_model=schemas.AccessScope)
def get_user_access_scope(
    *,
    user_id: int,
    admin: User = Depends(require_admin),
    resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
) -> Any:
    return resolver.resolve_access_scope(user_id)
