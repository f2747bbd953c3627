import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from chapterdesk.core.deps import get_access_scope_resolver, get_current_active_user
from chapterdesk.core.role_categories import AccessCategory
from chapterdesk.models.user import User
from chapterdesk.schemas.access_scope import AccessScope
from chapterdesk.services.access_scope_service import AccessScopeResolver

logger = logging.getLogger(__name__)

def is_admin(user: User) -> bool:
    """Admins and super admins are not limited by chapter roles."""
    return user.is_admin

def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    if not is_admin(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return current_user

def require_access_category(*categories: AccessCategory):
    """
    Allow the request when the caller has at least one chapter in any of the
    given categories. Returns the caller's scope, or None for admins.
    """
    if not categories:
        raise ValueError("require_access_category needs at least one category")

    def dependency(
        current_user: User = Depends(get_current_active_user),
        resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
    ) -> Optional[AccessScope]:
        if is_admin(current_user):
            return None

        scope = resolver.resolve_access_scope(current_user.id)
        if any(scope.has_category(category) for category in categories):
            return scope

        logger.info(f"🚫 User {current_user.id} lacks any of {[c.value for c in categories]}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have the required role to access this resource."
        )

    return dependency

def require_chapter_access(*categories: AccessCategory, param: str = "chapter_id"):
    """Allow the request when the chapter in the path is in one of the caller's categories."""
    if not categories:
        raise ValueError("require_chapter_access needs at least one category")

    def dependency(
        request: Request,
        current_user: User = Depends(get_current_active_user),
        resolver: AccessScopeResolver = Depends(get_access_scope_resolver)
    ) -> Optional[AccessScope]:
        raw_chapter_id = request.path_params.get(param)
        if is_admin(current_user):
            logger.debug(f"Admin user {current_user.id} granted access to chapter {raw_chapter_id}")
            return None

        try:
            chapter_id = int(raw_chapter_id)
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid or missing chapter ID in parameter '{param}'"
            )

        scope = resolver.resolve_access_scope(current_user.id)
        if scope.can_access_chapter(chapter_id, *categories):
            return scope

        logger.info(f"🚫 User {current_user.id} denied access to chapter {chapter_id}, needs one of {[c.value for c in categories]}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have the required role for this chapter."
        )

    return dependency
