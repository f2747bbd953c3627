from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from chapterdesk.db.database import get_db
from chapterdesk.core.security import decode_token
from chapterdesk.crud.role_assignment import RoleAssignmentRepository
from chapterdesk.models.user import User
from chapterdesk.services.access_scope_service import AccessScopeResolver
from chapterdesk.services.role_assignment_service import RoleAssignmentService

security = HTTPBearer()

def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    email: Optional[str] = payload.get("sub")
    if email is None:
        raise credentials_exception

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        raise credentials_exception

    return user

def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user

def get_role_repository(db: Session = Depends(get_db)) -> RoleAssignmentRepository:
    return RoleAssignmentRepository(db)

def get_role_assignment_service(
    repository: RoleAssignmentRepository = Depends(get_role_repository)
) -> RoleAssignmentService:
    return RoleAssignmentService(repository)

def get_access_scope_resolver(
    repository: RoleAssignmentRepository = Depends(get_role_repository)
) -> AccessScopeResolver:
    return AccessScopeResolver(repository)
