# File: chapterdesk/api/v1/api.py
from fastapi import APIRouter
from chapterdesk.api.v1.endpoints import auth, access, chapter_roles, zone_roles

# Create main API router
api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    access.router,
    prefix="/access",
    tags=["access-scope"]
)

api_router.include_router(
    chapter_roles.router,
    tags=["chapter-roles"]
)

api_router.include_router(
    zone_roles.router,
    tags=["zone-roles"]
)
