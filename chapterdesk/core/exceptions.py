# File: chapterdesk/core/exceptions.py
"""
Domain errors raised by the role assignment and access scope services.

Each error carries the HTTP status it maps to; the API layer turns them into
JSON responses in one exception handler (see chapterdesk.main).
"""
from fastapi import status


class RoleAssignmentError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(RoleAssignmentError):
    status_code = status.HTTP_404_NOT_FOUND


class RoleConflictError(RoleAssignmentError):
    """The role slot is already held by a different member."""
    status_code = status.HTTP_409_CONFLICT


class InvalidRoleError(RoleAssignmentError):
    status_code = status.HTTP_400_BAD_REQUEST
