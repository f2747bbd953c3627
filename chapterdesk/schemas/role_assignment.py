# File: chapterdesk/schemas/role_assignment.py
from pydantic import BaseModel, Field
from typing import List, Optional, Union
from datetime import datetime
from chapterdesk.models.role_assignment import ChapterRoleType, ZoneRoleType, RoleHistoryAction

class MemberSummary(BaseModel):
    id: int
    member_name: str
    email: Optional[str] = None
    mobile: Optional[str] = None
    organization_name: Optional[str] = None

    class Config:
        from_attributes = True

class ChapterRoleAssignRequest(BaseModel):
    member_id: int = Field(..., gt=0, description="Member ID must be a positive integer")
    role_type: ChapterRoleType

class ZoneRoleAssignRequest(BaseModel):
    member_id: int = Field(..., gt=0, description="Member ID must be a positive integer")
    role_type: ZoneRoleType

class ChapterRoleAssignment(BaseModel):
    id: int
    member_id: int
    chapter_id: int
    role_type: ChapterRoleType
    assigned_at: datetime
    member: Optional[MemberSummary] = None

    class Config:
        from_attributes = True

class ZoneRoleAssignment(BaseModel):
    id: int
    member_id: int
    zone_id: int
    role_type: ZoneRoleType
    assigned_at: datetime
    member: Optional[MemberSummary] = None

    class Config:
        from_attributes = True

class RemovedRoleAssignment(BaseModel):
    id: int
    member_id: int
    unit_type: str  # "chapter" | "zone"
    unit_id: int
    role_type: Union[ChapterRoleType, ZoneRoleType]
    assigned_at: datetime
    removed_at: datetime
    history_action: RoleHistoryAction
    message: str = "Role assignment removed successfully"

class RoleHistoryEntry(BaseModel):
    id: int
    role_id: Optional[int] = None
    member_id: int
    unit_id: int
    role_type: Union[ChapterRoleType, ZoneRoleType]
    action: RoleHistoryAction
    performed_by_id: Optional[int] = None
    performed_by_name: str
    start_date: datetime
    end_date: Optional[datetime] = None
    member: Optional[MemberSummary] = None

    class Config:
        from_attributes = True

class MemberRoles(BaseModel):
    member_id: int
    chapter_roles: List[ChapterRoleAssignment] = []
    zone_roles: List[ZoneRoleAssignment] = []
