# File: chapterdesk/models/member.py
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from chapterdesk.models.base import BaseModel

class Member(BaseModel):
    __tablename__ = "members"

    member_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    mobile = Column(String(20), nullable=True)
    organization_name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True)

    # Login account, when the member has one
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), unique=True, nullable=True)
    # Home chapter
    chapter_id = Column(Integer, ForeignKey("chapters.id"), nullable=True, index=True)

    user = relationship("User", back_populates="member")
    chapter = relationship("Chapter", back_populates="members")
    chapter_roles = relationship("ChapterRoleAssignment", back_populates="member")
    zone_roles = relationship("ZoneRoleAssignment", back_populates="member")
