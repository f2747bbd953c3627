# File: chapterdesk/models/chapter.py
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from chapterdesk.models.base import BaseModel

class Chapter(BaseModel):
    __tablename__ = "chapters"

    name = Column(String(255), nullable=False)
    zone_id = Column(Integer, ForeignKey("zones.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True)

    zone = relationship("Zone", back_populates="chapters")
    members = relationship("Member", back_populates="chapter")
