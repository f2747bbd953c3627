# File: chapterdesk/models/zone.py
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from chapterdesk.models.base import BaseModel

class Zone(BaseModel):
    __tablename__ = "zones"

    name = Column(String(255), unique=True, nullable=False)
    is_active = Column(Boolean, default=True)

    chapters = relationship("Chapter", back_populates="zone")
