# File: chapterdesk/models/base.py
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from chapterdesk.db.database import Base

class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
