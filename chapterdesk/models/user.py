# File: chapterdesk/models/user.py
from sqlalchemy import Column, String, Boolean, Enum, DateTime
from sqlalchemy.orm import relationship
from chapterdesk.models.base import BaseModel
import enum

class UserRole(enum.Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    USER = "user"

ADMIN_ROLES = (UserRole.SUPER_ADMIN, UserRole.ADMIN)

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, values_callable=lambda obj: [e.value for e in obj], native_enum=False, length=20),
                  nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)

    # Not every account is a member
    member = relationship("Member", back_populates="user", uselist=False)

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
