from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from datetime import datetime
import enum

from campus_portal.core.database import Base
from campus_portal.models.base import IdMixin


class UserRole(str, enum.Enum):
    """User roles"""
    ADMIN = "admin"
    STUDENT = "student"


class User(IdMixin, Base):
    """Portal account: one administrator (seeded) and the students it manages"""
    __tablename__ = "users"

    full_name = Column(String(255), nullable=False)
    university_id = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.STUDENT,
        nullable=False,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.university_id} ({self.role.value})>"
