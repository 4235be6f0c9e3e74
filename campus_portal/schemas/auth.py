from pydantic import field_serializer
from typing import Optional
from datetime import datetime

from campus_portal.models.user import UserRole
from campus_portal.schemas.base import CamelModel


class UserLogin(CamelModel):
    # Optional so that a missing field is reported as a 400 by the handler
    university_id: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    id: str
    full_name: str
    university_id: str
    role: UserRole
    created_at: Optional[datetime] = None

    @field_serializer('role')
    def serialize_role(self, value: UserRole) -> str:
        return value.value


class LoginResponse(CamelModel):
    token: str
    user: UserResponse


class StudentCreate(CamelModel):
    full_name: Optional[str] = None
    university_id: Optional[str] = None
    password: Optional[str] = None
