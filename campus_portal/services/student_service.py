from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from campus_portal.core.exceptions import NotFoundError, ValidationError
from campus_portal.core.logging_config import logger
from campus_portal.core.security import get_password_hash
from campus_portal.models.user import User, UserRole
from campus_portal.schemas.auth import StudentCreate
from campus_portal.services.content_service import require_fields


class StudentService:
    """Student accounts managed by the administrator. No broadcast events."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[User]:
        result = await self.db.execute(
            select(User)
            .where(User.role == UserRole.STUDENT)
            .order_by(User.created_at.asc())
        )
        return list(result.scalars().all())

    async def create(self, data: StudentCreate) -> User:
        require_fields(
            {"fullName": data.full_name, "universityId": data.university_id, "password": data.password},
            "All fields are required",
        )
        university_id = data.university_id.strip()

        existing = await self.db.execute(select(User).where(User.university_id == university_id))
        if existing.scalar_one_or_none() is not None:
            raise ValidationError("University ID already exists")

        user = User(
            full_name=data.full_name.strip(),
            university_id=university_id,
            hashed_password=get_password_hash(data.password),
            role=UserRole.STUDENT,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.log_mutation("users", "created", user.id, university_id=university_id)
        return user

    async def delete(self, user_id: str) -> str:
        user = await self.db.get(User, user_id)
        if user is None or user.role != UserRole.STUDENT:
            raise NotFoundError("Student", user_id)

        await self.db.delete(user)
        await self.db.commit()

        logger.log_mutation("users", "deleted", user_id)
        return "Student deleted"
