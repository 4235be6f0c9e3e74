"""
Database Seed Data Module

ensure_admin() runs at every startup; the demo content is opt-in.
Run with: python -m campus_portal.db.seed_data [clear]
"""
import asyncio
from typing import List

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.config import settings
from campus_portal.core.database import AsyncSessionLocal, init_db
from campus_portal.core.logging_config import logger
from campus_portal.core.security import get_password_hash
from campus_portal.models.user import User, UserRole
from campus_portal.models.section import Section
from campus_portal.models.news import News
from campus_portal.models.knowledge import KnowledgeEntry


# ==================== Sample Data Constants ====================

SAMPLE_STUDENTS = [
    {"full_name": "Rahul Sharma", "university_id": "2023CS001"},
    {"full_name": "Priya Patel", "university_id": "2023CS002"},
    {"full_name": "Amit Kumar", "university_id": "2023EE014"},
    {"full_name": "Sneha Reddy", "university_id": "2024ME007"},
]

SAMPLE_SECTIONS = [
    {"name": "CS101 - Programming Fundamentals", "icon": "💻", "description": "Lecture slides and lab sheets"},
    {"name": "MA201 - Linear Algebra", "icon": "📐", "description": "Problem sets and past papers"},
    {"name": "Library", "icon": "📚", "description": None},
]

SAMPLE_NEWS = [
    {"title": "Semester registration open", "content": "Registration for the spring semester closes on Friday."},
    {"title": "Library hours extended", "content": "The main library is open until midnight during exam week."},
]

SAMPLE_KNOWLEDGE = [
    {"question": "How do I request a tuition refund?", "answer": "Submit the refund form at the finance office within 14 days."},
    {"question": "Where can I find my timetable?", "answer": "Timetables are published in each course section."},
    {"question": "How do I reset my portal password?", "answer": "Ask the administrator; students cannot reset passwords themselves."},
]

STUDENT_PASSWORD = "Student123!"


async def ensure_admin(db: AsyncSession) -> User:
    """Create the configured administrator unless it already exists"""
    result = await db.execute(
        select(User).where(User.university_id == settings.ADMIN_UNIVERSITY_ID)
    )
    admin = result.scalar_one_or_none()
    if admin is not None:
        return admin

    admin = User(
        full_name=settings.ADMIN_FULL_NAME,
        university_id=settings.ADMIN_UNIVERSITY_ID,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    logger.info(f"[Seed] Created admin account {admin.university_id}")
    return admin


async def seed_students(db: AsyncSession) -> List[User]:
    students = []
    hashed = get_password_hash(STUDENT_PASSWORD)
    for data in SAMPLE_STUDENTS:
        exists = await db.execute(select(User).where(User.university_id == data["university_id"]))
        if exists.scalar_one_or_none() is not None:
            continue
        student = User(hashed_password=hashed, role=UserRole.STUDENT, **data)
        db.add(student)
        students.append(student)

    await db.flush()
    print(f"Created {len(students)} students")
    return students


async def seed_content(db: AsyncSession) -> None:
    for data in SAMPLE_SECTIONS:
        db.add(Section(**data))
    for data in SAMPLE_NEWS:
        db.add(News(**data))
    for data in SAMPLE_KNOWLEDGE:
        db.add(KnowledgeEntry(**data))

    await db.flush()
    print(f"Created {len(SAMPLE_SECTIONS)} sections, {len(SAMPLE_NEWS)} news posts, "
          f"{len(SAMPLE_KNOWLEDGE)} knowledge base entries")


async def seed_all():
    """Seed admin, students and demo content"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    async with AsyncSessionLocal() as db:
        try:
            await ensure_admin(db)
            await seed_students(db)
            await seed_content(db)

            await db.commit()
            print("=" * 50)
            print("Database seeding completed successfully!")
            print(f"Student password: {STUDENT_PASSWORD}")
            print("=" * 50)

        except Exception as e:
            await db.rollback()
            print(f"Error seeding database: {e}")
            raise


async def clear_all():
    """Clear all data from database"""
    print("Clearing all data...")
    async with AsyncSessionLocal() as db:
        for table in ("files", "knowledge_base", "news", "sections", "users"):
            await db.execute(text(f"DELETE FROM {table}"))
        await db.commit()
        print("All data cleared!")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())
