"""Service providers for route handlers"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_portal.core.database import get_db
from campus_portal.services.broadcast import BroadcastChannel, get_broadcaster
from campus_portal.services.file_storage import LocalFileStorage, get_file_storage
from campus_portal.services.file_service import FileService
from campus_portal.services.knowledge_service import KnowledgeService
from campus_portal.services.news_service import NewsService
from campus_portal.services.section_service import SectionService
from campus_portal.services.student_service import StudentService


def get_section_service(
    db: AsyncSession = Depends(get_db),
    broadcaster: BroadcastChannel = Depends(get_broadcaster),
) -> SectionService:
    return SectionService(db, broadcaster)


def get_file_service(
    db: AsyncSession = Depends(get_db),
    broadcaster: BroadcastChannel = Depends(get_broadcaster),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> FileService:
    return FileService(db, broadcaster, storage)


def get_news_service(
    db: AsyncSession = Depends(get_db),
    broadcaster: BroadcastChannel = Depends(get_broadcaster),
) -> NewsService:
    return NewsService(db, broadcaster)


def get_knowledge_service(
    db: AsyncSession = Depends(get_db),
    broadcaster: BroadcastChannel = Depends(get_broadcaster),
) -> KnowledgeService:
    return KnowledgeService(db, broadcaster)


def get_student_service(db: AsyncSession = Depends(get_db)) -> StudentService:
    return StudentService(db)
