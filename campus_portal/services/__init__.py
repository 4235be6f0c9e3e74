from campus_portal.services.broadcast import BroadcastChannel, PortalEvent, get_broadcaster
from campus_portal.services.file_storage import LocalFileStorage, get_file_storage
from campus_portal.services.section_service import SectionService
from campus_portal.services.file_service import FileService
from campus_portal.services.news_service import NewsService
from campus_portal.services.knowledge_service import KnowledgeService
from campus_portal.services.student_service import StudentService

__all__ = [
    "BroadcastChannel",
    "PortalEvent",
    "get_broadcaster",
    "LocalFileStorage",
    "get_file_storage",
    "SectionService",
    "FileService",
    "NewsService",
    "KnowledgeService",
    "StudentService",
]
