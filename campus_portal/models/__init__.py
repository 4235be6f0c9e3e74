# Re-export all models for convenient imports
from campus_portal.models.user import User, UserRole
from campus_portal.models.section import Section
from campus_portal.models.uploaded_file import UploadedFile
from campus_portal.models.news import News
from campus_portal.models.knowledge import KnowledgeEntry

__all__ = [
    "User",
    "UserRole",
    "Section",
    "UploadedFile",
    "News",
    "KnowledgeEntry",
]
