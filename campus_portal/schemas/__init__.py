from campus_portal.schemas.base import CamelModel, MessageResponse
from campus_portal.schemas.auth import UserLogin, UserResponse, LoginResponse, StudentCreate
from campus_portal.schemas.content import (
    SectionCreate,
    SectionResponse,
    FileResponse,
    NewsCreate,
    NewsResponse,
    KnowledgeCreate,
    KnowledgeResponse,
    KnowledgeSearch,
)

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserLogin",
    "UserResponse",
    "LoginResponse",
    "StudentCreate",
    "SectionCreate",
    "SectionResponse",
    "FileResponse",
    "NewsCreate",
    "NewsResponse",
    "KnowledgeCreate",
    "KnowledgeResponse",
    "KnowledgeSearch",
]
