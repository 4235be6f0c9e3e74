from typing import Optional
from datetime import datetime

from campus_portal.schemas.base import CamelModel


# ============================================
# Sections
# ============================================

class SectionCreate(CamelModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    description: Optional[str] = None


class SectionResponse(CamelModel):
    id: str
    name: str
    icon: str
    description: Optional[str] = None
    created_at: datetime


# ============================================
# Files
# ============================================

class FileResponse(CamelModel):
    """
    Uploaded file record. ``section`` is populated with the owning section,
    or null when that section has been deleted since the upload.
    """
    id: str
    file_name: str
    section_id: str
    section: Optional[SectionResponse] = None
    file_path: str
    original_file_name: str
    file_size: Optional[int] = None
    url: str
    uploaded_at: datetime


# ============================================
# News
# ============================================

class NewsCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NewsResponse(CamelModel):
    id: str
    title: str
    content: str
    published_at: datetime


# ============================================
# Knowledge base
# ============================================

class KnowledgeCreate(CamelModel):
    question: Optional[str] = None
    answer: Optional[str] = None


class KnowledgeResponse(CamelModel):
    id: str
    question: str
    answer: str
    created_at: datetime


class KnowledgeSearch(CamelModel):
    query: Optional[str] = None
