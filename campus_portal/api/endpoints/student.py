"""
Student API endpoints. Any authenticated caller may use them.
"""
from fastapi import APIRouter, Depends
from typing import List

from campus_portal.api.deps import get_file_service, get_knowledge_service, get_news_service, get_section_service
from campus_portal.modules.auth import get_current_reader
from campus_portal.schemas.content import FileResponse, KnowledgeResponse, KnowledgeSearch, NewsResponse, SectionResponse
from campus_portal.services.file_service import FileService
from campus_portal.services.knowledge_service import KnowledgeService
from campus_portal.services.news_service import NewsService
from campus_portal.services.section_service import SectionService

router = APIRouter(prefix="/student", tags=["Student"], dependencies=[Depends(get_current_reader)])


@router.get("/sections", response_model=List[SectionResponse])
async def list_sections(service: SectionService = Depends(get_section_service)):
    return await service.list()


@router.get("/files/{section_id}", response_model=List[FileResponse])
async def list_section_files(
    section_id: str,
    service: FileService = Depends(get_file_service)
):
    return await service.list_for_section(section_id)


@router.get("/news", response_model=List[NewsResponse])
async def list_news(service: NewsService = Depends(get_news_service)):
    return await service.list()


@router.post("/assistant/search", response_model=List[KnowledgeResponse])
async def search_knowledge_base(
    data: KnowledgeSearch,
    service: KnowledgeService = Depends(get_knowledge_service)
):
    """Case-insensitive substring search over questions and answers"""
    return await service.search(data.query)
