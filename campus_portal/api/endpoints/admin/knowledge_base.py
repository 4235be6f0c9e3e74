from fastapi import APIRouter, Depends, status
from typing import List

from campus_portal.api.deps import get_knowledge_service
from campus_portal.schemas.base import MessageResponse
from campus_portal.schemas.content import KnowledgeCreate, KnowledgeResponse
from campus_portal.services.knowledge_service import KnowledgeService

router = APIRouter()


@router.get("", response_model=List[KnowledgeResponse])
async def list_entries(service: KnowledgeService = Depends(get_knowledge_service)):
    return await service.list()


@router.post("", response_model=KnowledgeResponse, status_code=status.HTTP_201_CREATED)
async def add_entry(
    data: KnowledgeCreate,
    service: KnowledgeService = Depends(get_knowledge_service)
):
    return await service.create(data)


@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_entry(
    entry_id: str,
    service: KnowledgeService = Depends(get_knowledge_service)
):
    return MessageResponse(message=await service.delete(entry_id))
