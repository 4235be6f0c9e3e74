from fastapi import APIRouter, Depends, status
from typing import List

from campus_portal.api.deps import get_section_service
from campus_portal.schemas.base import MessageResponse
from campus_portal.schemas.content import SectionCreate, SectionResponse
from campus_portal.services.section_service import SectionService

router = APIRouter()


@router.get("", response_model=List[SectionResponse])
async def list_sections(service: SectionService = Depends(get_section_service)):
    return await service.list()


@router.post("", response_model=SectionResponse, status_code=status.HTTP_201_CREATED)
async def create_section(
    data: SectionCreate,
    service: SectionService = Depends(get_section_service)
):
    """Create a section and broadcast ``section-added``"""
    return await service.create(data)


@router.delete("/{section_id}", response_model=MessageResponse)
async def delete_section(
    section_id: str,
    service: SectionService = Depends(get_section_service)
):
    """
    Delete a section and broadcast ``section-deleted``.

    Files in the section are kept; their ``section`` becomes null.
    """
    return MessageResponse(message=await service.delete(section_id))
