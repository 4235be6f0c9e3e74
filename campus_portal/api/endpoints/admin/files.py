from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from typing import List, Optional

from campus_portal.api.deps import get_file_service
from campus_portal.schemas.base import MessageResponse
from campus_portal.schemas.content import FileResponse
from campus_portal.services.file_service import FileService

router = APIRouter()


@router.get("", response_model=List[FileResponse])
async def list_files(service: FileService = Depends(get_file_service)):
    return await service.list()


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    fileName: Optional[str] = Form(None),
    section: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    service: FileService = Depends(get_file_service)
):
    """
    Upload a file into a section (multipart/form-data).

    - fileName: display name
    - section: id of an existing section
    - file: the binary payload
    """
    return await service.create(fileName, section, file)


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_file(
    file_id: str,
    service: FileService = Depends(get_file_service)
):
    """Delete a file record; the stored bytes are removed best-effort"""
    return MessageResponse(message=await service.delete(file_id))
