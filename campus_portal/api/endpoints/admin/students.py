from fastapi import APIRouter, Depends, status
from typing import List

from campus_portal.api.deps import get_student_service
from campus_portal.schemas.auth import StudentCreate, UserResponse
from campus_portal.schemas.base import MessageResponse
from campus_portal.services.student_service import StudentService

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_students(service: StudentService = Depends(get_student_service)):
    return await service.list()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    data: StudentCreate,
    service: StudentService = Depends(get_student_service)
):
    return await service.create(data)


@router.delete("/{student_id}", response_model=MessageResponse)
async def delete_student(
    student_id: str,
    service: StudentService = Depends(get_student_service)
):
    """Delete a student account. Tokens already issued stay valid until expiry."""
    return MessageResponse(message=await service.delete(student_id))
