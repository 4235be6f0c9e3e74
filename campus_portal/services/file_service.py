"""
File Service - uploaded file records and their stored bytes

Handles:
- Upload: validate, check the section exists, write bytes, insert metadata
- Listing, with the owning section populated (null once the section is gone)
- Delete: metadata first, then best-effort removal of the stored bytes
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import UploadFile
from typing import Dict, List, Optional

from campus_portal.core.exceptions import ValidationError
from campus_portal.core.logging_config import logger
from campus_portal.models.section import Section
from campus_portal.models.uploaded_file import UploadedFile
from campus_portal.schemas.content import FileResponse, SectionResponse
from campus_portal.services.broadcast import BroadcastChannel, PortalEvent
from campus_portal.services.content_service import ContentService, require_fields
from campus_portal.services.file_storage import LocalFileStorage


class FileService(ContentService[UploadedFile]):
    """Uploaded files grouped by section"""

    model = UploadedFile
    response_schema = FileResponse
    entity_name = "File"
    created_event = PortalEvent.FILE_UPLOADED
    deleted_event = PortalEvent.FILE_DELETED

    def __init__(self, db: AsyncSession, broadcaster: BroadcastChannel, storage: LocalFileStorage):
        super().__init__(db, broadcaster)
        self.storage = storage

    def _list_order(self):
        return UploadedFile.uploaded_at.asc()

    async def _sections_by_id(self, section_ids: List[str]) -> Dict[str, Section]:
        if not section_ids:
            return {}
        result = await self.db.execute(select(Section).where(Section.id.in_(set(section_ids))))
        return {section.id: section for section in result.scalars().all()}

    async def serialize(self, entities: List[UploadedFile]) -> List[FileResponse]:
        sections = await self._sections_by_id([f.section_id for f in entities])
        responses = []
        for record in entities:
            section = sections.get(record.section_id)
            responses.append(FileResponse(
                id=record.id,
                file_name=record.file_name,
                section_id=record.section_id,
                section=SectionResponse.model_validate(section) if section else None,
                file_path=record.file_path,
                original_file_name=record.original_file_name,
                file_size=record.file_size,
                url=self.storage.url_for(record.file_path),
                uploaded_at=record.uploaded_at,
            ))
        return responses

    async def list_for_section(self, section_id: str) -> List[FileResponse]:
        """Files referencing ``section_id``; unknown sections simply have none"""
        result = await self.db.execute(
            select(UploadedFile)
            .where(UploadedFile.section_id == section_id)
            .order_by(self._list_order())
        )
        return await self.serialize(list(result.scalars().all()))

    async def create(
        self,
        file_name: Optional[str],
        section_id: Optional[str],
        upload: Optional[UploadFile],
    ) -> FileResponse:
        require_fields(
            {"fileName": file_name, "section": section_id, "file": upload},
            "File name, section, and file are required",
        )

        # Not atomic with the insert below: the section may vanish in between
        if await self.db.get(Section, section_id) is None:
            raise ValidationError("Section does not exist")

        stored = await self.storage.save(upload)

        record = UploadedFile(
            file_name=file_name.strip(),
            section_id=section_id,
            file_path=str(stored.path),
            original_file_name=stored.original_name,
            file_size=stored.size,
        )
        try:
            return await self._persist(record)
        except Exception:
            await self.db.rollback()
            await self.storage.remove(stored.path)
            raise

    async def _after_delete(self, entity: UploadedFile) -> None:
        # Metadata is already gone; a missing or locked blob is only logged
        if not await self.storage.remove(entity.file_path):
            logger.warning(f"File {entity.id} deleted but its stored bytes could not be removed")
