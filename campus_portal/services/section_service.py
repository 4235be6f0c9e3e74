from campus_portal.models.section import Section
from campus_portal.schemas.content import SectionCreate, SectionResponse
from campus_portal.services.broadcast import PortalEvent
from campus_portal.services.content_service import ContentService, require_fields


class SectionService(ContentService[Section]):
    """Academic sections"""

    model = Section
    response_schema = SectionResponse
    entity_name = "Section"
    created_event = PortalEvent.SECTION_ADDED
    deleted_event = PortalEvent.SECTION_DELETED

    async def create(self, data: SectionCreate) -> SectionResponse:
        require_fields({"name": data.name, "icon": data.icon}, "Name and icon are required")

        section = Section(
            name=data.name.strip(),
            icon=data.icon.strip(),
            description=data.description,
        )
        return await self._persist(section)
