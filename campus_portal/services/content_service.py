"""
Content Service - shared list/create/delete contract for the content stores

Every concrete store (sections, files, news, knowledge base) follows the same
rules:
- list returns every entry, no pagination
- create validates required fields, persists, publishes one creation event
  carrying the entity exactly as the HTTP response shows it
- delete raises NotFoundError (and publishes nothing) when the id is unknown,
  otherwise removes the entity and publishes one deletion event carrying the id
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from campus_portal.core.exceptions import MissingFieldsError, NotFoundError
from campus_portal.core.logging_config import logger
from campus_portal.schemas.base import CamelModel
from campus_portal.services.broadcast import BroadcastChannel, PortalEvent

ModelT = TypeVar("ModelT")


def require_fields(values: Dict[str, Any], message: Optional[str] = None) -> None:
    """
    Raise MissingFieldsError naming every key whose value is absent or blank.

    Keys are the wire (camelCase) field names so the client can map them back.
    """
    missing = [
        name for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise MissingFieldsError(missing, message)


class ContentService(Generic[ModelT]):
    """Base class for one content store"""

    model: Type[ModelT]
    response_schema: Type[CamelModel]
    entity_name: str
    created_event: PortalEvent
    deleted_event: PortalEvent

    def __init__(self, db: AsyncSession, broadcaster: BroadcastChannel):
        self.db = db
        self.broadcaster = broadcaster

    @property
    def store_name(self) -> str:
        return self.model.__tablename__

    def _list_order(self):
        """Store-native order: insertion time"""
        return self.model.created_at.asc()

    async def serialize(self, entities: List[ModelT]) -> List[CamelModel]:
        """Convert entities to their response schema"""
        return [self.response_schema.model_validate(entity) for entity in entities]

    async def list(self) -> List[CamelModel]:
        result = await self.db.execute(select(self.model).order_by(self._list_order()))
        return await self.serialize(list(result.scalars().all()))

    async def get(self, entity_id: str) -> ModelT:
        entity = await self.db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    async def _persist(self, entity: ModelT) -> CamelModel:
        """Insert, commit, then publish the creation event"""
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)

        response = (await self.serialize([entity]))[0]
        logger.log_mutation(self.store_name, "created", entity.id)
        self.broadcaster.publish(self.created_event, response.to_payload())
        return response

    async def _after_delete(self, entity: ModelT) -> None:
        """Hook for side effects once the delete has committed"""

    async def delete(self, entity_id: str) -> str:
        """Delete by id and publish the deletion event; returns the confirmation message"""
        entity = await self.get(entity_id)

        await self.db.delete(entity)
        await self.db.commit()
        await self._after_delete(entity)

        logger.log_mutation(self.store_name, "deleted", entity_id)
        self.broadcaster.publish(self.deleted_event, entity_id)
        return f"{self.entity_name} deleted"
