"""
Knowledge base entries and the student assistant search.

Search is a case-insensitive substring scan over question and answer. The
query is matched literally: characters such as ``%``, ``_`` or ``.`` have no
special meaning. Results keep store-native order.
"""

from sqlalchemy import select
from typing import List

from campus_portal.models.knowledge import KnowledgeEntry
from campus_portal.schemas.content import KnowledgeCreate, KnowledgeResponse
from campus_portal.services.broadcast import PortalEvent
from campus_portal.services.content_service import ContentService, require_fields


def matches(entry: KnowledgeEntry, needle: str) -> bool:
    """True if ``needle`` (already lower-cased) occurs in question or answer"""
    return needle in entry.question.lower() or needle in entry.answer.lower()


class KnowledgeService(ContentService[KnowledgeEntry]):
    """Q&A pairs for the student assistant"""

    model = KnowledgeEntry
    response_schema = KnowledgeResponse
    entity_name = "Knowledge base entry"
    created_event = PortalEvent.KNOWLEDGE_ADDED
    deleted_event = PortalEvent.KNOWLEDGE_DELETED

    async def create(self, data: KnowledgeCreate) -> KnowledgeResponse:
        require_fields({"question": data.question, "answer": data.answer}, "Question and answer are required")

        entry = KnowledgeEntry(question=data.question.strip(), answer=data.answer)
        return await self._persist(entry)

    async def search(self, query: str) -> List[KnowledgeResponse]:
        require_fields({"query": query}, "Query is required")

        # Linear scan in Python: lower() is Unicode-aware, SQL LOWER() on SQLite is ASCII-only
        needle = query.lower()
        result = await self.db.execute(select(KnowledgeEntry).order_by(self._list_order()))
        hits = [entry for entry in result.scalars().all() if matches(entry, needle)]
        return await self.serialize(hits)
