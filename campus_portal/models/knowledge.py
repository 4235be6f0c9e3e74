from sqlalchemy import Column, DateTime, Text
from datetime import datetime

from campus_portal.core.database import Base
from campus_portal.models.base import IdMixin


class KnowledgeEntry(IdMixin, Base):
    """Question/answer pair searched by the student assistant"""
    __tablename__ = "knowledge_base"

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<KnowledgeEntry {self.question[:40]}>"
