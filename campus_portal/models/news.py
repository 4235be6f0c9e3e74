from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from campus_portal.core.database import Base
from campus_portal.models.base import IdMixin


class News(IdMixin, Base):
    """News post / announcement"""
    __tablename__ = "news"

    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)

    published_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<News {self.title}>"
