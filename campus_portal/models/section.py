from sqlalchemy import Column, String, DateTime, Text
from datetime import datetime

from campus_portal.core.database import Base
from campus_portal.models.base import IdMixin


class Section(IdMixin, Base):
    """Academic section grouping uploaded files"""
    __tablename__ = "sections"

    name = Column(String(255), nullable=False)
    icon = Column(String(32), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Section {self.name}>"
