from sqlalchemy import Column, String, DateTime, Integer, Text
from datetime import datetime

from campus_portal.core.database import Base
from campus_portal.models.base import IdMixin


class UploadedFile(IdMixin, Base):
    """
    Metadata for a file uploaded into a section.

    ``section_id`` is a plain reference, not a foreign key: deleting a section
    leaves its files in place with a dangling reference.
    """
    __tablename__ = "files"

    file_name = Column(String(500), nullable=False)
    section_id = Column(String(36), nullable=False, index=True)

    # Storage details, derived from the upload
    file_path = Column(Text, nullable=False, unique=True)
    original_file_name = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=True)  # in bytes, recorded at upload time

    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<UploadedFile {self.file_name}>"
