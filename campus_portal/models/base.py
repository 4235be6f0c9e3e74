from sqlalchemy import Column, String
import uuid


def generate_uuid():
    """Generate a UUID string"""
    return str(uuid.uuid4())


class IdMixin:
    """Server-assigned UUID primary key, stored as VARCHAR(36)"""
    id = Column(String(36), primary_key=True, default=generate_uuid)
