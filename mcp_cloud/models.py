from sqlalchemy import Column, String, DateTime, Text, JSON, Uuid
from sqlalchemy.sql import func
import uuid
from .database import Base


class Template(Base):
    """Reusable deployment template published to the catalog."""
    __tablename__ = "templates"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    version = Column(String(64), nullable=True)
    image = Column(String(500), nullable=True)  # Icon/logo URL shown in the catalog
    published_by = Column(String, nullable=True, index=True)
    form = Column(JSON, nullable=True)  # {"fields": [...]} rendered when instantiating the template

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
