from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Dict, Any
from uuid import UUID


# ============================================================================
# Templates
# ============================================================================

class TemplateBase(BaseModel):
    name: str
    description: Optional[str] = None
    version: Optional[str] = None
    image: Optional[str] = None
    published_by: Optional[str] = None
    # Validated by TemplateService so invalid forms yield 400 with the offending field index
    form: Optional[Dict[str, Any]] = None


class TemplateCreate(TemplateBase):
    pass


class TemplateUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    image: Optional[str] = None
    published_by: Optional[str] = None
    form: Optional[Dict[str, Any]] = None


class TemplateDuplicate(BaseModel):
    name: Optional[str] = None


class Template(TemplateBase):
    id: UUID
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Kubernetes
# ============================================================================

class ScaleRequest(BaseModel):
    replicas: int = Field(..., ge=0, description="Target replica count")


class HealthResponse(BaseModel):
    status: str
    service: str
    kubernetes: bool
