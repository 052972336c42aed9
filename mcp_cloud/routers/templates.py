"""
Template catalog endpoints.
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..services.templates import TemplateService
from .. import schemas

router = APIRouter(prefix="/v1/templates", tags=["templates"])


def get_template_service(db: AsyncSession = Depends(get_db)) -> TemplateService:
    return TemplateService(db)


@router.get("")
async def list_templates(
    page: Optional[int] = Query(None, ge=1, description="Page number for pagination"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of items per page"),
    search: Optional[str] = Query(None, description="Filter by name, description, or version"),
    published_by: Optional[str] = Query(None, description="Filter by publisher"),
    service: TemplateService = Depends(get_template_service)
):
    """
    List templates, newest first.

    Pagination metadata is included only when page or limit is provided.
    """
    return await service.get_templates(page=page, limit=limit, search=search, published_by=published_by)


@router.get("/publisher/{published_by}")
async def list_templates_by_publisher(
    published_by: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    search: Optional[str] = None,
    service: TemplateService = Depends(get_template_service)
):
    return await service.get_templates_by_publisher(published_by, page=page, limit=limit, search=search)


@router.get("/search/{term}")
async def search_templates(
    term: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    published_by: Optional[str] = None,
    service: TemplateService = Depends(get_template_service)
):
    return await service.search_templates(term, page=page, limit=limit, published_by=published_by)


@router.get("/{template_id}", response_model=schemas.Template)
async def get_template(
    template_id: UUID,
    service: TemplateService = Depends(get_template_service)
):
    template = await service.get_template_by_id(template_id)
    return schemas.Template.model_validate(template)


@router.post("", response_model=schemas.Template, status_code=status.HTTP_201_CREATED)
async def create_template(
    data: schemas.TemplateCreate,
    service: TemplateService = Depends(get_template_service)
):
    return await service.create_template(data)


@router.put("/{template_id}", response_model=schemas.Template)
async def update_template(
    template_id: UUID,
    data: schemas.TemplateUpdate,
    service: TemplateService = Depends(get_template_service)
):
    return await service.update_template(template_id, data)


@router.delete("/{template_id}", response_model=schemas.MessageResponse)
async def delete_template(
    template_id: UUID,
    service: TemplateService = Depends(get_template_service)
):
    return await service.delete_template(template_id)


@router.post("/{template_id}/duplicate", response_model=schemas.Template, status_code=status.HTTP_201_CREATED)
async def duplicate_template(
    template_id: UUID,
    data: Optional[schemas.TemplateDuplicate] = None,
    service: TemplateService = Depends(get_template_service)
):
    """Copy a template. The copy is named "<original> (Copy)" unless a name is given."""
    return await service.duplicate_template(template_id, data.name if data else None)
