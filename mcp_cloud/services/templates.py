"""
Template catalog service.

Database-backed CRUD for deployment templates, including search,
publisher filtering, pagination and duplication.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
import logging
import math

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .. import schemas
from ..models import Template

logger = logging.getLogger(__name__)

VALID_FIELD_TYPES = [
    "text",
    "password",
    "email",
    "number",
    "textarea",
    "select",
    "checkbox",
    "radio",
]
VALID_ARG_TYPES = ["arg", "env"]
OPTION_FIELD_TYPES = ("select", "radio")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def validate_template_form(form: Any) -> None:
    """
    Validate the structure of a template form.

    Raises:
        HTTPException: 400 describing the first invalid field
    """
    def bad_request(detail: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    if not isinstance(form, dict):
        raise bad_request("Form must be an object")

    fields = form.get("fields")
    if not isinstance(fields, list):
        raise bad_request("Form must contain a fields array")

    for index, field in enumerate(fields):
        if not isinstance(field, dict):
            raise bad_request(f"Field at index {index} must be an object")

        name = field.get("name")
        if not name or not isinstance(name, str):
            raise bad_request(f"Field at index {index} must have a valid name")

        field_type = field.get("type")
        if field_type not in VALID_FIELD_TYPES:
            raise bad_request(
                f"Field at index {index} must have a valid type: {', '.join(VALID_FIELD_TYPES)}"
            )

        label = field.get("label")
        if not label or not isinstance(label, str):
            raise bad_request(f"Field at index {index} must have a valid label")

        if field.get("argType") not in VALID_ARG_TYPES:
            raise bad_request(
                f"Field at index {index} must have a valid argType: {', '.join(VALID_ARG_TYPES)}"
            )

        if not isinstance(field.get("required"), bool):
            raise bad_request(f"Field at index {index} must have a valid required boolean value")

        if field.get("defaultValue") is None:
            raise bad_request(f"Field at index {index} must have a defaultValue")

        if field_type in OPTION_FIELD_TYPES and not isinstance(field.get("options"), list):
            raise bad_request(
                f"Field at index {index} with type {field_type} must have an options array"
            )


class TemplateService:
    """Template persistence operations bound to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _build_filters(search: Optional[str] = None, published_by: Optional[str] = None) -> List[Any]:
        filters = []
        if search:
            pattern = f"%{search}%"
            filters.append(or_(
                Template.name.ilike(pattern),
                Template.description.ilike(pattern),
                Template.version.ilike(pattern),
            ))
        if published_by:
            filters.append(Template.published_by == published_by)
        return filters

    @staticmethod
    def _to_response(template: Template) -> schemas.Template:
        return schemas.Template.model_validate(template)

    async def get_templates(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        published_by: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List templates, newest first.

        Pagination metadata is only included when page or limit is given.
        """
        if page or limit:
            return await self.get_templates_with_pagination(
                page or DEFAULT_PAGE, limit or DEFAULT_LIMIT, search, published_by
            )

        query = (
            select(Template)
            .where(*self._build_filters(search, published_by))
            .order_by(Template.created_at.desc())
        )
        result = await self.db.execute(query)
        return {"templates": [self._to_response(t) for t in result.scalars().all()]}

    async def get_templates_with_pagination(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        search: Optional[str] = None,
        published_by: Optional[str] = None
    ) -> Dict[str, Any]:
        filters = self._build_filters(search, published_by)
        offset = (page - 1) * limit

        query = (
            select(Template)
            .where(*filters)
            .order_by(Template.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(query)
        templates = result.scalars().all()

        count_result = await self.db.execute(
            select(func.count()).select_from(Template).where(*filters)
        )
        total = count_result.scalar_one()

        return {
            "templates": [self._to_response(t) for t in templates],
            "pagination": schemas.Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        }

    async def get_template_by_id(self, template_id: UUID) -> Template:
        result = await self.db.execute(select(Template).where(Template.id == template_id))
        template = result.scalar_one_or_none()
        if not template:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Template with ID {template_id} not found"
            )
        return template

    async def create_template(self, data: schemas.TemplateCreate) -> schemas.Template:
        if data.form is not None:
            validate_template_form(data.form)

        template = Template(
            name=data.name,
            description=data.description,
            version=data.version,
            image=data.image,
            published_by=data.published_by,
            form=data.form,
        )

        try:
            self.db.add(template)
            await self.db.commit()
            await self.db.refresh(template)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create template {data.name}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Failed to create template"
            ) from e

        logger.info(f"Created template {template.id} ({template.name})")
        return self._to_response(template)

    async def update_template(self, template_id: UUID, data: schemas.TemplateUpdate) -> schemas.Template:
        """Apply only the fields present in the request body."""
        template = await self.get_template_by_id(template_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("form") is not None:
            validate_template_form(changes["form"])

        for field, value in changes.items():
            setattr(template, field, value)

        try:
            await self.db.commit()
            await self.db.refresh(template)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update template {template_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Failed to update template"
            ) from e

        logger.info(f"Updated template {template_id} (fields: {', '.join(changes) or 'none'})")
        return self._to_response(template)

    async def delete_template(self, template_id: UUID) -> Dict[str, str]:
        template = await self.get_template_by_id(template_id)
        await self.db.delete(template)
        await self.db.commit()
        logger.info(f"Deleted template {template_id}")
        return {"message": "Template deleted successfully"}

    async def duplicate_template(self, template_id: UUID, new_name: Optional[str] = None) -> schemas.Template:
        original = await self.get_template_by_id(template_id)
        copy = schemas.TemplateCreate(
            name=new_name or f"{original.name} (Copy)",
            description=original.description,
            version=original.version,
            image=original.image,
            published_by=original.published_by,
            form=original.form,
        )
        return await self.create_template(copy)

    async def get_templates_by_publisher(
        self,
        published_by: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.get_templates(page=page, limit=limit, search=search, published_by=published_by)

    async def search_templates(
        self,
        search_term: str,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        published_by: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self.get_templates(page=page, limit=limit, search=search_term, published_by=published_by)
