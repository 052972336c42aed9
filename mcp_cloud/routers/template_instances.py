"""
Template instance endpoints (placeholder lifecycle).
"""

from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, status

from ..services.template_instances import TemplateInstanceService

router = APIRouter(prefix="/v1/template/instances", tags=["template-instances"])


def get_template_instance_service() -> TemplateInstanceService:
    return TemplateInstanceService()


@router.get("")
async def list_template_instances(
    service: TemplateInstanceService = Depends(get_template_instance_service)
):
    return await service.get_template_instances()


@router.get("/{instance_id}")
async def get_template_instance(
    instance_id: str,
    service: TemplateInstanceService = Depends(get_template_instance_service)
):
    return await service.get_template_instance_by_id(instance_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template_instance(
    data: Dict[str, Any] = Body(default={}),
    service: TemplateInstanceService = Depends(get_template_instance_service)
):
    return await service.create_template_instance(data)


@router.put("/{instance_id}")
async def update_template_instance(
    instance_id: str,
    data: Dict[str, Any] = Body(default={}),
    service: TemplateInstanceService = Depends(get_template_instance_service)
):
    return await service.update_template_instance(instance_id, data)


@router.delete("/{instance_id}")
async def delete_template_instance(
    instance_id: str,
    service: TemplateInstanceService = Depends(get_template_instance_service)
):
    return await service.delete_template_instance(instance_id)
