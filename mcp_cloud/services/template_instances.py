"""
Template instance lifecycle.

Instances (a template deployed with concrete form values) are not persisted
yet, so every operation answers with its placeholder response.
"""

from typing import Any, Dict

from fastapi import HTTPException, status


class TemplateInstanceService:
    """Placeholder lifecycle for template instances."""

    async def get_template_instances(self) -> Dict[str, Any]:
        return {"templateInstances": []}

    async def get_template_instance_by_id(self, instance_id: str) -> Dict[str, Any]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template instance with ID {instance_id} not found"
        )

    async def create_template_instance(self, data: Dict[str, Any]) -> Dict[str, Any]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Template instance creation not implemented yet"
        )

    async def update_template_instance(self, instance_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Template instance update not implemented yet"
        )

    async def delete_template_instance(self, instance_id: str) -> Dict[str, str]:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template instance with ID {instance_id} not found"
        )
