"""
Kubernetes resource endpoints.

Maps HTTP verbs onto ResourceOperations and translates facade failures into
HTTP errors:
- KubernetesNotReadyError -> 503
- ApiException -> upstream status (4xx passthrough, anything else 502)
- ValueError -> 400
- anything else (transport failures) -> 502
"""

from enum import Enum
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from kubernetes.client.rest import ApiException

from ..services.kubernetes import KubernetesNotReadyError, ResourceOperations
from .. import schemas

router = APIRouter(prefix="/v1/kubernetes", tags=["kubernetes"])


class ResourcePath(str, Enum):
    PODS = "pods"
    DEPLOYMENTS = "deployments"
    SERVICES = "services"
    INGRESSES = "ingresses"
    SECRETS = "secrets"


# Facade method per (resource, verb); a missing entry means the verb is not supported
RESOURCE_METHODS: Dict[ResourcePath, Dict[str, str]] = {
    ResourcePath.PODS: {
        "list": "list_pods",
        "get": "get_pod",
        "delete": "delete_pod",
    },
    ResourcePath.DEPLOYMENTS: {
        "list": "list_deployments",
        "get": "get_deployment",
        "create": "create_deployment",
        "replace": "replace_deployment",
        "delete": "delete_deployment",
    },
    ResourcePath.SERVICES: {
        "list": "list_services",
        "get": "get_service",
        "create": "create_service",
        "replace": "replace_service",
        "delete": "delete_service",
    },
    ResourcePath.INGRESSES: {
        "list": "list_ingresses",
        "get": "get_ingress",
        "create": "create_ingress",
        "replace": "replace_ingress",
        "delete": "delete_ingress",
    },
    ResourcePath.SECRETS: {
        "list": "list_secrets",
        "get": "get_secret",
        "create": "create_secret",
        "replace": "replace_secret",
        "delete": "delete_secret",
    },
}


def get_resource_operations(request: Request) -> ResourceOperations:
    """Facade bound to the handle loaded at startup (None if bootstrap failed)."""
    return ResourceOperations(getattr(request.app.state, "kubernetes", None))


def _operation(operations: ResourceOperations, resource: ResourcePath, verb: str):
    method_name = RESOURCE_METHODS[resource].get(verb)
    if method_name is None:
        raise HTTPException(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            detail=f"{verb} is not supported for {resource.value}"
        )
    return getattr(operations, method_name)


async def _forward(awaitable) -> Any:
    """Await a facade call and convert its failure into an HTTP error."""
    try:
        return await awaitable
    except KubernetesNotReadyError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    except ApiException as e:
        code = e.status if e.status and 400 <= e.status < 500 else status.HTTP_502_BAD_GATEWAY
        raise HTTPException(status_code=code, detail=e.reason or str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        # Transport-level failures such as refused connections or timeouts
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Kubernetes API request failed: {e}"
        ) from e


@router.get("/namespaces")
async def list_namespaces(operations: ResourceOperations = Depends(get_resource_operations)):
    return {"items": await _forward(operations.list_namespaces())}


@router.get("/namespaces/{namespace}/{resource}")
async def list_resources(
    namespace: str,
    resource: ResourcePath,
    operations: ResourceOperations = Depends(get_resource_operations)
):
    method = _operation(operations, resource, "list")
    return {"items": await _forward(method(namespace=namespace))}


@router.post("/namespaces/{namespace}/{resource}", status_code=status.HTTP_201_CREATED)
async def create_resource(
    namespace: str,
    resource: ResourcePath,
    manifest: Dict[str, Any] = Body(...),
    operations: ResourceOperations = Depends(get_resource_operations)
):
    method = _operation(operations, resource, "create")
    return await _forward(method(manifest, namespace=namespace))


@router.get("/namespaces/{namespace}/{resource}/{name}")
async def get_resource(
    namespace: str,
    resource: ResourcePath,
    name: str,
    operations: ResourceOperations = Depends(get_resource_operations)
):
    method = _operation(operations, resource, "get")
    return await _forward(method(name, namespace=namespace))


@router.put("/namespaces/{namespace}/{resource}/{name}")
async def replace_resource(
    namespace: str,
    resource: ResourcePath,
    name: str,
    manifest: Dict[str, Any] = Body(...),
    operations: ResourceOperations = Depends(get_resource_operations)
):
    method = _operation(operations, resource, "replace")
    return await _forward(method(name, manifest, namespace=namespace))


@router.delete("/namespaces/{namespace}/{resource}/{name}")
async def delete_resource(
    namespace: str,
    resource: ResourcePath,
    name: str,
    operations: ResourceOperations = Depends(get_resource_operations)
):
    method = _operation(operations, resource, "delete")
    return await _forward(method(name, namespace=namespace))


@router.patch("/namespaces/{namespace}/deployments/{name}/scale")
async def scale_deployment(
    namespace: str,
    name: str,
    payload: schemas.ScaleRequest,
    operations: ResourceOperations = Depends(get_resource_operations)
):
    """Change spec.replicas only, every other deployment field is left as is."""
    return await _forward(operations.scale_deployment(name, payload.replicas, namespace=namespace))
