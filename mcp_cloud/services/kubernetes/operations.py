"""
Kubernetes Resource Operations

Uniform, namespace-aware CRUD surface over pods, deployments, services,
ingresses and secrets, plus cluster-scoped namespace listing.

Every public method is a thin binding of `_invoke`, which:
- fails immediately if credentials were never loaded
- runs the blocking client call in a worker thread
- converts the response to plain JSON-compatible documents
- emits exactly one log record (success or failure)
- re-raises any failure unchanged (no retry, no wrapping)

Manifests are opaque dicts: whatever the caller sends is forwarded to the
API server as-is and responses come back as the API server rendered them.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import asyncio
import logging

from .client import KubernetesHandle, ResourceClientSet

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"
MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"

Manifest = Dict[str, Any]


class ResourceKind(str, Enum):
    """Resource kinds managed by ResourceOperations."""

    POD = "Pod"
    DEPLOYMENT = "Deployment"
    SERVICE = "Service"
    INGRESS = "Ingress"
    SECRET = "Secret"
    NAMESPACE = "Namespace"

    @property
    def is_namespaced(self) -> bool:
        return self != ResourceKind.NAMESPACE

    def __str__(self) -> str:
        return self.value


class KubernetesNotReadyError(RuntimeError):
    """Raised by resource operations when cluster credentials were never loaded."""


def resolve_namespace(namespace: Optional[str]) -> str:
    """Omitted or empty namespace means the "default" namespace."""
    return namespace or DEFAULT_NAMESPACE


def build_replica_patch(replicas: int) -> Manifest:
    """
    Build the partial update used to scale a deployment.

    The body carries spec.replicas and nothing else, so concurrent edits to
    the rest of the deployment (image, env, labels) are never overwritten.

    Raises:
        ValueError: If replicas is not a non-negative integer
    """
    if isinstance(replicas, bool) or not isinstance(replicas, int):
        raise ValueError(f"replicas must be an integer, got {replicas!r}")
    if replicas < 0:
        raise ValueError(f"replicas must be >= 0, got {replicas}")
    return {"spec": {"replicas": replicas}}


def manifest_name(body: Any) -> Optional[str]:
    """Read metadata.name from a dict manifest or a typed client model."""
    if isinstance(body, dict):
        metadata = body.get("metadata") or {}
        return metadata.get("name") if isinstance(metadata, dict) else None
    metadata = getattr(body, "metadata", None)
    return getattr(metadata, "name", None)


class ResourceOperations:
    """
    Namespace-aware CRUD facade over the Kubernetes API.

    Holds no per-call state. Constructed with the handle returned by
    init_kubernetes(); a None handle leaves the facade uninitialized and every
    call raises KubernetesNotReadyError.
    """

    def __init__(self, handle: Optional[KubernetesHandle]):
        self._handle = handle

    @property
    def is_ready(self) -> bool:
        return self._handle is not None

    def _clients(self) -> ResourceClientSet:
        if self._handle is None:
            raise KubernetesNotReadyError("Kubernetes client is not initialized")
        return self._handle.clients

    def _to_document(self, obj: Any) -> Any:
        return self._handle.api_client.sanitize_for_serialization(obj)

    async def _invoke(
        self,
        kind: ResourceKind,
        verb: str,
        call: Callable[[ResourceClientSet], Any],
        namespace: Optional[str] = None,
        name: Optional[str] = None
    ) -> Any:
        """
        Run one API call and log its outcome exactly once.

        Args:
            kind: Resource kind (log label)
            verb: Operation name (log label)
            call: Receives the client set and performs the blocking request
            namespace: Target namespace, None for cluster-scoped kinds
            name: Target resource name, None for list

        Returns:
            The response converted to plain documents
        """
        target = f"{kind} {name}" if name else kind.value
        where = f" in namespace {namespace}" if namespace else ""
        fields = {
            "kind": kind.value,
            "verb": verb,
            "namespace": namespace,
            "name": name,
        }

        try:
            clients = self._clients()
            response = await asyncio.to_thread(call, clients)
            result = self._to_document(response)
        except Exception as e:
            logger.error(
                f"[K8S] Failed to {verb} {target}{where}: {e}",
                extra={"k8s": {**fields, "outcome": "failure"}}
            )
            raise

        logger.info(
            f"[K8S] {verb} {target}{where} succeeded",
            extra={"k8s": {**fields, "outcome": "success"}}
        )
        return result

    async def _list(self, kind: ResourceKind, call: Callable[[ResourceClientSet], Any], namespace: Optional[str] = None) -> List[Manifest]:
        # An empty collection is a valid result, never an error
        return await self._invoke(
            kind, "list", lambda clients: list(call(clients).items or []), namespace=namespace
        )

    # =========================================================================
    # PODS
    # =========================================================================

    async def list_pods(self, namespace: Optional[str] = None) -> List[Manifest]:
        namespace = resolve_namespace(namespace)
        return await self._list(
            ResourceKind.POD,
            lambda c: c.core_v1.list_namespaced_pod(namespace=namespace),
            namespace=namespace
        )

    async def get_pod(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.POD, "get",
            lambda c: c.core_v1.read_namespaced_pod(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def delete_pod(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.POD, "delete",
            lambda c: c.core_v1.delete_namespaced_pod(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    # =========================================================================
    # DEPLOYMENTS
    # =========================================================================

    async def list_deployments(self, namespace: Optional[str] = None) -> List[Manifest]:
        namespace = resolve_namespace(namespace)
        return await self._list(
            ResourceKind.DEPLOYMENT,
            lambda c: c.apps_v1.list_namespaced_deployment(namespace=namespace),
            namespace=namespace
        )

    async def get_deployment(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.DEPLOYMENT, "get",
            lambda c: c.apps_v1.read_namespaced_deployment(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def create_deployment(self, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.DEPLOYMENT, "create",
            lambda c: c.apps_v1.create_namespaced_deployment(namespace=namespace, body=body),
            namespace=namespace, name=manifest_name(body)
        )

    async def replace_deployment(self, name: str, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.DEPLOYMENT, "replace",
            lambda c: c.apps_v1.replace_namespaced_deployment(name=name, namespace=namespace, body=body),
            namespace=namespace, name=name
        )

    async def delete_deployment(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.DEPLOYMENT, "delete",
            lambda c: c.apps_v1.delete_namespaced_deployment(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def scale_deployment(self, name: str, replicas: int, namespace: Optional[str] = None) -> Manifest:
        """Set spec.replicas with a merge patch, leaving every other field untouched."""
        namespace = resolve_namespace(namespace)

        def scale(c: ResourceClientSet) -> Any:
            return c.apps_v1.patch_namespaced_deployment(
                name=name,
                namespace=namespace,
                body=build_replica_patch(replicas),
                _content_type=MERGE_PATCH_CONTENT_TYPE
            )

        return await self._invoke(
            ResourceKind.DEPLOYMENT, "scale", scale, namespace=namespace, name=name
        )

    # =========================================================================
    # SERVICES
    # =========================================================================

    async def list_services(self, namespace: Optional[str] = None) -> List[Manifest]:
        namespace = resolve_namespace(namespace)
        return await self._list(
            ResourceKind.SERVICE,
            lambda c: c.core_v1.list_namespaced_service(namespace=namespace),
            namespace=namespace
        )

    async def get_service(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SERVICE, "get",
            lambda c: c.core_v1.read_namespaced_service(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def create_service(self, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SERVICE, "create",
            lambda c: c.core_v1.create_namespaced_service(namespace=namespace, body=body),
            namespace=namespace, name=manifest_name(body)
        )

    async def replace_service(self, name: str, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SERVICE, "replace",
            lambda c: c.core_v1.replace_namespaced_service(name=name, namespace=namespace, body=body),
            namespace=namespace, name=name
        )

    async def delete_service(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SERVICE, "delete",
            lambda c: c.core_v1.delete_namespaced_service(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    # =========================================================================
    # INGRESSES
    # =========================================================================

    async def list_ingresses(self, namespace: Optional[str] = None) -> List[Manifest]:
        namespace = resolve_namespace(namespace)
        return await self._list(
            ResourceKind.INGRESS,
            lambda c: c.networking_v1.list_namespaced_ingress(namespace=namespace),
            namespace=namespace
        )

    async def get_ingress(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.INGRESS, "get",
            lambda c: c.networking_v1.read_namespaced_ingress(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def create_ingress(self, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.INGRESS, "create",
            lambda c: c.networking_v1.create_namespaced_ingress(namespace=namespace, body=body),
            namespace=namespace, name=manifest_name(body)
        )

    async def replace_ingress(self, name: str, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.INGRESS, "replace",
            lambda c: c.networking_v1.replace_namespaced_ingress(name=name, namespace=namespace, body=body),
            namespace=namespace, name=name
        )

    async def delete_ingress(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.INGRESS, "delete",
            lambda c: c.networking_v1.delete_namespaced_ingress(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    # =========================================================================
    # SECRETS
    # =========================================================================

    async def list_secrets(self, namespace: Optional[str] = None) -> List[Manifest]:
        namespace = resolve_namespace(namespace)
        return await self._list(
            ResourceKind.SECRET,
            lambda c: c.core_v1.list_namespaced_secret(namespace=namespace),
            namespace=namespace
        )

    async def get_secret(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SECRET, "get",
            lambda c: c.core_v1.read_namespaced_secret(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    async def create_secret(self, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SECRET, "create",
            lambda c: c.core_v1.create_namespaced_secret(namespace=namespace, body=body),
            namespace=namespace, name=manifest_name(body)
        )

    async def replace_secret(self, name: str, body: Manifest, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SECRET, "replace",
            lambda c: c.core_v1.replace_namespaced_secret(name=name, namespace=namespace, body=body),
            namespace=namespace, name=name
        )

    async def delete_secret(self, name: str, namespace: Optional[str] = None) -> Manifest:
        namespace = resolve_namespace(namespace)
        return await self._invoke(
            ResourceKind.SECRET, "delete",
            lambda c: c.core_v1.delete_namespaced_secret(name=name, namespace=namespace),
            namespace=namespace, name=name
        )

    # =========================================================================
    # NAMESPACES
    # =========================================================================

    async def list_namespaces(self) -> List[Manifest]:
        return await self._list(ResourceKind.NAMESPACE, lambda c: c.core_v1.list_namespace())
