"""
Kubernetes Resource Management

This module contains the cluster-facing side of the API:
- ExecutionMode: Chooses in-cluster or kubeconfig credentials
- init_kubernetes: One-time credential bootstrap, returns a KubernetesHandle
- ResourceClientSet: Typed core/apps/networking API clients
- ResourceOperations: Uniform CRUD facade over pods, deployments, services,
  ingresses, secrets and namespaces
- ConnectivityMonitor: Boolean liveness probe for health endpoints

Lifecycle:
1. At startup: init_kubernetes() loads credentials and builds the client set
2. Per request: ResourceOperations(handle) forwards calls to the API server
3. Health checks: ConnectivityMonitor(operations).is_connected()
"""

from .execution_mode import ExecutionMode
from .client import (
    KubernetesHandle,
    ResourceClientSet,
    init_kubernetes,
    load_credentials,
)
from .operations import (
    DEFAULT_NAMESPACE,
    KubernetesNotReadyError,
    ResourceKind,
    ResourceOperations,
    build_replica_patch,
    resolve_namespace,
)
from .monitor import ConnectivityMonitor

__all__ = [
    # Bootstrap
    "ExecutionMode",
    "KubernetesHandle",
    "ResourceClientSet",
    "init_kubernetes",
    "load_credentials",
    # Facade
    "DEFAULT_NAMESPACE",
    "KubernetesNotReadyError",
    "ResourceKind",
    "ResourceOperations",
    "build_replica_patch",
    "resolve_namespace",
    # Health
    "ConnectivityMonitor",
]
