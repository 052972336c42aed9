"""
Kubernetes Credential Bootstrap and API Clients

Loads cluster credentials once per process and builds the typed API clients
used by ResourceOperations:
- CoreV1Api: pods, services, secrets, namespaces
- AppsV1Api: deployments
- NetworkingV1Api: ingresses

A failed bootstrap never raises. It is logged and init_kubernetes() returns
None, which leaves ResourceOperations uninitialized so every resource call
fails fast and the connectivity probe reports False.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from kubernetes import client, config

from ...config import get_settings
from .execution_mode import ExecutionMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceClientSet:
    """Typed API clients, one per API group, sharing a single ApiClient."""

    core_v1: client.CoreV1Api
    apps_v1: client.AppsV1Api
    networking_v1: client.NetworkingV1Api

    @classmethod
    def from_api_client(cls, api_client: client.ApiClient) -> "ResourceClientSet":
        """Build the client set. No request is sent to the API server."""
        return cls(
            core_v1=client.CoreV1Api(api_client),
            apps_v1=client.AppsV1Api(api_client),
            networking_v1=client.NetworkingV1Api(api_client),
        )


@dataclass(frozen=True)
class KubernetesHandle:
    """Loaded credentials plus the client set built from them."""

    api_client: client.ApiClient
    clients: ResourceClientSet


def load_credentials(
    mode: ExecutionMode,
    kubeconfig_path: Optional[str] = None,
    context: Optional[str] = None
) -> Optional[client.Configuration]:
    """
    Load cluster credentials for the given execution mode.

    Production mode reads the in-cluster service account token and CA bundle,
    with the API server address taken from KUBERNETES_SERVICE_HOST/PORT.
    Development mode reads a kubeconfig file and activates `context`
    (or the file's current-context).

    The credentials are loaded into a private Configuration, the library's
    global default configuration is left untouched.

    Returns:
        Populated Configuration, or None if loading failed
    """
    configuration = client.Configuration()
    try:
        if mode.is_production:
            config.load_incluster_config(client_configuration=configuration)
            logger.info("[K8S] Loaded in-cluster Kubernetes configuration")
        else:
            config.load_kube_config(
                config_file=kubeconfig_path or None,
                context=context or None,
                client_configuration=configuration
            )
            logger.info(
                f"[K8S] Loaded kubeconfig for development "
                f"(file: {kubeconfig_path or 'default'}, context: {context or 'current'})"
            )
    except Exception as e:
        logger.error(f"[K8S] Failed to load Kubernetes config in {mode} mode: {e}")
        return None

    return configuration


def init_kubernetes(mode: Optional[ExecutionMode] = None) -> Optional[KubernetesHandle]:
    """
    Bootstrap credentials and construct the API client set.

    Args:
        mode: Execution mode (default: from the ENVIRONMENT setting)

    Returns:
        KubernetesHandle on success, None if credentials could not be loaded
    """
    settings = get_settings()
    if mode is None:
        mode = ExecutionMode.from_string(settings.environment)

    configuration = load_credentials(
        mode,
        kubeconfig_path=settings.kubeconfig_path,
        context=settings.kube_context
    )
    if configuration is None:
        logger.warning("[K8S] Kubernetes client not initialized, resource operations will fail")
        return None

    api_client = client.ApiClient(configuration)
    handle = KubernetesHandle(
        api_client=api_client,
        clients=ResourceClientSet.from_api_client(api_client)
    )
    logger.info(f"[K8S] Kubernetes client initialized - API server: {configuration.host}")
    return handle
