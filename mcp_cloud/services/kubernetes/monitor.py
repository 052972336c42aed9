"""
Kubernetes connectivity probe for health endpoints.
"""

import logging

from .operations import ResourceOperations

logger = logging.getLogger(__name__)


class ConnectivityMonitor:
    """
    Reports whether the cluster API is reachable with the loaded credentials.

    Unlike ResourceOperations, failures are never propagated: a health
    signal only needs a boolean.
    """

    def __init__(self, operations: ResourceOperations):
        self._operations = operations

    async def is_connected(self) -> bool:
        """
        Probe the cluster by listing namespaces.

        Returns:
            True if the probe succeeded, False on any configuration, network
            or authorization failure
        """
        try:
            await self._operations.list_namespaces()
            return True
        except Exception as e:
            logger.warning(f"[K8S] Kubernetes connection check failed: {e}")
            return False
