"""
Execution Mode

Selects where Kubernetes credentials come from when the process starts:
in-cluster service account for production, a local kubeconfig otherwise.
"""

from enum import Enum
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ExecutionMode(str, Enum):
    """
    Credential source for the Kubernetes bootstrap.

    Attributes:
        PRODUCTION: Running inside a cluster, use the pod's service account
        DEVELOPMENT: Running anywhere else, use a kubeconfig file
    """

    PRODUCTION = "production"
    DEVELOPMENT = "development"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "ExecutionMode":
        """
        Resolve the ENVIRONMENT setting to a credential source.

        Only "production" selects in-cluster credentials. Any other value
        (staging, test, empty) falls back to DEVELOPMENT, with a warning when
        the value is not a known mode, so a mislabelled environment never
        stops the API from starting.
        """
        normalized = (value or "").lower().strip()
        if normalized == cls.PRODUCTION.value:
            return cls.PRODUCTION
        if normalized != cls.DEVELOPMENT.value:
            logger.warning(
                f"[K8S] Unknown environment '{value}', loading credentials from kubeconfig"
            )
        return cls.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self == ExecutionMode.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self == ExecutionMode.DEVELOPMENT

    def __str__(self) -> str:
        return self.value
