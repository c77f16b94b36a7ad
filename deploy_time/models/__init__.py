"""Models package - entities for all domains."""

from deploy_time.models.common import BaseEntity, now_ms
from deploy_time.models.deployment import (
    CacheStats,
    DeploymentInfo,
    DeploymentRecord,
    NativeProgram,
)
from deploy_time.models.endpoint import Endpoint, HealthState

__all__ = [
    # Common
    "BaseEntity",
    "now_ms",
    # Deployment
    "DeploymentRecord",
    "DeploymentInfo",
    "NativeProgram",
    "CacheStats",
    # Endpoint
    "Endpoint",
    "HealthState",
]
