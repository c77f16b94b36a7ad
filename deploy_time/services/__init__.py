"""Services package - service class exports."""

from deploy_time.services.deployment import DeploymentDetector
from deploy_time.services.endpoints import EndpointManager

__all__ = [
    "DeploymentDetector",
    "EndpointManager",
]
