"""Deployment detection."""

from deploy_time.services.deployment.detector import DeploymentDetector, order_by_slot

__all__ = [
    "DeploymentDetector",
    "order_by_slot",
]
