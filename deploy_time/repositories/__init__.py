"""Repositories package - local storage for detection results."""

from deploy_time.repositories.cache import DeploymentCacheRepository

__all__ = [
    "DeploymentCacheRepository",
]
