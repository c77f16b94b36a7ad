"""Common models - base classes and shared helpers."""

from deploy_time.models.common.base import BaseEntity, now_ms

__all__ = [
    "BaseEntity",
    "now_ms",
]
