"""Endpoint domain - RPC targets and their health state."""

from deploy_time.models.endpoint.entities import Endpoint, HealthState

__all__ = [
    "Endpoint",
    "HealthState",
]
