"""RPC endpoint selection."""

from deploy_time.services.endpoints.manager import ClientFactory, EndpointManager

__all__ = [
    "ClientFactory",
    "EndpointManager",
]
