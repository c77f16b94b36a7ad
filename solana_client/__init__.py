"""Solana JSON-RPC client package."""

from solana_client.base import BaseClient, RpcError
from solana_client.rpc import RpcClient

__all__ = [
    # Base
    "BaseClient",
    "RpcError",
    # Clients
    "RpcClient",
]
