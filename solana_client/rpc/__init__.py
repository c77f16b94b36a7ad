"""Solana RPC client - slot, accounts, signatures, transactions."""

from solana_client.rpc.client import RpcClient
from solana_client.rpc.schemas import (
    AccountInfoSchema,
    ParsedTransactionSchema,
    SignatureInfoSchema,
    TransactionMetaSchema,
)

__all__ = [
    "RpcClient",
    "AccountInfoSchema",
    "SignatureInfoSchema",
    "TransactionMetaSchema",
    "ParsedTransactionSchema",
]
