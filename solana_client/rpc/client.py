"""Solana RPC client - slot, accounts, signatures, transactions."""

from loguru import logger

from solana_client.base import BaseClient
from solana_client.rpc.schemas import AccountInfoSchema, ParsedTransactionSchema, SignatureInfoSchema

SIGNATURE_PAGE_LIMIT = 1000


class RpcClient(BaseClient):
    """Client for the ledger RPC methods used by deployment detection."""

    async def get_slot(self) -> int:
        """getSlot - current ledger position."""
        return await self._call("getSlot")

    async def get_parsed_account_info(self, address: str) -> AccountInfoSchema | None:
        """getAccountInfo (jsonParsed) - None if the account does not exist."""
        result = await self._call("getAccountInfo", [address, {"encoding": "jsonParsed"}])
        value = (result or {}).get("value")
        if value is None:
            return None
        return AccountInfoSchema.model_validate(value)

    async def get_signatures_for_address(
        self,
        address: str,
        limit: int = SIGNATURE_PAGE_LIMIT,
        before: str | None = None,
    ) -> list[SignatureInfoSchema]:
        """getSignaturesForAddress - one page, newest first."""
        config: dict = {"limit": limit}
        if before:
            config["before"] = before
        result = await self._call("getSignaturesForAddress", [address, config])
        return [SignatureInfoSchema.model_validate(s) for s in result or []]

    async def get_all_signatures_for_address(
        self,
        address: str,
        limit: int = SIGNATURE_PAGE_LIMIT,
        max_pages: int = 50,
    ) -> list[SignatureInfoSchema]:
        """Walk ``before`` cursors until a short page or ``max_pages`` is reached."""
        signatures: list[SignatureInfoSchema] = []
        before = None

        for _ in range(max_pages):
            page = await self.get_signatures_for_address(address, limit=limit, before=before)
            signatures.extend(page)
            if len(page) < limit:
                break
            before = page[-1].signature
        else:
            logger.warning("Signature history of {} truncated at {} pages", address, max_pages)

        return signatures

    async def get_parsed_transaction(self, signature: str) -> ParsedTransactionSchema | None:
        """getTransaction (jsonParsed, versioned) - None if unknown to the node."""
        result = await self._call(
            "getTransaction",
            [signature, {"encoding": "jsonParsed", "maxSupportedTransactionVersion": 0}],
        )
        if result is None:
            return None
        return ParsedTransactionSchema.model_validate(result)
