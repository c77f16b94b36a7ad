"""Deployment detector - finds the transaction that first deployed a program."""

from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing

from loguru import logger
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt

import settings
from deploy_time.errors import (
    AccountNotFoundError,
    DeploymentNotFoundError,
    NoTransactionHistoryError,
    NotAProgramAccountError,
    is_transient,
)
from deploy_time.models import DeploymentInfo, NativeProgram
from deploy_time.models.deployment import (
    is_deployment_log,
    is_loader,
    is_native_program,
    validate_program_id,
)
from deploy_time.repositories import DeploymentCacheRepository
from deploy_time.services.endpoints import EndpointManager
from solana_client import RpcClient
from solana_client.rpc import ParsedTransactionSchema, SignatureInfoSchema


def order_by_slot(signatures: Iterable[SignatureInfoSchema]) -> list[SignatureInfoSchema]:
    """Oldest first; the RPC does not guarantee ordering. Missing slots sort as 0."""
    return sorted(signatures, key=lambda s: s.slot or 0)


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Attempt {} failed: {}", retry_state.attempt_number, exc)


class DeploymentDetector:
    """Resolve a program id to its deployment, with caching and endpoint failover."""

    def __init__(
        self,
        endpoints: EndpointManager,
        cache: DeploymentCacheRepository,
        max_attempts: int = settings.MAX_DETECT_ATTEMPTS,
        max_signature_pages: int = settings.MAX_SIGNATURE_PAGES,
    ):
        self._endpoints = endpoints
        self._cache = cache
        self._max_attempts = max_attempts
        self._max_signature_pages = max_signature_pages
        logger.debug("DeploymentDetector initialized")

    async def __aenter__(self):
        await self._endpoints.__aenter__()
        return self

    async def __aexit__(self, *exc_info):
        await self._endpoints.__aexit__(*exc_info)

    async def detect(self, program_id: str) -> DeploymentInfo | NativeProgram:
        """Native sentinel, cached result, or a fresh history scan.

        Terminal errors (invalid id, not a program account) are raised at once;
        anything else is retried on the next healthy endpoint until the attempt
        budget is spent, then the last error is raised.
        """
        if is_native_program(program_id):
            logger.debug("{} is a native program", program_id)
            return NativeProgram(program_id)

        validate_program_id(program_id)

        cached = self._cache.get(program_id)
        if cached is not None:
            logger.debug("Using cached deployment information")
            return cached.to_info()

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            retry=retry_if_exception(is_transient),
            before_sleep=_log_failed_attempt,
            reraise=True,
        ):
            with attempt:
                info = await self._detect_once(program_id)
        return info

    async def _detect_once(self, program_id: str) -> DeploymentInfo:
        client = await self._endpoints.acquire_next_healthy()

        account = await client.get_parsed_account_info(program_id)
        if account is None:
            raise AccountNotFoundError()
        if not is_loader(account.owner):
            raise NotAProgramAccountError()

        program_data = account.program_data_account
        if program_data:
            logger.debug("Program Data Account: {}", program_data)
        target = program_data or program_id

        info = await self._find_deployment(client, target, program_id)
        info.program_data_account = program_data

        self._cache.put(
            program_id,
            info.signature,
            info.slot,
            info.timestamp,
            is_program_data=program_data is not None,
            program_data_account=program_data,
        )
        return info

    async def _find_deployment(self, client: RpcClient, target: str, program_id: str) -> DeploymentInfo:
        signatures = await client.get_all_signatures_for_address(target, max_pages=self._max_signature_pages)
        logger.debug("Found {} signatures for {}", len(signatures), target)
        if not signatures:
            raise NoTransactionHistoryError()

        async with aclosing(self._iter_transactions(client, order_by_slot(signatures))) as transactions:
            async for sig, tx in transactions:
                if is_deployment_log(program_id, tx.log_lines):
                    return DeploymentInfo(
                        signature=sig.signature,
                        slot=sig.slot if sig.slot is not None else tx.slot,
                        timestamp=sig.block_time or tx.block_time or 0,
                    )

        raise DeploymentNotFoundError()

    async def _iter_transactions(
        self,
        client: RpcClient,
        signatures: list[SignatureInfoSchema],
    ) -> AsyncIterator[tuple[SignatureInfoSchema, ParsedTransactionSchema]]:
        """Fetch transactions one at a time, skipping those without log output."""
        for sig in signatures:
            logger.debug("Checking signature: {}", sig.signature)
            tx = await client.get_parsed_transaction(sig.signature)
            if tx is None or not tx.log_lines:
                continue
            logger.debug("Transaction logs:\n{}", "\n".join(tx.log_lines))
            yield sig, tx
