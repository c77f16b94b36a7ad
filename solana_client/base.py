"""Base JSON-RPC client with retry logic."""

from typing import Any

import httpx
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

# Default settings
RPC_TIMEOUT = 30


class RpcError(Exception):
    """JSON-RPC error payload returned by the node."""

    def __init__(self, message: str = "RPC error", code: int | None = None):
        self.message = message
        self.code = code
        super().__init__(self.message)


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors, 429 and 5xx responses)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    if isinstance(exc, RpcError):
        return exc.code == 429
    return isinstance(exc, httpx.HTTPStatusError) and (
        exc.response.status_code == 429 or exc.response.status_code >= 500
    )


class BaseClient:
    """Base async JSON-RPC client bound to a single endpoint URL.

    An ``httpx.AsyncClient`` may be shared between several clients; when none is
    given, one is opened on ``__aenter__`` and closed on ``__aexit__``.
    """

    def __init__(self, url: str, http: httpx.AsyncClient | None = None, timeout: int = RPC_TIMEOUT):
        self.url = url
        self._client = http
        self._owns_client = http is None
        self._timeout = timeout
        self._request_count = 0

    @property
    def request_count(self) -> int:
        return self._request_count

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, *_):
        logger.debug("{}: {} requests to {}", self.__class__.__name__, self._request_count, self.url)
        if self._owns_client and self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception(_is_retryable_error),
        reraise=True,
    )
    async def _call(self, method: str, params: list | None = None) -> Any:
        """POST a JSON-RPC request with retry logic, return its ``result``."""
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} is not open; use 'async with'")

        self._request_count += 1
        payload = {"jsonrpc": "2.0", "id": self._request_count, "method": method, "params": params or []}
        resp = await self._client.post(self.url, json=payload)
        resp.raise_for_status()
        body = resp.json()

        if "error" in body:
            error = body["error"] or {}
            raise RpcError(error.get("message", "Unknown RPC error"), code=error.get("code"))
        return body.get("result")
