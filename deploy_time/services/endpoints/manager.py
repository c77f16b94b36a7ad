"""RPC endpoint manager - health-checked endpoint selection."""

from collections.abc import Callable, Sequence

import httpx
from loguru import logger

import settings
from deploy_time.errors import ConfigurationError, EndpointsExhaustedError
from deploy_time.models import Endpoint, now_ms
from solana_client import RpcClient

ClientFactory = Callable[[Endpoint], RpcClient]


class EndpointManager:
    """Hands out RPC clients for healthy endpoints.

    Endpoints are probed lazily with ``getSlot``, at most once per
    ``health_check_interval_ms`` each; between probes the last known state is
    trusted. The round-robin cursor is plain instance state and assumes
    sequential use.
    """

    def __init__(
        self,
        primary_url: str | None,
        backup_urls: Sequence[str] = (),
        backup_names: Sequence[str] = (),
        client_factory: ClientFactory | None = None,
        health_check_interval_ms: int = settings.HEALTH_CHECK_INTERVAL_MS,
        timeout: int = settings.RPC_TIMEOUT,
        clock: Callable[[], int] = now_ms,
    ):
        if not primary_url or not primary_url.strip():
            raise ConfigurationError()

        endpoints = [Endpoint(url=primary_url.strip(), name="Primary", priority=1)]
        for index, url in enumerate(backup_urls):
            if not url or not url.strip():
                continue
            name = backup_names[index].strip() if index < len(backup_names) and backup_names[index] else ""
            endpoints.append(Endpoint(url=url.strip(), name=name or f"Backup {index + 1}", priority=index + 2))

        self._endpoints = sorted(endpoints, key=lambda e: e.priority)
        self._client_factory = client_factory
        self._connect = client_factory or self._default_client
        self._interval_ms = health_check_interval_ms
        self._timeout = timeout
        self._clock = clock
        self._cursor = 0
        self._http: httpx.AsyncClient | None = None
        logger.debug("EndpointManager: {}", ", ".join(f"{e.name}({e.priority})" for e in self._endpoints))

    @classmethod
    def from_settings(cls, **kwargs) -> "EndpointManager":
        """Build from MAIN_RPC_URL, BACKUP_RPC_URLS/NAMES and FALLBACK_RPC_URL."""
        backup_urls = list(settings.BACKUP_RPC_URLS)
        backup_names = list(settings.BACKUP_RPC_NAMES)
        if settings.FALLBACK_RPC_URL and settings.FALLBACK_RPC_URL not in backup_urls:
            backup_names = backup_names[: len(backup_urls)]
            backup_names += [""] * (len(backup_urls) - len(backup_names))
            backup_urls.append(settings.FALLBACK_RPC_URL)
            backup_names.append("Fallback")
        return cls(settings.MAIN_RPC_URL, backup_urls, backup_names, **kwargs)

    @property
    def endpoints(self) -> list[Endpoint]:
        return list(self._endpoints)

    async def __aenter__(self):
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, *_):
        if self._http:
            await self._http.aclose()
            self._http = None

    def _ensure_open(self) -> None:
        if self._client_factory is None and self._http is None:
            raise RuntimeError("EndpointManager is not open; use 'async with'")

    def _default_client(self, endpoint: Endpoint) -> RpcClient:
        self._ensure_open()
        return RpcClient(endpoint.url, http=self._http)

    async def _probe(self, endpoint: Endpoint) -> bool:
        """Ask the endpoint for its current slot; anything but a positive int is unhealthy."""
        try:
            slot = await self._connect(endpoint).get_slot()
        except Exception as e:
            logger.warning("Health check failed for {}: {}", endpoint.name, e)
            return False

        if not isinstance(slot, int) or isinstance(slot, bool) or slot <= 0:
            logger.warning("Invalid response from {}: expected slot number, got {!r}", endpoint.name, slot)
            return False
        return True

    async def _refresh_health(self, endpoint: Endpoint) -> bool:
        """Probe if the last check is stale, then report the current health."""
        now = self._clock()
        if endpoint.needs_probe(now, self._interval_ms):
            healthy = await self._probe(endpoint)
            endpoint.record_probe(healthy, now)
            if not healthy:
                logger.info("{} endpoint is unhealthy, will try next endpoint", endpoint.name)
        return endpoint.is_healthy

    async def acquire_primary_healthy(self) -> RpcClient:
        """First healthy endpoint in priority order."""
        self._ensure_open()
        for endpoint in self._endpoints:
            if await self._refresh_health(endpoint):
                logger.debug("Using RPC endpoint: {}", endpoint.name)
                return self._connect(endpoint)
            logger.debug("Skipping unhealthy endpoint: {}", endpoint.name)

        raise EndpointsExhaustedError()

    async def acquire_next_healthy(self) -> RpcClient:
        """Next healthy endpoint in round-robin order, starting at the cursor."""
        self._ensure_open()
        count = len(self._endpoints)
        for _ in range(count):
            endpoint = self._endpoints[self._cursor]
            self._cursor = (self._cursor + 1) % count
            if await self._refresh_health(endpoint):
                logger.debug("Using RPC endpoint: {}", endpoint.name)
                return self._connect(endpoint)
            logger.debug("Skipping unhealthy endpoint: {}", endpoint.name)

        raise EndpointsExhaustedError()
