"""Tests for endpoint health state and the endpoint manager."""

import httpx
import pytest

import settings
from deploy_time.errors import ConfigurationError, EndpointsExhaustedError
from deploy_time.models import Endpoint, HealthState
from deploy_time.services import EndpointManager
from solana_client import RpcClient
from tests.fakes import FakeRpcClient

INTERVAL = 5 * 60 * 1000
MAIN = "http://main-endpoint.test"
BACKUP = "http://fallback-endpoint.test"


class TestHealthState:
    def test_unknown_needs_probe(self):
        endpoint = Endpoint(url=MAIN, name="Primary", priority=1)
        assert endpoint.state is HealthState.UNKNOWN
        assert endpoint.needs_probe(now=0, interval_ms=INTERVAL)
        assert not endpoint.is_healthy

    def test_probe_transitions(self):
        endpoint = Endpoint(url=MAIN, name="Primary", priority=1)
        assert endpoint.record_probe(True, now=1000) is HealthState.HEALTHY
        assert endpoint.is_healthy
        assert endpoint.record_probe(False, now=2000) is HealthState.UNHEALTHY
        assert endpoint.last_health_check == 2000

    def test_recent_probe_trusted(self):
        endpoint = Endpoint(url=MAIN, name="Primary", priority=1)
        endpoint.record_probe(False, now=1000)
        assert not endpoint.needs_probe(now=1000 + INTERVAL, interval_ms=INTERVAL)
        assert endpoint.needs_probe(now=1001 + INTERVAL, interval_ms=INTERVAL)


def make_manager(clients: dict[str, FakeRpcClient], backups=(), names=(), clock=None) -> EndpointManager:
    kwargs = {"client_factory": lambda endpoint: clients[endpoint.url]}
    if clock is not None:
        kwargs["clock"] = clock
    return EndpointManager(MAIN, list(backups), list(names), **kwargs)


class TestConstruction:
    def test_missing_primary(self):
        with pytest.raises(ConfigurationError):
            EndpointManager(None)

    def test_blank_primary(self):
        with pytest.raises(ConfigurationError):
            EndpointManager("   ")

    def test_priorities_and_names(self):
        manager = EndpointManager(MAIN, ["http://b1", " ", "http://b3"], ["Helius"])
        endpoints = manager.endpoints
        assert [e.url for e in endpoints] == [MAIN, "http://b1", "http://b3"]
        assert [e.priority for e in endpoints] == [1, 2, 4]
        assert [e.name for e in endpoints] == ["Primary", "Helius", "Backup 3"]

    def test_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "MAIN_RPC_URL", MAIN)
        monkeypatch.setattr(settings, "BACKUP_RPC_URLS", ["http://b1"])
        monkeypatch.setattr(settings, "BACKUP_RPC_NAMES", [])
        monkeypatch.setattr(settings, "FALLBACK_RPC_URL", BACKUP)

        manager = EndpointManager.from_settings()

        assert [e.url for e in manager.endpoints] == [MAIN, "http://b1", BACKUP]
        assert [e.name for e in manager.endpoints] == ["Primary", "Backup 1", "Fallback"]

    def test_from_settings_requires_primary(self, monkeypatch):
        monkeypatch.setattr(settings, "MAIN_RPC_URL", None)
        with pytest.raises(ConfigurationError):
            EndpointManager.from_settings()


class TestAcquireNextHealthy:
    @pytest.mark.asyncio
    async def test_main_when_healthy(self):
        clients = {MAIN: FakeRpcClient(MAIN), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP])

        client = await manager.acquire_next_healthy()

        assert client.url == MAIN
        assert clients[MAIN].count("get_slot") == 1
        assert clients[BACKUP].count("get_slot") == 0

    @pytest.mark.asyncio
    async def test_falls_back_when_main_fails(self):
        clients = {MAIN: FakeRpcClient(MAIN, slot=ConnectionError("down")), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP])

        client = await manager.acquire_next_healthy()

        assert client.url == BACKUP
        assert clients[MAIN].count("get_slot") == 1
        assert clients[BACKUP].count("get_slot") == 1

    @pytest.mark.asyncio
    async def test_rotates_between_healthy(self, clock):
        clients = {MAIN: FakeRpcClient(MAIN), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP], clock=clock)

        first = await manager.acquire_next_healthy()
        second = await manager.acquire_next_healthy()
        third = await manager.acquire_next_healthy()

        assert [first.url, second.url, third.url] == [MAIN, BACKUP, MAIN]

    @pytest.mark.asyncio
    async def test_all_unhealthy(self):
        clients = {
            MAIN: FakeRpcClient(MAIN, slot=ConnectionError("main down")),
            BACKUP: FakeRpcClient(BACKUP, slot=ConnectionError("backup down")),
        }
        manager = make_manager(clients, [BACKUP])

        with pytest.raises(EndpointsExhaustedError, match="No healthy RPC endpoints available"):
            await manager.acquire_next_healthy()

        assert clients[MAIN].count("get_slot") == 1
        assert clients[BACKUP].count("get_slot") == 1

    @pytest.mark.asyncio
    async def test_only_primary_configured(self):
        clients = {MAIN: FakeRpcClient(MAIN, slot=ConnectionError("down"))}
        manager = make_manager(clients)

        with pytest.raises(EndpointsExhaustedError):
            await manager.acquire_next_healthy()
        assert clients[MAIN].count("get_slot") == 1


class TestAcquirePrimaryHealthy:
    @pytest.mark.asyncio
    async def test_always_prefers_primary(self, clock):
        clients = {MAIN: FakeRpcClient(MAIN), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP], clock=clock)

        first = await manager.acquire_primary_healthy()
        second = await manager.acquire_primary_healthy()

        assert first.url == second.url == MAIN
        assert clients[BACKUP].count("get_slot") == 0

    @pytest.mark.asyncio
    async def test_all_unhealthy(self, clock):
        clients = {
            MAIN: FakeRpcClient(MAIN, slot=0),
            BACKUP: FakeRpcClient(BACKUP, slot=-5),
        }
        manager = make_manager(clients, [BACKUP], clock=clock)

        with pytest.raises(EndpointsExhaustedError):
            await manager.acquire_primary_healthy()

        assert clients[MAIN].count("get_slot") == 1
        assert clients[BACKUP].count("get_slot") == 1


class TestHealthCheckInterval:
    @pytest.mark.asyncio
    async def test_health_cached_within_interval(self, clock):
        clients = {MAIN: FakeRpcClient(MAIN), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP], clock=clock)

        await manager.acquire_primary_healthy()
        clock.advance(INTERVAL)
        await manager.acquire_primary_healthy()

        assert clients[MAIN].count("get_slot") == 1

    @pytest.mark.asyncio
    async def test_reprobe_after_interval(self, clock):
        main = FakeRpcClient(MAIN, slot=ConnectionError("down"))
        clients = {MAIN: main, BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP], clock=clock)

        assert (await manager.acquire_primary_healthy()).url == BACKUP

        main.slot = 500
        clock.advance(INTERVAL - 1)
        assert (await manager.acquire_primary_healthy()).url == BACKUP

        clock.advance(2)
        assert (await manager.acquire_primary_healthy()).url == MAIN
        assert main.count("get_slot") == 2

    @pytest.mark.asyncio
    async def test_non_integer_slot_unhealthy(self, clock):
        clients = {MAIN: FakeRpcClient(MAIN, slot="100"), BACKUP: FakeRpcClient(BACKUP)}
        manager = make_manager(clients, [BACKUP], clock=clock)

        assert (await manager.acquire_primary_healthy()).url == BACKUP
        assert manager.endpoints[0].state is HealthState.UNHEALTHY


class TestDefaultClient:
    @pytest.mark.asyncio
    async def test_shared_http_client(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": 42})

        manager = EndpointManager(MAIN)
        async with manager:
            await manager._http.aclose()
            manager._http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            client = await manager.acquire_next_healthy()

        assert isinstance(client, RpcClient)
        assert client.url == MAIN
        assert manager._http is None

    @pytest.mark.asyncio
    async def test_requires_open_manager(self):
        manager = EndpointManager(MAIN, [BACKUP])

        with pytest.raises(RuntimeError, match="not open"):
            await manager.acquire_next_healthy()
        with pytest.raises(RuntimeError, match="not open"):
            await manager.acquire_primary_healthy()

        assert all(e.state is HealthState.UNKNOWN for e in manager.endpoints)
        assert all(e.last_health_check == 0 for e in manager.endpoints)

    @pytest.mark.asyncio
    async def test_injected_factory_needs_no_open(self, clock):
        clients = {MAIN: FakeRpcClient(MAIN)}
        manager = make_manager(clients, clock=clock)

        assert (await manager.acquire_next_healthy()).url == MAIN
