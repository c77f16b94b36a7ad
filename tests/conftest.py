"""Shared fixtures."""

import pytest

from deploy_time.repositories import DeploymentCacheRepository
from tests.fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / ".cache"


@pytest.fixture
def cache(cache_dir, clock) -> DeploymentCacheRepository:
    return DeploymentCacheRepository(cache_dir=cache_dir, clock=clock)
