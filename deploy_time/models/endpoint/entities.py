"""RPC endpoint entities - configuration plus probe-driven health state."""

from dataclasses import dataclass
from enum import StrEnum

from deploy_time.models.common import BaseEntity


class HealthState(StrEnum):
    UNKNOWN = "UNKNOWN"
    HEALTHY = "HEALTHY"
    UNHEALTHY = "UNHEALTHY"


@dataclass
class Endpoint(BaseEntity):
    """Remote RPC target.

    ``url``, ``name`` and ``priority`` are fixed at construction. ``state`` and
    ``last_health_check`` change only through ``record_probe``:

        UNKNOWN --probe ok--> HEALTHY <--probe ok/failed--> UNHEALTHY

    A new probe is due when the state is UNKNOWN or the last probe is older
    than the check interval.
    """

    url: str
    name: str
    priority: int
    state: HealthState = HealthState.UNKNOWN
    last_health_check: int = 0

    @property
    def is_healthy(self) -> bool:
        return self.state is HealthState.HEALTHY

    def needs_probe(self, now: int, interval_ms: int) -> bool:
        if self.state is HealthState.UNKNOWN:
            return True
        return now - self.last_health_check > interval_ms

    def record_probe(self, healthy: bool, now: int) -> HealthState:
        self.state = HealthState.HEALTHY if healthy else HealthState.UNHEALTHY
        self.last_health_check = now
        return self.state
