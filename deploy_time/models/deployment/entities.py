"""Deployment domain entities - cached records and detection results."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from deploy_time.models.common import BaseEntity


class DeploymentRecord(BaseModel):
    """Cached deployment of one program, persisted with camelCase keys."""

    program_id: str = Field(alias="programId")
    signature: str = Field(alias="deploymentSignature")
    slot: int = Field(alias="deploymentSlot")
    deployment_timestamp: int = Field(alias="deploymentTimestamp", default=0)
    last_checked: int = Field(alias="lastChecked")
    is_program_data: bool = Field(alias="isProgramData", default=False)
    program_data_account: str | None = Field(alias="programDataAccount", default=None)

    class Config:
        populate_by_name = True
        frozen = True

    def age_ms(self, now: int) -> int:
        return now - self.last_checked

    def is_expired(self, now: int, ttl_ms: int) -> bool:
        """Expired strictly after ``ttl_ms``; a record exactly ``ttl_ms`` old is still valid."""
        return self.age_ms(now) > ttl_ms

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_info(self) -> "DeploymentInfo":
        return DeploymentInfo(
            signature=self.signature,
            slot=self.slot,
            timestamp=self.deployment_timestamp,
            program_data_account=self.program_data_account,
        )


@dataclass
class DeploymentInfo(BaseEntity):
    """Deployment of a user program as returned to callers.

    ``timestamp`` is epoch seconds; ``0`` means the block predates timestamping.
    """

    signature: str
    slot: int
    timestamp: int
    program_data_account: str | None = None

    @property
    def has_timestamp(self) -> bool:
        return self.timestamp > 0


@dataclass
class NativeProgram(BaseEntity):
    """Sentinel result for built-in programs, which have no deployment transaction."""

    program_id: str


@dataclass
class CacheStats(BaseEntity):
    """Snapshot of cache contents."""

    total: int = 0
    valid: int = 0
    expired: int = 0
