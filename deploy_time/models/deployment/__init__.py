"""Deployment domain - cached records, results and program constants."""

from deploy_time.models.deployment.entities import (
    CacheStats,
    DeploymentInfo,
    DeploymentRecord,
    NativeProgram,
)
from deploy_time.models.deployment.programs import (
    DEPLOYMENT_MARKERS,
    LOADER_PROGRAMS,
    NATIVE_PROGRAMS,
    is_deployment_log,
    is_loader,
    is_native_program,
    validate_program_id,
)

__all__ = [
    "DeploymentRecord",
    "DeploymentInfo",
    "NativeProgram",
    "CacheStats",
    "NATIVE_PROGRAMS",
    "LOADER_PROGRAMS",
    "DEPLOYMENT_MARKERS",
    "is_native_program",
    "is_loader",
    "is_deployment_log",
    "validate_program_id",
]
