# ============================================================================
# HEALTH CHECK MODULE
# ============================================================================
# STATUS: Infrastructure - Dependency health aggregation
# PURPOSE: Probe external dependencies and report one health verdict
# ============================================================================
"""
Health Check Module

Plugin-based dependency health aggregator:
- /livez: Process alive (instant)
- /api/health: Dependency report (all configured probes, concurrent)

Architecture:
- HealthProbe: Base class for probes, with the precondition gate
- ProbeRegistry: Probe registration in declaration order
- HealthCheckExecutor: Concurrent execution with per-probe timeouts
- aggregate(): Result list -> HealthReport

Usage:
    from health import HealthCheckExecutor, HealthSettings

    executor = HealthCheckExecutor(settings=HealthSettings.from_env())
    report = await executor.run_report()
"""

from core.config import HealthSettings
from health.core import (
    ProbeStatus,
    HealthStatus,
    ProbeCategory,
    ProbeResult,
    HealthSummary,
    HealthReport,
    HealthProbe,
)
from health.registry import (
    ProbeRegistry,
    register_check,
    get_registry,
    build_default_registry,
    get_default_registry,
)
from health.aggregator import aggregate
from health.executor import HealthCheckExecutor, run_all_health_checks
from health.router import health_router

__all__ = [
    # Core types
    "HealthSettings",
    "ProbeStatus",
    "HealthStatus",
    "ProbeCategory",
    "ProbeResult",
    "HealthSummary",
    "HealthReport",
    "HealthProbe",
    # Registry
    "ProbeRegistry",
    "register_check",
    "get_registry",
    "build_default_registry",
    "get_default_registry",
    # Execution
    "aggregate",
    "HealthCheckExecutor",
    "run_all_health_checks",
    # Router
    "health_router",
]
