# ============================================================================
# HEALTH CHECK CORE TYPES
# ============================================================================
# STATUS: Infrastructure - Base classes for health checks
# PURPOSE: Probe plugin interface, result and report types
# ============================================================================
"""
Health Check Core Types

Defines the probe interface and the result types for health checks.

Outcomes:
- success: Dependency reachable and usable
- error: Dependency unreachable, unauthorized, timed out, or the probe faulted

Report status:
- healthy: No check reported an error
- unhealthy: At least one check reported an error

Categories (declaration order by priority):
1. Application (10): Local process self-report
2. Database (20): PostgreSQL
3. Storage (30): S3 bucket
4. Messaging (40): SES sender identity
5. Network (50): Raw TCP reachability
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from core.config import HealthSettings

logger = logging.getLogger(__name__)


class ProbeStatus(str, Enum):
    """Terminal outcome of a single probe."""
    SUCCESS = "success"
    ERROR = "error"


class HealthStatus(str, Enum):
    """Overall report status."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class ProbeCategory(str, Enum):
    """Probe categories with default priorities."""
    APPLICATION = "application"   # Priority 10: Local self-report
    DATABASE = "database"         # Priority 20: PostgreSQL
    STORAGE = "storage"           # Priority 30: Object store
    MESSAGING = "messaging"       # Priority 40: Email service
    NETWORK = "network"           # Priority 50: Raw TCP reachability

    @property
    def default_priority(self) -> int:
        """Get default priority for category."""
        priorities = {
            ProbeCategory.APPLICATION: 10,
            ProbeCategory.DATABASE: 20,
            ProbeCategory.STORAGE: 30,
            ProbeCategory.MESSAGING: 40,
            ProbeCategory.NETWORK: 50,
        }
        return priorities[self]


@dataclass(frozen=True)
class ProbeResult:
    """Result from a single probe. Immutable once constructed."""
    service: str
    status: ProbeStatus
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @classmethod
    def success(cls, service: str, message: str, **details) -> "ProbeResult":
        """Create success result."""
        return cls(service=service, status=ProbeStatus.SUCCESS, message=message, details=details)

    @classmethod
    def error(cls, service: str, message: str, **details) -> "ProbeResult":
        """Create error result."""
        return cls(service=service, status=ProbeStatus.ERROR, message=message, details=details)

    @classmethod
    def from_exception(cls, service: str, e: BaseException) -> "ProbeResult":
        """Create the generic error result for a probe that faulted."""
        return cls(
            service=service,
            status=ProbeStatus.ERROR,
            message=f"Health check failed: {str(e) or type(e).__name__}",
            details={"exception_type": type(e).__name__},
        )

    @property
    def ok(self) -> bool:
        return self.status == ProbeStatus.SUCCESS

    def with_duration(self, duration_ms: float) -> "ProbeResult":
        """Copy of this result with the measured duration attached."""
        return replace(self, duration_ms=duration_ms)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "service": self.service,
            "status": self.status.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        result["duration_ms"] = round(self.duration_ms, 2)
        return result


@dataclass(frozen=True)
class HealthSummary:
    """Pass/fail counts. Only ever derived from a result list."""
    total: int
    passed: int
    failed: int

    @classmethod
    def from_results(cls, results: Iterable[ProbeResult]) -> "HealthSummary":
        results = list(results)
        passed = sum(1 for r in results if r.status == ProbeStatus.SUCCESS)
        failed = sum(1 for r in results if r.status == ProbeStatus.ERROR)
        return cls(total=len(results), passed=passed, failed=failed)

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "passed": self.passed, "failed": self.failed}


@dataclass(frozen=True)
class HealthReport:
    """Aggregated, user-facing report for one invocation."""
    status: HealthStatus
    timestamp: datetime
    checks: Tuple[ProbeResult, ...]
    summary: HealthSummary

    @property
    def http_status(self) -> int:
        """Map report status to HTTP status code."""
        return {
            HealthStatus.HEALTHY: 200,
            HealthStatus.UNHEALTHY: 503,  # Service Unavailable
        }[self.status]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "status": self.status.value,
            "timestamp": format_timestamp(self.timestamp),
            "checks": [check.to_dict() for check in self.checks],
            "summary": self.summary.to_dict(),
        }


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return ts.isoformat(timespec="milliseconds") + "Z"


class HealthProbe(ABC):
    """
    Base class for probe plugins.

    Subclass and implement check() to create a probe. Use the
    @register_check decorator or manual registration.

    Attributes:
        name: Unique short key for the probe
        service: Display name reported in results
        category: Probe category (determines priority)
        priority: Declaration order (lower is reported first)
        timeout_seconds: Executor guard budget for one check() call
            (None uses the configured runner_timeout)
        required_settings: HealthSettings fields that must all be present

    Example:
        @register_check(category="database")
        class PostgresCheck(HealthProbe):
            name = "postgres"
            service = "PostgreSQL Database"
            required_settings = ("db_host", "db_name")

            async def check(self, settings) -> ProbeResult:
                ...
    """

    name: str = "unnamed"
    service: str = "Unnamed Service"
    category: ProbeCategory = ProbeCategory.APPLICATION
    priority: int = 50
    timeout_seconds: Optional[float] = None
    required_settings: Tuple[str, ...] = ()

    def is_eligible(self, settings: HealthSettings) -> bool:
        """
        Precondition gate.

        True when every required setting is present. A probe with no
        required settings is always eligible. Never raises: a fault while
        evaluating the gate is logged and the probe is treated as skipped.
        """
        try:
            return self._preconditions_met(settings)
        except Exception as e:
            logger.error(f"Precondition check for {self.name} failed: {e}")
            return False

    def _preconditions_met(self, settings: HealthSettings) -> bool:
        if not self.required_settings:
            return True
        return settings.is_set(*self.required_settings)

    @abstractmethod
    async def check(self, settings: HealthSettings) -> Optional[ProbeResult]:
        """
        Execute the probe.

        Must not let dependency faults escape: they become error results.
        Returning None means "skip" and the probe is left out of the report.
        """
        pass

    def __init_subclass__(cls, **kwargs):
        """Set default priority from category if not specified."""
        super().__init_subclass__(**kwargs)
        if cls.priority == 50 and hasattr(cls, "category"):
            cls.priority = cls.category.default_priority

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} priority={self.priority}>"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeStatus",
    "HealthStatus",
    "ProbeCategory",
    "ProbeResult",
    "HealthSummary",
    "HealthReport",
    "HealthProbe",
    "utcnow",
    "format_timestamp",
]
