# ============================================================================
# HEALTH REPORT AGGREGATOR
# ============================================================================
# STATUS: Infrastructure - Result reduction
# PURPOSE: Reduce probe results to one report
# ============================================================================
"""
Health Report Aggregator

The only place overall status and summary counts are derived. The HTTP
layer always routes through aggregate() rather than recounting.

Rules:
- status is unhealthy iff any result is an error
- summary.total == len(checks), passed + failed == total
- an empty result list is healthy
"""

from datetime import datetime
from typing import Iterable, Optional

from health.core import (
    HealthReport,
    HealthStatus,
    HealthSummary,
    ProbeResult,
    utcnow,
)


def aggregate(
    results: Iterable[ProbeResult],
    timestamp: Optional[datetime] = None,
) -> HealthReport:
    """Build the report for an ordered list of probe results."""
    checks = tuple(results)
    summary = HealthSummary.from_results(checks)
    status = HealthStatus.UNHEALTHY if summary.failed > 0 else HealthStatus.HEALTHY

    return HealthReport(
        status=status,
        timestamp=timestamp or utcnow(),
        checks=checks,
        summary=summary,
    )


__all__ = [
    "aggregate",
]
