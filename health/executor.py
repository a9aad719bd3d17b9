# ============================================================================
# HEALTH CHECK EXECUTOR
# ============================================================================
# STATUS: Infrastructure - Concurrent probe execution
# PURPOSE: Gate, run and collect every probe with per-probe timeouts
# ============================================================================
"""
Health Check Executor

Executes probes with:
- Precondition gating (unconfigured probes are skipped, never failed)
- Concurrent execution of every eligible probe on the event loop
- Per-probe timeouts
- Join-all-settled collection: one failing or slow probe never drops
  or aborts the others
- Output in declaration order, whatever order probes finish in

Execution Strategy:
1. Evaluate the gate for every declared probe, in order
2. Start all eligible probes at once (asyncio.gather)
3. Wait for every probe to settle (return_exceptions=True)
4. Map outcomes: result -> kept, None -> skipped, fault -> error result
5. Reduce to a HealthReport via the aggregator

There are no retries: each probe is attempted once per run.
"""

import asyncio
import logging
import time
from typing import List, Optional

from core.config import HealthSettings, get_defaults, get_settings
from core.logging import get_logger, log_checkpoint, log_context, ComponentType
from health.aggregator import aggregate
from health.core import (
    HealthProbe,
    HealthReport,
    ProbeResult,
    ProbeStatus,
)
from health.registry import ProbeRegistry, get_registry

logger = get_logger(__name__, ComponentType.EXECUTOR)


class HealthCheckExecutor:
    """
    Runs the registered probes against one settings value.

    The executor holds no state between runs; probes share only the
    read-only settings.
    """

    def __init__(
        self,
        settings: Optional[HealthSettings] = None,
        registry: Optional[ProbeRegistry] = None,
    ):
        """
        Initialize executor.

        Args:
            settings: Probe configuration (loaded from environment if None)
            registry: Probe registry (uses global if None)
        """
        self.settings = settings if settings is not None else get_settings()
        self.registry = registry if registry is not None else get_registry()

    def eligible_probes(self) -> List[HealthProbe]:
        """Probes whose preconditions are met, in declaration order."""
        eligible = []
        for probe in self.registry.get_probes_in_order():
            if probe.is_eligible(self.settings):
                eligible.append(probe)
            else:
                logger.debug(f"Skipping health check {probe.name}: not configured")
        return eligible

    async def run_all(self) -> List[ProbeResult]:
        """
        Execute every eligible probe concurrently.

        Returns:
            Results in declaration order, skipped probes omitted
        """
        probes = self.eligible_probes()
        log_checkpoint(
            "health_batch_started",
            {"probes": [p.name for p in probes], "declared": len(self.registry)},
        )

        if not probes:
            return []

        outcomes = await asyncio.gather(
            *(self._run_probe(probe) for probe in probes),
            return_exceptions=True,
        )

        results: List[ProbeResult] = []
        for probe, outcome in zip(probes, outcomes):
            if isinstance(outcome, BaseException):
                # Last line of defense: anything that escaped the runner
                logger.error(
                    f"Health check {probe.name} raised {type(outcome).__name__}: {outcome}"
                )
                results.append(ProbeResult.from_exception(probe.service, outcome))
            elif outcome is None:
                logger.debug(f"Health check {probe.name} skipped at run time")
            else:
                results.append(outcome)

        return results

    async def run_report(self) -> HealthReport:
        """Execute all probes and aggregate them into a report."""
        start_time = time.monotonic()
        report = aggregate(await self.run_all())
        total_ms = (time.monotonic() - start_time) * 1000

        log_checkpoint(
            "health_batch_completed",
            {
                "status": report.status.value,
                **report.summary.to_dict(),
                "total_duration_ms": round(total_ms, 2),
            },
        )
        logger.info(
            f"Health report {report.status.value}: "
            f"{report.summary.passed}/{report.summary.total} passed ({total_ms:.1f}ms)"
        )
        return report

    async def run_single(self, name: str) -> Optional[ProbeResult]:
        """Execute one probe by name. None if unknown, unconfigured or skipped."""
        probe = self.registry.get(name)
        if probe is None or not probe.is_eligible(self.settings):
            return None

        return await self._run_probe(probe)

    async def _run_probe(self, probe: HealthProbe) -> Optional[ProbeResult]:
        """Execute a single probe with its timeout, converting faults."""
        budget = probe.timeout_seconds or get_defaults().timeouts.runner_timeout
        start_time = time.monotonic()

        with log_context(check=probe.name, operation="probe"):
            try:
                result = await asyncio.wait_for(probe.check(self.settings), timeout=budget)
            except asyncio.TimeoutError:
                logger.warning(f"Health check {probe.name} timed out after {budget}s")
                result = ProbeResult.error(
                    probe.service,
                    f"Health check timed out after {budget}s",
                    timeout=f"{int(budget * 1000)}ms",
                )
            except Exception as e:
                logger.exception(f"Health check {probe.name} failed: {e}")
                result = ProbeResult.from_exception(probe.service, e)

            if result is None:
                return None

            duration_ms = (time.monotonic() - start_time) * 1000
            result = result.with_duration(duration_ms)

            level = logging.DEBUG if result.status == ProbeStatus.SUCCESS else logging.WARNING
            logger.log(
                level,
                f"Health check {probe.name}: {result.status.value} ({duration_ms:.1f}ms)",
            )
            return result


async def run_all_health_checks(
    settings: Optional[HealthSettings] = None,
    registry: Optional[ProbeRegistry] = None,
) -> List[ProbeResult]:
    """Run every eligible probe once and return the ordered results."""
    return await HealthCheckExecutor(settings=settings, registry=registry).run_all()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HealthCheckExecutor",
    "run_all_health_checks",
]
