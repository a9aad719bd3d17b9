# ============================================================================
# HEALTH CHECK EXECUTOR TESTS
# ============================================================================
# STATUS: Tests - Concurrent execution, fault interception, ordering
# PURPOSE: Verify join-all-settled semantics of the executor
# ============================================================================
"""
Health Check Executor Tests

Covers:
1. Skipped probes never run and never appear in results
2. Declaration order is kept whatever order probes finish in
3. Probes run concurrently (batch time ~ slowest probe, not the sum)
4. A raising probe becomes a generic error result; siblings survive
5. A hanging probe is cut off by its timeout; siblings survive
6. Probes returning None are omitted
7. Each probe runs exactly once per run; runs are deterministic

Run with:
    pytest tests/test_executor.py -v
"""

import asyncio
import time

import pytest

from core.config import HealthSettings
from health.core import HealthStatus, ProbeStatus
from health.executor import HealthCheckExecutor, run_all_health_checks
from health.registry import build_default_registry
from tests.fakes import FakeProbe, make_registry


def _run(executor):
    return asyncio.run(executor.run_all())


# ============================================================================
# GATING
# ============================================================================

class TestGating:
    """Precondition gating inside run_all."""

    def test_unconfigured_probe_is_skipped(self):
        gated = FakeProbe("db", 20, required=("db_host", "db_password"))
        always = FakeProbe("port", 10)
        executor = HealthCheckExecutor(
            settings=HealthSettings(db_host="db"),
            registry=make_registry(always, gated),
        )

        results = _run(executor)

        assert [r.service for r in results] == ["Service port"]
        assert gated.calls == 0

    def test_no_eligible_probes_gives_empty_list(self):
        gated = FakeProbe("s3", 30, required=("s3_bucket_name",))
        executor = HealthCheckExecutor(
            settings=HealthSettings(),
            registry=make_registry(gated),
        )
        assert _run(executor) == []

    def test_runtime_skip_is_omitted(self):
        executor = HealthCheckExecutor(
            settings=HealthSettings(),
            registry=make_registry(
                FakeProbe("a", 10),
                FakeProbe("b", 20, outcome="skip"),
                FakeProbe("c", 30),
            ),
        )
        assert [r.service for r in _run(executor)] == ["Service a", "Service c"]


# ============================================================================
# ORDERING & CONCURRENCY
# ============================================================================

class TestOrderingAndConcurrency:
    """Output order and concurrent execution."""

    def test_declaration_order_independent_of_completion(self):
        # Slowest first, fastest last
        registry = make_registry(
            FakeProbe("first", 10, delay=0.15),
            FakeProbe("second", 20, delay=0.05),
            FakeProbe("third", 30, delay=0.0),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        results = _run(executor)

        assert [r.service for r in results] == [
            "Service first", "Service second", "Service third",
        ]

    def test_priority_not_registration_order(self):
        registry = make_registry(
            FakeProbe("late", 50),
            FakeProbe("early", 10),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)
        assert [r.service for r in _run(executor)] == ["Service early", "Service late"]

    def test_probes_run_concurrently(self):
        registry = make_registry(
            *(FakeProbe(f"p{i}", 10 + i, delay=0.3) for i in range(4))
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        start = time.monotonic()
        results = _run(executor)
        elapsed = time.monotonic() - start

        assert len(results) == 4
        # Sequential would take 1.2s
        assert elapsed < 0.9

    def test_duration_is_recorded(self):
        registry = make_registry(FakeProbe("slow", 10, delay=0.05))
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)
        (result,) = _run(executor)
        assert result.duration_ms >= 40


# ============================================================================
# FAULT ISOLATION
# ============================================================================

class TestFaultIsolation:
    """One bad probe never drops or aborts the others."""

    def test_raising_probe_becomes_error_result(self):
        registry = make_registry(
            FakeProbe("ok1", 10),
            FakeProbe("boom", 20, outcome="raise"),
            FakeProbe("ok2", 30, delay=0.05),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        results = _run(executor)

        assert [r.service for r in results] == ["Service ok1", "Service boom", "Service ok2"]
        boom = results[1]
        assert boom.status == ProbeStatus.ERROR
        assert boom.message == "Health check failed: boom exploded"
        assert results[0].status == results[2].status == ProbeStatus.SUCCESS

    def test_hanging_probe_times_out(self):
        registry = make_registry(
            FakeProbe("ok", 10),
            FakeProbe("stuck", 20, outcome="hang", timeout_seconds=0.2),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        start = time.monotonic()
        results = _run(executor)
        elapsed = time.monotonic() - start

        assert elapsed < 1.0
        assert results[0].status == ProbeStatus.SUCCESS
        assert results[1].status == ProbeStatus.ERROR
        assert results[1].service == "Service stuck"
        assert "timed out" in results[1].message

    def test_error_result_passes_through(self):
        registry = make_registry(FakeProbe("down", 10, outcome="error"))
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)
        (result,) = _run(executor)
        assert result.status == ProbeStatus.ERROR
        assert result.message == "dependency down"
        assert result.details == {"probe": "down"}

    def test_escaped_fault_is_intercepted(self):
        probe = FakeProbe("odd", 10)
        executor = HealthCheckExecutor(
            settings=HealthSettings(),
            registry=make_registry(probe, FakeProbe("fine", 20)),
        )

        async def broken_runner(p):
            if p is probe:
                raise ValueError("runner bug")
            return await HealthCheckExecutor._run_probe(executor, p)

        executor._run_probe = broken_runner
        results = _run(executor)

        assert results[0].service == "Service odd"
        assert results[0].status == ProbeStatus.ERROR
        assert results[1].status == ProbeStatus.SUCCESS


# ============================================================================
# REPORTS
# ============================================================================

class TestReports:
    """run_report, run_single and determinism."""

    def test_each_probe_runs_once(self):
        probes = [FakeProbe("a", 10), FakeProbe("b", 20, outcome="error")]
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=make_registry(*probes))
        asyncio.run(executor.run_report())
        assert [p.calls for p in probes] == [1, 1]

    def test_repeat_runs_are_deterministic(self):
        registry = make_registry(
            FakeProbe("a", 10, delay=0.02),
            FakeProbe("b", 20, outcome="error"),
            FakeProbe("c", 30, outcome="raise"),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        first = asyncio.run(executor.run_report())
        second = asyncio.run(executor.run_report())

        assert first.status == second.status == HealthStatus.UNHEALTHY
        assert first.summary == second.summary
        assert [c.service for c in first.checks] == [c.service for c in second.checks]

    def test_run_single(self):
        registry = make_registry(
            FakeProbe("a", 10),
            FakeProbe("gated", 20, required=("s3_bucket_name",)),
        )
        executor = HealthCheckExecutor(settings=HealthSettings(), registry=registry)

        assert asyncio.run(executor.run_single("a")).status == ProbeStatus.SUCCESS
        assert asyncio.run(executor.run_single("gated")) is None
        assert asyncio.run(executor.run_single("missing")) is None

    def test_port_only_configuration(self, empty_settings):
        """Only PORT set: one check, healthy."""
        report = asyncio.run(
            HealthCheckExecutor(
                settings=empty_settings,
                registry=build_default_registry(),
            ).run_report()
        )

        assert [c.service for c in report.checks] == ["Application Port"]
        assert report.checks[0].status == ProbeStatus.SUCCESS
        assert report.summary.to_dict() == {"total": 1, "passed": 1, "failed": 0}
        assert report.status == HealthStatus.HEALTHY

    def test_module_level_entry_point(self, empty_settings):
        results = asyncio.run(
            run_all_health_checks(settings=empty_settings, registry=build_default_registry())
        )
        assert len(results) == 1
        assert results[0].service == "Application Port"
