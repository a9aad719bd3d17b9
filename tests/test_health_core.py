# ============================================================================
# HEALTH CORE TESTS
# ============================================================================
# STATUS: Tests - Data model, settings, precondition gate, aggregator
# PURPOSE: Verify result types, all-or-nothing gating and report invariants
# ============================================================================
"""
Health Core Tests

Covers:
1. HealthSettings loading from a mapping
2. Precondition gate (all-or-nothing, always-eligible probes)
3. ProbeResult constructors and serialization
4. Aggregator invariants (total/passed/failed, status)

Run with:
    pytest tests/test_health_core.py -v
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from core.config import HealthSettings
from health.aggregator import aggregate
from health.checks import (
    ApplicationPortCheck,
    DnsPortCheck,
    PostgresCheck,
    S3BucketCheck,
    SesIdentityCheck,
)
from health.core import (
    HealthStatus,
    HealthSummary,
    ProbeResult,
    ProbeStatus,
    format_timestamp,
)


# ============================================================================
# SETTINGS
# ============================================================================

class TestHealthSettings:
    """Tests for HealthSettings.from_env."""

    def test_reads_known_variables(self):
        settings = HealthSettings.from_env({
            "PORT": "8080",
            "DB_HOST": "db",
            "S3_BUCKET_NAME": "assets",
            "DNS_CHECK_PORT": "443",
            "UNRELATED": "x",
        })
        assert settings.port == "8080"
        assert settings.db_host == "db"
        assert settings.s3_bucket_name == "assets"
        assert settings.dns_check_port == "443"
        assert settings.db_password is None

    def test_empty_strings_are_absent(self):
        settings = HealthSettings.from_env({"DB_HOST": "", "SES_FROM_EMAIL": ""})
        assert settings.db_host is None
        assert settings.ses_from_email is None

    def test_is_set_is_all_or_nothing(self):
        settings = HealthSettings(db_host="db", db_name="app")
        assert settings.is_set("db_host", "db_name") is True
        assert settings.is_set("db_host", "db_name", "db_password") is False

    def test_repr_hides_values(self):
        settings = HealthSettings(db_password="hunter2")
        assert "hunter2" not in repr(settings)
        assert "db_password" in repr(settings)

    def test_settings_are_immutable(self):
        settings = HealthSettings()
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.db_host = "db"


# ============================================================================
# PRECONDITION GATE
# ============================================================================

class TestPreconditionGate:
    """Tests for HealthProbe.is_eligible."""

    def test_port_check_always_eligible(self):
        assert ApplicationPortCheck().is_eligible(HealthSettings()) is True

    def test_database_requires_every_field(self, db_settings):
        probe = PostgresCheck()
        assert probe.is_eligible(db_settings) is True

        for missing in ("db_host", "db_name", "db_username", "db_password"):
            partial = dataclasses.replace(db_settings, **{missing: None})
            assert probe.is_eligible(partial) is False, missing

    def test_database_port_is_optional(self, db_settings):
        settings = dataclasses.replace(db_settings, db_port=None)
        assert PostgresCheck().is_eligible(settings) is True

    def test_s3_and_ses_gated_on_their_identifiers(self):
        assert S3BucketCheck().is_eligible(HealthSettings()) is False
        assert S3BucketCheck().is_eligible(HealthSettings(s3_bucket_name="b")) is True
        assert SesIdentityCheck().is_eligible(HealthSettings(aws_region="eu-west-1")) is False
        assert SesIdentityCheck().is_eligible(
            HealthSettings(ses_from_email="noreply@example.com")
        ) is True

    def test_reachability_accepts_call_time_target(self):
        assert DnsPortCheck().is_eligible(HealthSettings()) is False
        assert DnsPortCheck(host="example.com").is_eligible(HealthSettings()) is True
        assert DnsPortCheck(port=443).is_eligible(HealthSettings()) is True

    def test_reachability_accepts_ambient_target(self):
        assert DnsPortCheck().is_eligible(HealthSettings(dns_check_host="h")) is True
        assert DnsPortCheck().is_eligible(HealthSettings(dns_check_port="22")) is True

    def test_gate_never_raises(self):
        class BrokenGate(ApplicationPortCheck):
            def _preconditions_met(self, settings):
                raise RuntimeError("boom")

        assert BrokenGate().is_eligible(HealthSettings()) is False


# ============================================================================
# PROBE RESULT
# ============================================================================

class TestProbeResult:
    """Tests for the ProbeResult value object."""

    def test_success_constructor(self):
        result = ProbeResult.success("AWS S3", "fine", accessible=True)
        assert result.status == ProbeStatus.SUCCESS
        assert result.ok is True
        assert result.details == {"accessible": True}

    def test_from_exception_is_generic_error(self):
        result = ProbeResult.from_exception("AWS SES", RuntimeError("kaput"))
        assert result.status == ProbeStatus.ERROR
        assert result.service == "AWS SES"
        assert result.message == "Health check failed: kaput"
        assert result.details["exception_type"] == "RuntimeError"

    def test_from_exception_without_message(self):
        result = ProbeResult.from_exception("X", TimeoutError())
        assert result.message == "Health check failed: TimeoutError"

    def test_with_duration_returns_copy(self):
        result = ProbeResult.success("X", "ok")
        timed = result.with_duration(12.345)
        assert result.duration_ms == 0.0
        assert timed.duration_ms == 12.345
        assert timed.to_dict()["duration_ms"] == 12.35

    def test_details_are_read_only(self):
        source = {"bucket": "b"}
        result = ProbeResult(service="X", status=ProbeStatus.SUCCESS, message="ok", details=source)

        with pytest.raises(TypeError):
            result.details["bucket"] = "other"
        source["bucket"] = "changed"
        result.to_dict()["details"]["bucket"] = "copy"

        assert result.details == {"bucket": "b"}
        assert result.with_duration(1.0).details == {"bucket": "b"}

    def test_to_dict_omits_empty_details(self):
        data = ProbeResult.error("X", "bad").to_dict()
        assert data["status"] == "error"
        assert "details" not in data


# ============================================================================
# AGGREGATOR
# ============================================================================

def _results(statuses):
    return [
        ProbeResult(service=f"s{i}", status=status, message="m")
        for i, status in enumerate(statuses)
    ]


class TestAggregator:
    """Tests for aggregate()."""

    @pytest.mark.parametrize("statuses", [
        [],
        [ProbeStatus.SUCCESS],
        [ProbeStatus.ERROR],
        [ProbeStatus.SUCCESS, ProbeStatus.ERROR, ProbeStatus.SUCCESS],
        [ProbeStatus.ERROR] * 4,
    ])
    def test_summary_invariants(self, statuses):
        report = aggregate(_results(statuses))
        assert report.summary.total == len(report.checks) == len(statuses)
        assert report.summary.passed + report.summary.failed == report.summary.total
        assert (report.status == HealthStatus.UNHEALTHY) == (report.summary.failed > 0)

    def test_all_success_is_healthy(self):
        report = aggregate(_results([ProbeStatus.SUCCESS] * 3))
        assert report.status == HealthStatus.HEALTHY
        assert report.http_status == 200
        assert report.summary == HealthSummary(total=3, passed=3, failed=0)

    def test_any_error_is_unhealthy(self):
        report = aggregate(_results([ProbeStatus.SUCCESS, ProbeStatus.ERROR]))
        assert report.status == HealthStatus.UNHEALTHY
        assert report.http_status == 503

    def test_preserves_order(self):
        results = _results([ProbeStatus.ERROR, ProbeStatus.SUCCESS, ProbeStatus.ERROR])
        report = aggregate(results)
        assert [c.service for c in report.checks] == ["s0", "s1", "s2"]

    def test_report_dict_shape(self):
        ts = datetime(2026, 10, 17, 12, 0, 0, 123456, tzinfo=timezone.utc)
        report = aggregate(_results([ProbeStatus.SUCCESS]), timestamp=ts)
        data = report.to_dict()
        assert set(data) == {"status", "timestamp", "checks", "summary"}
        assert data["timestamp"] == "2026-10-17T12:00:00.123Z"
        assert data["summary"] == {"total": 1, "passed": 1, "failed": 0}

    def test_format_timestamp_naive(self):
        assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05.000Z"
