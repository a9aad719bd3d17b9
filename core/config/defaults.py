# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for probe targets and time budgets
# ============================================================================
"""
Configuration Defaults

Fallback values used when a setting is not configured, and the time
budgets every network-bound probe runs under.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ProbeDefaults:
    """Fallback targets for probes whose optional settings are absent."""
    port: str = "3000"
    environment: str = "development"

    db_port: int = 5432

    aws_region: str = "us-east-1"

    dns_check_host: str = "google.com"
    dns_check_port: int = 80

    # Value SES reports for a verified identity
    ses_verified_status: str = "Success"


@dataclass(frozen=True)
class TimeoutDefaults:
    """
    Time budgets for probe execution (seconds).

    Probe-level budgets are enforced inside each probe so the probe can
    report its own timeout message. Runner budgets are the outer guard the
    executor applies; they are always larger than the matching probe budget.
    """
    # Raw TCP reachability (fixed 5000 ms)
    reachability_timeout: float = 5.0

    # Client-side connect/read budgets
    database_connect_timeout: int = 5
    aws_connect_timeout: float = 5.0
    aws_read_timeout: float = 5.0

    # Executor guard for probes that do not set their own
    runner_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "TimeoutDefaults":
        """Create from environment variables."""
        return cls(
            database_connect_timeout=int(os.getenv("HEALTH_DB_CONNECT_TIMEOUT", 5)),
            aws_connect_timeout=float(os.getenv("HEALTH_AWS_CONNECT_TIMEOUT", 5.0)),
            aws_read_timeout=float(os.getenv("HEALTH_AWS_READ_TIMEOUT", 5.0)),
            runner_timeout=float(os.getenv("HEALTH_RUNNER_TIMEOUT", 10.0)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    probes: ProbeDefaults = field(default_factory=ProbeDefaults)
    timeouts: TimeoutDefaults = field(default_factory=TimeoutDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            probes=ProbeDefaults(),
            timeouts=TimeoutDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeDefaults",
    "TimeoutDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
