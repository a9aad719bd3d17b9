# ============================================================================
# HEALTH SETTINGS
# ============================================================================
# STATUS: Core - Ambient configuration for probes
# PURPOSE: One explicit, immutable configuration value passed to the executor
# ============================================================================
"""
Health Settings

Loads probe configuration from environment variables (or any mapping)
into a frozen dataclass. Probes never read the process environment
themselves; they receive a HealthSettings instance from the executor.

Every field is optional. None means "not configured" and is what the
precondition gate tests against. Empty strings are treated as absent.

Environment variables:
    PORT, ENV
    DB_HOST, DB_PORT, DB_NAME, DB_USERNAME, DB_PASSWORD
    AWS_REGION, S3_REGION, S3_BUCKET_NAME
    SES_REGION, SES_FROM_EMAIL
    DNS_CHECK_HOST, DNS_CHECK_PORT
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


# Field name -> environment variable
ENV_VARS = {
    "port": "PORT",
    "environment": "ENV",
    "db_host": "DB_HOST",
    "db_port": "DB_PORT",
    "db_name": "DB_NAME",
    "db_username": "DB_USERNAME",
    "db_password": "DB_PASSWORD",
    "aws_region": "AWS_REGION",
    "s3_region": "S3_REGION",
    "s3_bucket_name": "S3_BUCKET_NAME",
    "ses_region": "SES_REGION",
    "ses_from_email": "SES_FROM_EMAIL",
    "dns_check_host": "DNS_CHECK_HOST",
    "dns_check_port": "DNS_CHECK_PORT",
}


@dataclass(frozen=True)
class HealthSettings:
    """Ambient configuration consumed by the probes."""

    # Application self-report
    port: Optional[str] = None
    environment: Optional[str] = None

    # PostgreSQL
    db_host: Optional[str] = None
    db_port: Optional[str] = None
    db_name: Optional[str] = None
    db_username: Optional[str] = None
    db_password: Optional[str] = None

    # AWS
    aws_region: Optional[str] = None
    s3_region: Optional[str] = None
    s3_bucket_name: Optional[str] = None
    ses_region: Optional[str] = None
    ses_from_email: Optional[str] = None

    # Raw TCP reachability target
    dns_check_host: Optional[str] = None
    dns_check_port: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HealthSettings":
        """Create from environment variables (or an explicit mapping)."""
        if environ is None:
            environ = os.environ

        values = {}
        for name, var in ENV_VARS.items():
            value = environ.get(var)
            values[name] = value if value else None
        return cls(**values)

    def is_set(self, *names: str) -> bool:
        """
        True if every named setting is present.

        All-or-nothing: one missing field makes the whole group absent.
        Unknown names count as missing.
        """
        return all(getattr(self, name, None) for name in names)

    def configured(self) -> list:
        """Names of settings that are present (values are never exposed)."""
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def __repr__(self) -> str:
        # Keep credentials out of logs and tracebacks
        return f"HealthSettings(configured={self.configured()})"


_settings: Optional[HealthSettings] = None


def get_settings() -> HealthSettings:
    """Get process-scope settings (loaded once from the environment)."""
    global _settings
    if _settings is None:
        _settings = HealthSettings.from_env()
        logger.debug(f"Loaded health settings: {_settings!r}")
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_VARS",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
