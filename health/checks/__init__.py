# ============================================================================
# HEALTH CHECK PLUGINS
# ============================================================================
# STATUS: Infrastructure - Probe implementations
# PURPOSE: The dependency probes reported by /api/health
# ============================================================================
"""
Health Check Plugins

Concrete probes, in declaration (report) order:

Application (priority 10):
- port: Listen port and environment self-report (always present)

Database (priority 20):
- postgres: PostgreSQL connect + SELECT NOW()

Storage (priority 30):
- s3: S3 HeadBucket on S3_BUCKET_NAME

Messaging (priority 40):
- ses: SES verification status of SES_FROM_EMAIL

Network (priority 50):
- dns_port: Raw TCP connect to DNS_CHECK_HOST:DNS_CHECK_PORT

Import this module to register all checks:
    import health.checks
"""

# Import all check modules to trigger registration
from health.checks.application import ApplicationPortCheck
from health.checks.database import PostgresCheck
from health.checks.storage import S3BucketCheck
from health.checks.messaging import SesIdentityCheck
from health.checks.network import DnsPortCheck

DEFAULT_PROBES = (
    ApplicationPortCheck,
    PostgresCheck,
    S3BucketCheck,
    SesIdentityCheck,
    DnsPortCheck,
)

__all__ = [
    "ApplicationPortCheck",
    "PostgresCheck",
    "S3BucketCheck",
    "SesIdentityCheck",
    "DnsPortCheck",
    "DEFAULT_PROBES",
]
