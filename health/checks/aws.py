# ============================================================================
# AWS CLIENT HELPERS
# ============================================================================
# STATUS: Infrastructure - Shared boto3 plumbing for AWS probes
# PURPOSE: Bounded boto3 clients and error code extraction
# ============================================================================
"""
AWS Client Helpers

boto3 is synchronous. AWS probes build their client and make their one
call inside asyncio.to_thread so the event loop keeps serving the other
probes. Clients get tight connect/read timeouts and a single attempt;
credentials come from the standard boto3 chain (env, profile, role).
"""

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from core.config import HealthSettings, get_defaults


def resolve_region(settings: HealthSettings, override: Optional[str]) -> str:
    """Service-specific region, then AWS_REGION, then the default region."""
    return override or settings.aws_region or get_defaults().probes.aws_region


def make_client(service_name: str, region: str) -> Any:
    """Create a boto3 client bounded by the probe time budgets."""
    timeouts = get_defaults().timeouts
    config = Config(
        region_name=region,
        connect_timeout=timeouts.aws_connect_timeout,
        read_timeout=timeouts.aws_read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )
    return boto3.client(service_name, config=config)


def error_code(e: Exception) -> Optional[str]:
    """AWS error code for a ClientError (e.g. "403", "AccessDenied")."""
    if isinstance(e, ClientError):
        return e.response.get("Error", {}).get("Code")
    return None


__all__ = [
    "resolve_region",
    "make_client",
    "error_code",
]
