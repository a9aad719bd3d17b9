# ============================================================================
# STORAGE HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Object store accessibility
# PURPOSE: Verify the configured S3 bucket exists and is accessible
# ============================================================================
"""
Storage Health Checks

Object store check (priority 30):
- S3BucketCheck: HeadBucket against the configured bucket. No data
  is transferred.
"""

import asyncio
import logging

from core.config import HealthSettings
from health.core import (
    HealthProbe,
    ProbeResult,
)
from health.registry import register_check
from health.checks.aws import error_code, make_client, resolve_region

logger = logging.getLogger(__name__)


@register_check(category="storage")
class S3BucketCheck(HealthProbe):
    """
    S3 bucket accessibility check.

    Skipped unless S3_BUCKET_NAME is configured. Any fault (auth failure,
    bucket not found, network error) is reported as accessible=false.
    """

    name = "s3"
    service = "AWS S3"
    required_settings = ("s3_bucket_name",)

    async def check(self, settings: HealthSettings) -> ProbeResult:
        bucket = settings.s3_bucket_name
        region = resolve_region(settings, settings.s3_region)

        try:
            if not bucket:
                raise ValueError("S3_BUCKET_NAME environment variable is not set")

            await asyncio.to_thread(_head_bucket, bucket, region)

            return ProbeResult.success(
                self.service,
                "Successfully accessed S3 bucket",
                accessible=True,
                bucket=bucket,
                region=region,
                permissions="Valid",
            )

        except Exception as e:
            logger.warning(f"S3 check failed for bucket {bucket}: {e}")
            details = {
                "accessible": False,
                "issue": "Access denied or bucket not found",
            }
            code = error_code(e)
            if code:
                details["errorCode"] = code
            return ProbeResult.error(
                self.service,
                f"S3 access failed: {e}",
                **details,
            )


def _head_bucket(bucket: str, region: str) -> None:
    client = make_client("s3", region)
    client.head_bucket(Bucket=bucket)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "S3BucketCheck",
]
