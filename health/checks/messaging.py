# ============================================================================
# MESSAGING HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Email service identity verification
# PURPOSE: Ask SES whether the configured sender identity is verified
# ============================================================================
"""
Messaging Health Checks

Email service check (priority 40):
- SesIdentityCheck: GetIdentityVerificationAttributes for the sender.

A reachable SES with an unverified identity is still a success:
accessible=true, emailVerified=false. Only faults produce an error.
"""

import asyncio
import logging
from typing import Optional

from core.config import HealthSettings, get_defaults
from health.core import (
    HealthProbe,
    ProbeResult,
)
from health.registry import register_check
from health.checks.aws import error_code, make_client, resolve_region

logger = logging.getLogger(__name__)


@register_check(category="messaging")
class SesIdentityCheck(HealthProbe):
    """
    SES sender identity check.

    Skipped unless SES_FROM_EMAIL is configured.
    """

    name = "ses"
    service = "AWS SES"
    required_settings = ("ses_from_email",)

    async def check(self, settings: HealthSettings) -> ProbeResult:
        from_email = settings.ses_from_email
        region = resolve_region(settings, settings.ses_region)

        try:
            if not from_email:
                raise ValueError("SES_FROM_EMAIL environment variable is not set")

            status = await asyncio.to_thread(_verification_status, from_email, region)
            verified = status == get_defaults().probes.ses_verified_status

            return ProbeResult.success(
                self.service,
                "Successfully connected to SES",
                accessible=True,
                emailVerified=verified,
                verificationStatus=status,
            )

        except Exception as e:
            logger.warning(f"SES check failed: {e}")
            details = {
                "accessible": False,
                "issue": "Access denied or email not verified",
            }
            code = error_code(e)
            if code:
                details["errorCode"] = code
            return ProbeResult.error(
                self.service,
                f"SES access failed: {e}",
                **details,
            )


def _verification_status(identity: str, region: str) -> Optional[str]:
    """VerificationStatus for one identity, or None if SES does not know it."""
    client = make_client("ses", region)
    response = client.get_identity_verification_attributes(Identities=[identity])
    attributes = response.get("VerificationAttributes", {}).get(identity, {})
    return attributes.get("VerificationStatus")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SesIdentityCheck",
]
