# ============================================================================
# APPLICATION HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Local process self-report
# PURPOSE: Report the listen port and environment label
# ============================================================================
"""
Application Health Checks

Local self-report (priority 10):
- ApplicationPortCheck: Always succeeds if the check runs. No I/O.
"""

import logging

from core.config import HealthSettings, get_defaults
from health.core import (
    HealthProbe,
    ProbeResult,
)
from health.registry import register_check

logger = logging.getLogger(__name__)


@register_check(category="application", timeout_seconds=1.0)
class ApplicationPortCheck(HealthProbe):
    """
    Application self-report.

    Has no required settings, so it is always eligible and always
    appears in the report.
    """

    name = "port"
    service = "Application Port"

    async def check(self, settings: HealthSettings) -> ProbeResult:
        defaults = get_defaults().probes
        port = settings.port or defaults.port
        environment = settings.environment or defaults.environment

        return ProbeResult.success(
            self.service,
            f"Application is running on port {port}",
            running=True,
            port=port,
            environment=environment,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ApplicationPortCheck",
]
