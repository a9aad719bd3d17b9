# ============================================================================
# NETWORK HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - Raw TCP reachability
# PURPOSE: Open (and immediately close) a TCP connection to a target
# ============================================================================
"""
Network Health Checks

Raw reachability check (priority 50):
- DnsPortCheck: TCP connect to host:port under a fixed 5000 ms budget.

Target resolution (first present wins):
    host: explicit host -> DNS_CHECK_HOST -> google.com
    port: explicit port -> DNS_CHECK_PORT -> 80

Outcomes are disjoint. The connect attempt and the timer race inside
asyncio.wait_for; when the timer wins the connect coroutine is cancelled
and its socket released, so exactly one result is produced.
"""

import asyncio
import errno
import logging
import socket
from typing import Optional, Tuple

from core.config import HealthSettings, get_defaults
from health.core import (
    HealthProbe,
    ProbeResult,
)
from health.registry import register_check

logger = logging.getLogger(__name__)


@register_check(category="network", timeout_seconds=10.0)
class DnsPortCheck(HealthProbe):
    """
    TCP reachability check.

    Accepts an explicit target at construction time. Eligible when any of
    the explicit host/port or the ambient DNS_CHECK_HOST/DNS_CHECK_PORT is
    present; whatever is still missing falls back to the defaults.
    """

    name = "dns_port"
    service = "DNS/Port Connectivity"
    required_settings = ("dns_check_host", "dns_check_port")

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        self.host = host
        self.port = port

    def _preconditions_met(self, settings: HealthSettings) -> bool:
        return bool(
            self.host
            or self.port
            or settings.dns_check_host
            or settings.dns_check_port
        )

    def resolve_target(self, settings: HealthSettings) -> Tuple[str, int]:
        defaults = get_defaults().probes
        host = self.host or settings.dns_check_host or defaults.dns_check_host
        port = int(self.port or settings.dns_check_port or defaults.dns_check_port)
        if not 0 < port < 65536:
            raise ValueError(f"port out of range: {port}")
        return host, port

    async def check(self, settings: HealthSettings) -> ProbeResult:
        timeout = get_defaults().timeouts.reachability_timeout
        timeout_ms = int(timeout * 1000)

        try:
            host, port = self.resolve_target(settings)
        except ValueError as e:
            return ProbeResult.error(
                self.service,
                f"Invalid reachability target: {e}",
                accessible=False,
                reachable=False,
                error="EINVAL",
            )

        target = f"{host}:{port}"

        try:
            # all_errors: a host with several addresses fails with one
            # ExceptionGroup instead of an OSError that has no errno
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, all_errors=True),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Reachability check timed out after {timeout_ms}ms: {target}")
            return ProbeResult.error(
                self.service,
                f"Connection timeout to {target}",
                hostname=host,
                port=port,
                timeout=f"{timeout_ms}ms",
                accessible=False,
                reachable=False,
            )
        except ExceptionGroup as group:
            return self._connect_failed(target, host, port, _first_os_error(group))
        except OSError as e:
            return self._connect_failed(target, host, port, e)

        await _close_quietly(writer)

        return ProbeResult.success(
            self.service,
            f"Successfully connected to {target}",
            hostname=host,
            port=port,
            accessible=True,
            reachable=True,
            responseTime="Fast",
        )

    def _connect_failed(self, target: str, host: str, port: int, e: OSError) -> ProbeResult:
        code = _error_code(e)
        logger.warning(f"Reachability check failed for {target}: {code}")
        return ProbeResult.error(
            self.service,
            f"Failed to connect to {target}: {e.strerror or e} ({code})",
            hostname=host,
            port=port,
            accessible=False,
            reachable=False,
            error=code,
        )


async def _close_quietly(writer: asyncio.StreamWriter) -> None:
    writer.close()
    try:
        await writer.wait_closed()
    except OSError as e:
        # Peer reset during close; the connect already succeeded
        logger.debug(f"Error closing reachability socket: {e}")


def _first_os_error(group: BaseExceptionGroup) -> OSError:
    """First address's failure; later addresses are fallbacks of the same target."""
    matched = group.subgroup(OSError)
    if matched is None:
        raise group
    first = matched.exceptions[0]
    while isinstance(first, BaseExceptionGroup):
        first = first.exceptions[0]
    return first


def _error_code(e: OSError) -> str:
    """Symbolic code for a connect failure (ECONNREFUSED, EAI_NONAME, ...)."""
    if isinstance(e, socket.gaierror):
        for name in dir(socket):
            if name.startswith("EAI_") and getattr(socket, name) == e.errno:
                return name
        return "EAI_FAIL"
    if e.errno is not None:
        return errno.errorcode.get(e.errno, str(e.errno))
    return "Unknown error"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DnsPortCheck",
]
