# ============================================================================
# DATABASE HEALTH CHECKS
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connectivity
# PURPOSE: Open a connection, run a round-trip query, close
# ============================================================================
"""
Database Health Checks

PostgreSQL connectivity check (priority 20):
- PostgresCheck: Connect with the configured credentials and fetch the
  server time.

TLS: connections use sslmode=require. The channel is encrypted but the
server certificate is not validated, which is what internal and
self-signed deployments need. This is an accepted operational risk;
switch to verify-full when a CA bundle is available.
"""

import logging

import psycopg
from psycopg.rows import dict_row

from core.config import HealthSettings, get_defaults
from health.core import (
    HealthProbe,
    ProbeResult,
)
from health.registry import register_check

logger = logging.getLogger(__name__)

ROUND_TRIP_QUERY = "SELECT NOW() AS current_time"


@register_check(category="database")
class PostgresCheck(HealthProbe):
    """
    PostgreSQL connectivity health check.

    Skipped unless host, database name, username and password are all
    configured. The port falls back to 5432.
    """

    name = "postgres"
    service = "PostgreSQL Database"
    required_settings = ("db_host", "db_name", "db_username", "db_password")

    async def check(self, settings: HealthSettings) -> ProbeResult:
        defaults = get_defaults()

        try:
            port = int(settings.db_port or defaults.probes.db_port)

            # Connection context closes the connection on every exit path
            async with await psycopg.AsyncConnection.connect(
                host=settings.db_host,
                port=port,
                dbname=settings.db_name,
                user=settings.db_username,
                password=settings.db_password,
                sslmode="require",
                connect_timeout=defaults.timeouts.database_connect_timeout,
                row_factory=dict_row,
            ) as conn:
                cursor = await conn.execute(ROUND_TRIP_QUERY)
                row = await cursor.fetchone()

            current_time = row["current_time"] if row else None
            if hasattr(current_time, "isoformat"):
                current_time = current_time.isoformat()

            return ProbeResult.success(
                self.service,
                "Successfully connected to database",
                connected=True,
                responseTime="Fast",
                currentTime=current_time,
            )

        except Exception as e:
            logger.warning(f"PostgreSQL check failed: {type(e).__name__}")
            return ProbeResult.error(
                self.service,
                f"Database connection failed: {_describe(e)}",
                connected=False,
                issue="Connection refused or authentication failed",
            )


def _describe(e: Exception) -> str:
    """First line of the driver message; libpq repeats context below it."""
    text = str(e).strip()
    if not text:
        return type(e).__name__
    return text.splitlines()[0]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgresCheck",
]
