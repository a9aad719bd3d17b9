# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# ============================================================================
"""
Configuration Module

Provides probe settings and defaults for the health aggregator.
"""

from core.config.defaults import (
    ProbeDefaults,
    TimeoutDefaults,
    get_defaults,
    reset_defaults,
)
from core.config.settings import (
    HealthSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ProbeDefaults",
    "TimeoutDefaults",
    "get_defaults",
    "reset_defaults",
    "HealthSettings",
    "get_settings",
    "reset_settings",
]
