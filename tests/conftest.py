# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# STATUS: Tests - Common fixtures
# PURPOSE: Isolated config state and ready-made settings
# ============================================================================

import pytest

from core.config import HealthSettings, reset_defaults, reset_settings


@pytest.fixture(autouse=True)
def clean_config():
    """Reset cached defaults and settings before and after each test."""
    reset_defaults()
    reset_settings()
    yield
    reset_defaults()
    reset_settings()


@pytest.fixture
def empty_settings() -> HealthSettings:
    """Only the listen port configured."""
    return HealthSettings(port="3000")


@pytest.fixture
def db_settings() -> HealthSettings:
    """Complete database configuration."""
    return HealthSettings(
        port="3000",
        db_host="db.internal",
        db_port="5432",
        db_name="app",
        db_username="health",
        db_password="s3cret",
    )
