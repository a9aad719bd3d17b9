# ============================================================================
# APPLICATION TESTS
# ============================================================================
# STATUS: Tests - FastAPI app wiring
# PURPOSE: Verify lifespan registration and mounted routes
# ============================================================================
"""
Application Tests

Run with:
    pytest tests/test_main.py -v
"""

from fastapi.testclient import TestClient

from core.config import HealthSettings, get_settings
from health.registry import get_registry


def test_lifespan_registers_probes_and_serves_report():
    import main

    main.app.dependency_overrides[get_settings] = lambda: HealthSettings(port="3000")
    try:
        with TestClient(main.app) as client:
            registry = get_registry()
            assert registry.is_initialized
            assert {"port", "postgres", "s3", "ses", "dns_port"} <= {p.name for p in registry.get_all()}

            root = client.get("/").json()
            assert root["health"] == "/api/health"

            response = client.get("/api/health")
            assert response.status_code == 200
            assert [c["service"] for c in response.json()["checks"]] == ["Application Port"]
    finally:
        main.app.dependency_overrides.clear()
