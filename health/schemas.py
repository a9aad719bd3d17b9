# ============================================================================
# HEALTH API SCHEMAS
# ============================================================================
# STATUS: Infrastructure - Request/Response schemas
# PURPOSE: Pydantic models for the /api/health endpoints
# ============================================================================
"""
Health API Schemas

Request and response models for the health endpoints. Response models
document the JSON shapes in OpenAPI; bodies are produced by
HealthReport.to_dict() so there is one serialization path.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from health.core import HealthStatus, ProbeStatus


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class HealthCheckRequest(BaseModel):
    """POST /api/health body."""
    service: Optional[str] = Field(
        None,
        description="Run a single named check (not supported yet)",
    )

    model_config = ConfigDict(extra="ignore")


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class ProbeResultModel(BaseModel):
    """One dependency check outcome."""
    service: str
    status: ProbeStatus
    message: str
    details: Optional[Dict[str, Any]] = None
    duration_ms: float = Field(0.0, ge=0)


class HealthSummaryModel(BaseModel):
    """Derived pass/fail counts."""
    total: int = Field(..., ge=0)
    passed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)


class HealthReportModel(BaseModel):
    """GET /api/health body."""
    status: HealthStatus
    timestamp: str
    checks: List[ProbeResultModel]
    summary: HealthSummaryModel

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "timestamp": "2026-10-17T12:00:00.000Z",
                    "checks": [
                        {
                            "service": "Application Port",
                            "status": "success",
                            "message": "Application is running on port 3000",
                            "details": {"running": True, "port": "3000", "environment": "development"},
                            "duration_ms": 0.05,
                        }
                    ],
                    "summary": {"total": 1, "passed": 1, "failed": 0},
                }
            ]
        }
    }


class HealthErrorModel(BaseModel):
    """Top-level failure, distinct from a per-check error."""
    status: str = "error"
    message: str
    error: str
    timestamp: str


class NotImplementedModel(BaseModel):
    """Single-service POST, not supported."""
    message: str
    requestedService: str


__all__ = [
    "HealthCheckRequest",
    "ProbeResultModel",
    "HealthSummaryModel",
    "HealthReportModel",
    "HealthErrorModel",
    "NotImplementedModel",
]
