"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 until storage is initialized (readiness)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from docfactory.config import get_settings
from docfactory.infrastructure import storage

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
def health_check():
    """Basic liveness probe."""
    return {"status": "healthy", "service": get_settings().app_name}


@router.get("/ready")
def readiness_check():
    if storage.repository is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "storage_uninitialized"},
        )
    return {"status": "ready", "checks": {"storage": "in-memory"}}
