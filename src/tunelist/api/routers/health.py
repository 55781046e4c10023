"""Health check endpoints for Docker/Kubernetes probes."""

# Hey future me - this router is for container health checks!
# - /health/live  → Liveness probe (process is up, no dependency checks)
# - /health/ready → Readiness probe (database answers SELECT 1), 503 otherwise
# Docker HEALTHCHECK: curl -f http://localhost:8000/health/live || exit 1

from datetime import UTC, datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

router = APIRouter()


class LivenessStatus(BaseModel):
    """Simple liveness probe response."""

    status: str = Field(description="alive")
    timestamp: str = Field(description="ISO timestamp")


class ReadinessStatus(BaseModel):
    """Readiness probe response."""

    status: str = Field(description="ready or not_ready")
    timestamp: str = Field(description="ISO timestamp")
    database: bool = Field(description="Database connection OK")


@router.get("/live", response_model=LivenessStatus)
async def liveness_probe() -> LivenessStatus:
    """Liveness probe.

    Returns 200 as long as the application process is running.
    """
    return LivenessStatus(status="alive", timestamp=datetime.now(UTC).isoformat())


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_probe(request: Request) -> JSONResponse:
    """Readiness probe.

    Returns 200 if the database is reachable, 503 otherwise.
    """
    db = getattr(request.app.state, "db", None)
    database_ok = db is not None and await db.ping()

    body = ReadinessStatus(
        status="ready" if database_ok else "not_ready",
        timestamp=datetime.now(UTC).isoformat(),
        database=database_ok,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK
        if database_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
