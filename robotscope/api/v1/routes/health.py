"""Health check endpoints for load balancer and monitoring."""

from fastapi import APIRouter
from pydantic import BaseModel

from robotscope.core.config import get_settings
from robotscope.engines.robots.analyzer import analyze
from robotscope.engines.robots.parser import parse

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    checks: dict[str, str]


@router.get("", response_model=HealthResponse, include_in_schema=False)
async def health_check() -> HealthResponse:
    settings = get_settings()

    checks: dict[str, str] = {}

    try:
        analyze(parse("User-agent: *\nDisallow: /admin"))
        checks["analyzer"] = "healthy"
    except Exception as e:
        checks["analyzer"] = f"unhealthy: {str(e)}"

    overall = "healthy" if all("unhealthy" not in v for v in checks.values()) else "degraded"

    return HealthResponse(
        status=overall,
        version=settings.APP_VERSION,
        checks=checks,
    )


@router.get("/ready", include_in_schema=False)
async def readiness() -> dict:
    """Kubernetes readiness probe."""
    return {"ready": True}


@router.get("/live", include_in_schema=False)
async def liveness() -> dict:
    """Kubernetes liveness probe."""
    return {"alive": True}
