"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logfire
from pydantic import BaseModel

from forum.config import Settings
from forum.domain.repository import CategoryRepository


router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness report."""

    status: str
    timestamp: datetime
    environment: str
    git_sha: str


class ReadinessResponse(BaseModel):
    """Readiness report; storage must answer a category listing."""

    status: str
    storage: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """The process is up; says nothing about storage."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        git_sha=settings.git_sha,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    categories: FromDishka[CategoryRepository],
) -> ReadinessResponse | JSONResponse:
    """Storage answers a query; returns 503 when it does not."""
    try:
        await categories.find_all()
    except Exception as e:
        logfire.error("Readiness check failed", error=str(e), error_type=type(e).__name__)
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="unavailable", storage="down").model_dump(),
        )
    return ReadinessResponse(status="ready", storage="up")
