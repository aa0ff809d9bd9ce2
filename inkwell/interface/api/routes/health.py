"""Liveness endpoint."""

from datetime import UTC, datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from inkwell.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Process status and the build it runs."""

    status: str
    service: str
    environment: str
    git_sha: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        service="inkwell",
        environment=settings.environment,
        git_sha=settings.git_sha,
        timestamp=datetime.now(UTC),
    )
