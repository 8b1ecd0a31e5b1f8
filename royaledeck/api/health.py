"""
Health check endpoints.

Provides liveness and readiness probes with a card catalog check.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from royaledeck.parsers.catalog import CatalogParseError
from royaledeck.services.card_catalog import get_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    cards: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns ready if the card catalog loads. Returns 503 otherwise.
    """
    try:
        catalog = get_catalog()
    except (FileNotFoundError, CatalogParseError):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog="unavailable")
    return HealthResponse(status="ready", catalog="loaded", cards=len(catalog))
