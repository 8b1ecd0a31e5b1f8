import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from royaledeck.api import (
    cards_router,
    decks_router,
    health_router,
    player_router,
)
from royaledeck.config import settings
from royaledeck.models.failure import (
    KnownError,
    create_known_failure,
    create_unknown_failure,
)
from royaledeck.services.card_catalog import get_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    catalog = get_catalog()
    logger.info("catalog_loaded", extra={"cards": len(catalog)})
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("royaledeck"),
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Classified failures leave through the failure envelope."""
    body = create_known_failure(exc)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Anything unclassified becomes an unknown failure, never a raw 500."""
    logger.exception("unhandled_error", exc_info=exc)
    body = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


app.include_router(cards_router)
app.include_router(decks_router)
app.include_router(health_router)
app.include_router(player_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
