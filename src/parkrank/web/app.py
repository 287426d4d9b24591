"""FastAPI application for parkrank."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from parkrank.config import get_settings
from parkrank.db.migrate import migrate
from parkrank.db.repository import SqliteStore
from parkrank.db.seed import seed
from parkrank.db.store import RankingStore
from parkrank.errors import (
    DuplicateParkError,
    InvalidVoteError,
    MatchupAlreadyResolvedError,
    MatchupNotFoundError,
    NotEnoughParksError,
    RankingError,
    StorageUnavailableError,
)
from parkrank.web.routes import api

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins
ERROR_STATUS: list[tuple[type[RankingError], int]] = [
    (MatchupAlreadyResolvedError, status.HTTP_409_CONFLICT),
    (InvalidVoteError, status.HTTP_400_BAD_REQUEST),
    (MatchupNotFoundError, status.HTTP_404_NOT_FOUND),
    (NotEnoughParksError, status.HTTP_404_NOT_FOUND),
    (DuplicateParkError, status.HTTP_409_CONFLICT),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


async def ranking_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate engine errors into JSON error responses."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    logger.error("Unhandled ranking error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal error"},
    )


def create_app(store: RankingStore | None = None) -> FastAPI:
    """Build the application.

    Args:
        store: Store to serve from. When omitted, the SQLite database from
            settings is migrated at startup and used.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler."""
        if store is not None:
            app.state.store = store
        else:
            settings = get_settings()
            migrate()
            app.state.store = SqliteStore()
            if settings.seed_on_startup:
                seed(app.state.store, default_rating=settings.default_rating)
        logger.info("parkrank ready")
        yield
        logger.info("parkrank shutting down")

    app = FastAPI(
        title="parkrank",
        description="Pairwise park voting with Elo ratings",
        version="0.1.0",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    app.add_exception_handler(RankingError, ranking_error_handler)
    app.include_router(api.router, prefix="/api")

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        """Health check endpoint for readiness probes."""
        return "ok"

    return app


app = create_app()
