"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_usage_tracker.api.analysis import router as analysis_router
from food_usage_tracker.api.foods import router as foods_router
from food_usage_tracker.api.reports import router as reports_router
from food_usage_tracker.api.usage import router as usage_router
from food_usage_tracker.app_logging import configure_logging
from food_usage_tracker.containers import AppContainer
from food_usage_tracker.domain.errors import (
    DuplicateFoodError,
    FoodNotFoundError,
    FoodUsageError,
    StoreUnavailableError,
)
from food_usage_tracker.services.error_messages import user_friendly_message

_ERROR_STATUS: tuple[tuple[type[Exception], int], ...] = (
    (DuplicateFoodError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (FoodNotFoundError, status.HTTP_404_NOT_FOUND),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = app.state.container.settings
        logger.info(
            "Starting food usage API (environment=%s, export_dir=%s)",
            settings.environment,
            settings.export_dir,
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(usage_router)
    app.include_router(reports_router)
    app.include_router(analysis_router)
    app.include_router(foods_router)

    @app.exception_handler(FoodUsageError)
    async def domain_error_handler(
        _request: Request, exc: FoodUsageError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Store failure: %s", exc)
        return JSONResponse(
            status_code=status_code,
            content={"detail": user_friendly_message(exc)},
        )

    @app.exception_handler(ValueError)
    async def invalid_input_handler(_request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: FoodUsageError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
