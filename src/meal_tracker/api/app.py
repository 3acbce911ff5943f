"""FastAPI application factory."""

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_tracker.api.foods import router as foods_router
from meal_tracker.api.meals import router as meals_router
from meal_tracker.api.profile import router as profile_router
from meal_tracker.app_logging import configure_logging
from meal_tracker.config import parse_cors_origins
from meal_tracker.containers import AppContainer
from meal_tracker.errors import (
    ConflictError,
    MealTrackerError,
    NotFoundError,
    ValidationError,
)
from meal_tracker.services.validation import field_errors

UNPROCESSABLE_STATUS = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Meal Tracker")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled error: %s %s", request.method, request.url.path
            )
            return _internal_error(container, exc)
        logger.info(
            "%s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": exc.message,
                "errors": [error.to_dict() for error in exc.errors],
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [error.to_dict() for error in field_errors(exc.errors())]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": ValidationError.message, "errors": errors},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": exc.message}
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=UNPROCESSABLE_STATUS,
            content={"error": exc.error, "message": exc.message},
        )

    @app.exception_handler(MealTrackerError)
    async def handle_store_error(
        request: Request, exc: MealTrackerError
    ) -> JSONResponse:
        logger.error(
            "Request failed: %s %s: %s", request.method, request.url.path, exc
        )
        return _internal_error(container, exc)

    app.include_router(meals_router)
    app.include_router(profile_router)
    app.include_router(foods_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "environment": container.settings.environment,
        }

    return app


def _internal_error(container: AppContainer, exc: Exception) -> JSONResponse:
    """Return a 500 response, with exception details outside production."""
    message = "Something went wrong"
    if not container.settings.is_production:
        detail = f"{type(exc).__name__}: {exc}".strip()
        message = detail or message
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": message},
    )
