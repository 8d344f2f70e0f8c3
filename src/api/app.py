"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080 --workers 4
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import get_settings
from core.errors import ScoringError
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup; nothing to release on shutdown."""
    settings = get_settings()

    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    logger.info(
        "Starting compatibility scoring API",
        environment=settings.environment,
        port=settings.port,
        rule_discovery=settings.rule_discovery_enabled,
    )

    yield

    logger.info("Shutting down compatibility scoring API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Hair Compatibility Scoring API",
        description="""
        Deterministic ingredient compatibility scores for a user's hair profile.

        ## Main Endpoints

        - `POST /api/scores/score-product` - Score a product (0-100 plus eight sub-scores)
        - `GET /api/scores/{product_id}` - Saved score for a product
        - `GET /api/scores` - Saved scores, best first

        ## Health Checks

        - `/health`, `/health/detailed`, `/ready`, `/live`
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (order matters - first added = innermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestTracingMiddleware)

    _register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router, tags=["Health"])

    from api.routes.scores import router as scores_router
    app.include_router(scores_router)

    return app


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as ``{"error": "<message>"}``."""

    @app.exception_handler(ScoringError)
    async def scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        if exc.status_code >= 500:
            logger.error("Scoring request failed", error=exc.message)
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error_response(400, f"Invalid request: {detail}")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, str(exc) or "Unknown error")


# Create default app instance for uvicorn
# Usage: uvicorn api.app:app
app = create_app()
