"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from sql_quest.api.dependencies import request_id_ctx
from sql_quest.api.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from sql_quest.api.rate_limit import get_limiter, get_rate_limit_exceeded_handler
from sql_quest.api.routes.explorer import router as explorer_router
from sql_quest.api.routes.quiz import router as quiz_router
from sql_quest.core.config import get_settings
from sql_quest.core.exceptions import (
    NotFoundError,
    QueryEngineError,
    QuizError,
    SQLQuestError,
)
from sql_quest.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events.

    Initializes:
    - Settings configuration
    - The read-only sample database and its query runner
    - The quiz session store
    """
    # Startup
    settings = get_settings()
    app.state.settings = settings

    from sql_quest.engine.database import get_database
    from sql_quest.engine.query_runner import get_query_runner
    from sql_quest.quiz.store import QuizSessionStore

    database = get_database()
    app.state.database = database
    app.state.query_runner = get_query_runner(settings=settings, database=database)
    app.state.quiz_store = QuizSessionStore.from_settings(settings)
    logger.info("app_started", tables=len(database.tables), environment=settings.ENVIRONMENT)

    yield

    # Shutdown
    logger.info("app_shutdown")


def _error_response(status_code: int, exc: SQLQuestError, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
            "request_id": request_id_ctx.get(),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers for application errors."""

    @app.exception_handler(QueryEngineError)
    async def query_engine_error_handler(request: Request, exc: QueryEngineError) -> JSONResponse:
        """Handle rejected queries with 400 status."""
        return _error_response(status.HTTP_400_BAD_REQUEST, exc, exc.kind.value)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        """Handle unknown tables and unknown or expired quiz sessions."""
        return _error_response(status.HTTP_404_NOT_FOUND, exc, type(exc).__name__)

    @app.exception_handler(QuizError)
    async def quiz_error_handler(request: Request, exc: QuizError) -> JSONResponse:
        """Handle invalid quiz transitions with 409 status."""
        return _error_response(status.HTTP_409_CONFLICT, exc, type(exc).__name__)

    @app.exception_handler(SQLQuestError)
    async def sql_quest_error_handler(request: Request, exc: SQLQuestError) -> JSONResponse:
        """Handle generic application errors."""
        logger.error("application_error", error_code=exc.error_code, error=exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": type(exc).__name__,
                "error_code": exc.error_code,
                "message": exc.message,
                "request_id": request_id_ctx.get(),
            },
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Interactive SQL learning platform: database explorer and timed quizzes",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())
    app.add_middleware(SlowAPIMiddleware)

    # Middleware added last runs first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(explorer_router)
    app.include_router(quiz_router)

    # Health endpoints
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, Any]:
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "request_id": request_id_ctx.get(),
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check() -> Any:
        """Readiness check.

        Verifies the database and quiz store are initialized.
        """
        database_ready = hasattr(app.state, "database")
        quiz_ready = hasattr(app.state, "quiz_store")

        if database_ready and quiz_ready:
            return {"status": "ready", "request_id": request_id_ctx.get()}

        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "database": database_ready,
                "quiz_store": quiz_ready,
                "request_id": request_id_ctx.get(),
            },
        )

    return app


# Lazy-loaded app for uvicorn deployment
# Usage: uvicorn sql_quest.api.app:app --host 0.0.0.0
# Or with factory: uvicorn sql_quest.api.app:create_app --factory
def __getattr__(name: str):
    """Lazy load the app when accessed.

    This prevents settings validation from running at import time,
    allowing tests to patch environment variables before app creation.
    """
    if name == "app":
        return create_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
