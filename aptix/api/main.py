"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Collaborator construction (document store, completion client, analytics)
2. Router registration
3. Middleware configuration (rate limit, security headers, audit logging, CORS)
4. Exception handlers rendering the {error, message} envelope
5. Startup/shutdown of the document store

Run with: uvicorn aptix.api.main:app --port 3000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from aptix import __version__
from aptix.api.routes import agents_router, health_router
from aptix.core.audit import (
    AuditMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from aptix.core.config import Settings, get_settings
from aptix.core.exceptions import (
    AnalyticsWriteError,
    AptixException,
    InternalServerError,
    ProviderUnavailable,
    RepositoryUnavailable,
    RouteNotFoundError,
    ValidationError,
)
from aptix.core.logging_config import get_logger, setup_logging
from aptix.core.rate_limiter import RateLimiter
from aptix.database.connection import DatabaseConnection, open_document_store
from aptix.database.init_db import initialize_document_store
from aptix.database.repository import AgentRepository, AnalyticsRepository
from aptix.llm.client import create_completion_client
from aptix.services.agent_service import AgentService
from aptix.services.analytics_service import AnalyticsRecorder

logger = get_logger(__name__)

# Their messages carry store or provider detail that never reaches a client
COLLABORATOR_FAULTS = (RepositoryUnavailable, ProviderUnavailable, AnalyticsWriteError)


def build_agent_service(settings: Settings, db: Optional[DatabaseConnection]) -> AgentService:
    """Wire the interaction pipeline from configuration."""
    return AgentService(
        agents=AgentRepository(db),
        completion_client=create_completion_client(settings),
        analytics=AnalyticsRecorder(AnalyticsRepository(db)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to the uniform JSON envelope."""

    @app.exception_handler(AptixException)
    async def aptix_exception_handler(request: Request, exc: AptixException):
        if isinstance(exc, COLLABORATOR_FAULTS):
            logger.error(f"Collaborator fault on {request.method} {request.url.path}: {exc}")
            return JSONResponse(status_code=500, content=InternalServerError().to_dict())
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        error = ValidationError(message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as "no such endpoint"
        if exc.status_code in (404, 405):
            logger.warning(f"Not found: {request.method} {request.url.path}")
            error = RouteNotFoundError()
            return JSONResponse(status_code=404, content=error.to_dict())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "HTTP error", "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(status_code=500, content=InternalServerError().to_dict())


def create_app(
    settings: Optional[Settings] = None,
    agent_service: Optional[AgentService] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment when omitted
        agent_service: Pre-built pipeline (tests inject fakes here). When
            omitted, the document store is opened from settings and the
            pipeline is wired with the configured provider.
        rate_limiter: Limiter for /api routes; built from settings when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    db: Optional[DatabaseConnection] = None
    if agent_service is None:
        db = open_document_store(settings)
        agent_service = build_agent_service(settings, db)

    if rate_limiter is None:
        rate_limiter = RateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_minutes=settings.rate_limit_window_minutes,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{__version__} in {settings.app_env} mode")
        logger.info(f"LLM: {settings.llm_provider}/{settings.llm_model}")
        logger.info(
            f"Rate Limit: {settings.rate_limit_max_requests} req/"
            f"{settings.rate_limit_window_minutes} min"
        )

        if db is not None:
            initialize_document_store(
                db,
                production=settings.is_production(),
                auto_init=settings.db_auto_init,
            )

        yield

        logger.info(f"Shutting down {settings.app_name}")
        if db is not None:
            db.close()

    app = FastAPI(
        title="Aptix API",
        description="""
        Retrieve AI agent profiles and interact with agents deployed on
        the Solana blockchain.

        ## Endpoints

        - **GET /api/agent/{name}**: agent details
        - **POST /api/agent/{name}/interact**: send a message, get a reply
        - **GET /health**: liveness check
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.agent_service = agent_service
    app.state.rate_limiter = rate_limiter
    app.state.document_store = db

    # ============================================================
    # Middleware (last added runs first)
    # ============================================================

    app.add_middleware(RateLimitMiddleware, prefix="/api")
    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_origin.split(",")],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(agents_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"Aptix API server running on http://localhost:{settings.port}")
    uvicorn.run(
        "aptix.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development(),
    )
