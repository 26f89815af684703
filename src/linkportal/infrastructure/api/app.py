"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from linkportal.core.config import Settings, get_settings
from linkportal.core.errors import LinkPortalError
from linkportal.core.hooks import HookDecorator, HookEvent, HookRegistry
from linkportal.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from linkportal.domain.entities.hook_context import HookContext
from linkportal.domain.services.operations import Operations
from linkportal.infrastructure.github import GitHubClient
from linkportal.infrastructure.hooks import register_builtin_hooks
from linkportal.infrastructure.links import SqlLinkProvider
from linkportal.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


def build_operations(
    settings: Settings,
    hook_registry: HookRegistry | None = None,
) -> Operations:
    """Wire the Operations facade against the configured GitHub API and database."""
    return Operations(
        settings=settings,
        github=GitHubClient(),
        link_provider=SqlLinkProvider(get_db_manager()),
        hook_registry=hook_registry,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()

    configure_logging(settings)
    logger.info(
        "Starting LinkPortal",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        organizations=settings.organizations,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    register_builtin_hooks(app.state.hook_registry)
    if not hasattr(app.state, "operations"):
        app.state.operations = build_operations(settings, app.state.hook_registry)

    context = HookContext(app=app)
    await app.state.hook_registry.trigger(event=HookEvent.ON_BOOTSTRAP, context=context)
    await app.state.hook_registry.trigger(event=HookEvent.ON_SERVE, context=context)

    yield

    logger.info("Shutting down LinkPortal")
    await app.state.hook_registry.trigger(
        event=HookEvent.ON_TERMINATE, context=HookContext(app=app)
    )

    await app.state.operations.github.aclose()
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Lifecycle management for GitHub accounts linked to corporate identities",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    hook_registry = HookRegistry()
    app.state.hook_registry = hook_registry
    app.state.hook = HookDecorator(hook_registry)

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity or GitHub reachability.
        """
        return {
            "status": "healthy",
            "service": "LinkPortal",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check including database connectivity."""
        db_healthy = await get_db_manager().check_connection()
        if db_healthy:
            return {
                "status": "ready",
                "service": "LinkPortal",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "LinkPortal",
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from linkportal.infrastructure.api.dependencies import require_api_version
    from linkportal.infrastructure.api.routes import people_router

    settings = get_settings()

    app.include_router(
        people_router,
        prefix=f"{settings.api_prefix}/people",
        tags=["people"],
        dependencies=[Depends(require_api_version)],
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(LinkPortalError)
    async def linkportal_exception_handler(request: Request, exc: LinkPortalError):
        """Answer with the error message and its status code."""
        content = {"error": exc.message, "status": exc.status_code}
        history = getattr(exc, "history", None)
        if history is not None:
            content["history"] = history
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                path=str(request.url.path),
                method=request.method,
                error=exc.message,
                exc_type=type(exc).__name__,
            )
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc) if get_settings().debug else "Internal server error",
                "status": 500,
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and bind a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


app = create_app()
