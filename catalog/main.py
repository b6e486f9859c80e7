"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Settings, database and event channel are passed in or built here,
     then kept on app.state; nothing is shared between app instances

2. Lifespan Events
   - startup: create tables (if configured), check the database, then
     mark the app ready
   - shutdown: dispose the database engine

3. Endpoints
   - /graphql: queries and mutations (HTTP), subscriptions (WebSocket)
   - /health: readiness and dependency status
   - /: API information
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from catalog.config import Settings, get_settings
from catalog.database import Database
from catalog.graphql import create_graphql_router
from catalog.services.events import PubSub

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    The app only reports ready (app.state.ready, /health) once the
    database has answered.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.create_tables_on_startup:
        database.create_tables()

    database.ping()
    app.state.ready = True
    logger.info(f"{settings.app_name} ready at /graphql")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.ready = False
    database.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())
        database: Storage handle to use (defaults to one built from
            settings.database_url)

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    if database is None:
        database = Database(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.debug,
        )

    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Catalog API

A GraphQL API for a catalog of books and their authors.

### Features
- **Books**: List, count, filter by author and genre, add
- **Authors**: List, count, set birth year
- **Users**: Sign up and log in with bearer tokens
- **Subscriptions**: Real-time notification of added books
        """,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.events = PubSub()
    app.state.ready = False

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors outside GraphQL execution.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "A database error occurred. Please try again later."
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={"detail": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"detail": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # GraphQL Endpoint
    # -------------------------------------------------------------------------
    graphql_router = create_graphql_router(settings)
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and ready to serve.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers and readiness probes. Reports "starting"
        until the lifespan startup has finished and the database has
        answered.
        """
        try:
            database_ok = app.state.database.ping()
        except SQLAlchemyError as e:
            logger.warning(f"Health check database ping failed: {e}")
            database_ok = False

        ready = app.state.ready and database_ok

        return {
            "status": "healthy" if ready else "starting",
            "ready": ready,
            "app": settings.app_name,
            "version": settings.api_version,
            "database": {"healthy": database_ok},
            "graphql": {
                "endpoint": "/graphql",
                "ide_enabled": settings.graphql_ide_enabled,
                "subscribers": app.state.events.get_stats(),
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "graphql": "/graphql",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app
configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
