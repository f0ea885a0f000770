"""
Pizzeria FastAPI Application
Main entry point: app factory, lifespan, middleware and exception handlers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
from typing import Optional
import anyio

from api.routes import health, pizza
from app.config import Settings, settings
from app.exceptions import PizzeriaError, UnavailableError
from domain.models import Database

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    pizzeria_exception_handler,
    general_exception_handler,
)

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("pizzeria.main")


async def connect_database(database: Database, config: Settings) -> None:
    """
    Connect the database and create the schema, trying a few times while the
    store is still starting up.
    """
    for attempt in range(1, config.db_init_attempts + 1):
        try:
            # Blocking driver calls run in a thread to keep the event loop free
            await anyio.to_thread.run_sync(database.connect)
            await anyio.to_thread.run_sync(database.init_schema)
            _logger.info("Database initialization succeeded")
            return
        except UnavailableError as exc:
            _logger.warning(
                "Database init attempt %d/%d failed (%s): %s",
                attempt,
                config.db_init_attempts,
                database.dialect,
                exc,
            )
            if attempt < config.db_init_attempts:
                await anyio.sleep(config.db_init_delay_sec)
            else:
                _logger.error("Database initialization failed after %d attempts", attempt)
                database.close()
                raise


def create_app(config: Settings = settings, database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The Database handle is created here (or injected, e.g. by tests) and
    attached to app.state; the lifespan connects it on startup and closes it
    on shutdown.
    """
    database = database or Database(config.database_url, echo=config.db_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _logger.info(f"Starting {config.app_name} in {config.environment.value} mode")
        await connect_database(app.state.database, config)
        try:
            yield
        finally:
            _logger.info(f"Shutting down {config.app_name}")
            app.state.database.close()

    app = FastAPI(
        title=config.api_title,
        version=config.app_version,
        description=config.api_description,
        lifespan=lifespan,
        debug=config.debug,
        openapi_url=(
            f"{config.api_prefix}/openapi.json" if not config.is_production() else None
        ),
        docs_url=f"{config.api_prefix}/docs" if not config.is_production() else None,
        redoc_url=f"{config.api_prefix}/redoc" if not config.is_production() else None,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=config.cors_allow_methods,
        allow_headers=config.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(PizzeriaError, pizzeria_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router, prefix=config.api_prefix)
    app.include_router(pizza.router, prefix=config.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
