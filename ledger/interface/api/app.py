"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from ledger.config import Settings
from ledger.domain.error import StoreError, ValidationError
from ledger.interface.api.routes import health, invites
from ledger.util.di.container import create_container, setup_di
from ledger.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container (and with it the engine) on shutdown."""
    yield
    await app.state.dishka_container.close()


async def handle_validation_error(request: Request, exc: ValidationError):
    """Invalid caller input that got past request models."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


async def handle_store_error(request: Request, exc: Exception):
    """Store failures are reported without internals."""
    logfire.error(
        "Invite store failure",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Invite store unavailable"},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it.

    Args:
        container: DI container to use; the production container by default
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Invite Ledger API",
        description="Issues, validates and redeems invite codes and email invites",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    app_instance.add_exception_handler(ValidationError, handle_validation_error)
    app_instance.add_exception_handler(StoreError, handle_store_error)
    app_instance.add_exception_handler(DBAPIError, handle_store_error)

    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
