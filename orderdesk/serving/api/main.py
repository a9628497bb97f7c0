"""
FastAPI Application Factory

Creates and configures the order API application.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from orderdesk.config import get_settings
from orderdesk.domain.errors import DataIntegrityError, InvalidArgumentError
from orderdesk.serving.api.middleware import RequestLoggingMiddleware
from orderdesk.serving.api.routes import health_router, orders_router

logger = structlog.get_logger(__name__)


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "field": exc.field},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    # loc is ("body" | "path" | "query", name, ..., index, name)
    names = [part for part in first.get("loc", ()) if isinstance(part, str)]
    field = names[-1] if len(names) > 1 else None
    message = first.get("msg", "Malformed request")
    logger.warning("Malformed request", path=request.url.path, field=field, error=message)
    return JSONResponse(
        status_code=400,
        content={"error": f"{field}: {message}" if field else message, "field": field},
    )


async def data_integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
    logger.error("Reference data integrity fault", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"error": "Reference data integrity fault"},
    )


def create_api_app(lifespan: Optional[Any] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        lifespan: Optional lifespan context manager (database setup/teardown)

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Order Desk API",
        description="Purchase orders, status transitions and monthly profit",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(DataIntegrityError, data_integrity_handler)

    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(orders_router, prefix="/api/v1/orders", tags=["Orders"])

    return app
