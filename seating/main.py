"""
Seating API - FastAPI application
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from seating import __version__
from seating.config import Settings, get_settings
from seating.database import Database
from seating.exceptions import (
    DuplicateEmailError,
    EntityNotFoundError,
    EntityValidationError,
    InsufficientCapacityError,
    InvalidStatusTransitionError,
    NoCapacityAvailableError,
    ReservationConflictError,
    ReservationError,
    SeatingError,
    StorageError,
    TableInactiveError,
)
from seating.api import availability, customers, reservations

logger = structlog.get_logger()

ERROR_STATUS_CODES = {
    EntityNotFoundError: 404,
    EntityValidationError: 422,
    DuplicateEmailError: 409,
    ReservationConflictError: 409,
    NoCapacityAvailableError: 409,
    InvalidStatusTransitionError: 409,
    TableInactiveError: 409,
    InsufficientCapacityError: 422,
    ReservationError: 400,
    StorageError: 503,
    SeatingError: 500,
}


def configure_logging(settings: Settings) -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
    
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def seating_error_handler(request: Request, exc: SeatingError) -> JSONResponse:
    """Map domain errors to HTTP responses"""
    status_code = 500
    for error_class in type(exc).__mro__:
        if error_class in ERROR_STATUS_CODES:
            status_code = ERROR_STATUS_CODES[error_class]
            break
    
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=str(exc))
    
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Seating API", version=__version__, data_dir=str(app.state.db.settings.data_dir))
    yield
    logger.info("Shutting down Seating API")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its stores"""
    settings = settings or get_settings()
    configure_logging(settings)
    
    app = FastAPI(
        title="Seating",
        description="Restaurant seating and reservation management",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db = Database(settings)
    
    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.add_exception_handler(SeatingError, seating_error_handler)
    
    @app.get("/health")
    def health():
        """Basic health check"""
        db: Database = app.state.db
        return {
            "status": "healthy",
            "service": "seating",
            "version": __version__,
            "counts": {
                "restaurants": db.restaurants.count(),
                "tables": db.tables.count(),
                "customers": db.customers.count(),
                "reservations": db.reservations.count(),
            },
        }
    
    # Include API routers
    app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
    app.include_router(customers.router, prefix="/customers", tags=["Customers"])
    app.include_router(availability.router, tags=["Availability"])
    
    return app


if __name__ == "__main__":
    import uvicorn
    
    settings = get_settings()
    uvicorn.run(
        "seating.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
