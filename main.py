"""
Mercuriale Order Builder — Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import structlog

from config import settings
from config.logging import configure_logging
from exceptions import DatasetLoadError
from services.session_service import get_order_session

# Configure structured logging
configure_logging(settings)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Load the three mercuriales (all or nothing)
    Shutdown: Nothing is persisted
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug
    )

    try:
        await get_order_session().load()
    except DatasetLoadError as e:
        # Stay up so clients get the error message; no retry until restart
        logger.error(
            "datasets_unavailable",
            source=e.source,
            reason=e.reason
        )

    yield

    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Mercuriale Order Builder",
    description="Search the Folkestone, Vendôme and Washington mercuriales and export an order as CSV",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and dataset load state
    """
    session = get_order_session()

    datasets = {"status": "not_loaded"}
    if session.is_ready:
        datasets = {
            "status": "loaded",
            **{source.value: count for source, count in session.store.counts().items()}
        }
    elif session.load_error:
        datasets = {"status": "error", **session.load_error.details}

    return {
        "status": "healthy" if session.is_ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "datasets": datasets
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Mercuriale Order Builder API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "sources": "/api/catalog/sources",
            "search": "/api/catalog/search",
            "order": "/api/order",
            "export": "/api/order/export"
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.catalog import router as catalog_router
from routes.order import router as order_router

app.include_router(catalog_router)  # Prefix already in router
app.include_router(order_router)  # Prefix already in router


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
