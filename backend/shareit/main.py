"""
ShareIt Booking API - Main Application Entry Point

Users lend items to each other. This service owns the booking lifecycle:
- Reservation requests and owner approval with compare-and-set status writes
- Past/current/future/status listings for bookers and owners
- Last/next booking per item for item views
- Comment eligibility after a finished booking
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shareit.core.config import get_settings
from shareit.core.exceptions import ShareItError
from shareit.core.logging import setup_logging, get_logger
from shareit.core.metrics import metrics_endpoint
from shareit.api.router import api_router
from shareit.api.middleware import RequestLoggingMiddleware

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        storage=settings.STORAGE_BACKEND,
    )

    yield

    if settings.STORAGE_BACKEND == "sql":
        from shareit.db.session import engine
        await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Item sharing API: bookings, approvals and booking-gated comments",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
app.include_router(api_router)


@app.exception_handler(ShareItError)
async def shareit_error_handler(request: Request, exc: ShareItError):
    logger.warning(
        "request_rejected",
        error=type(exc).__name__,
        detail=exc.message,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "storage": settings.STORAGE_BACKEND,
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()
