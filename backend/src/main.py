# pyright: reportMissingTypeStubs=false
"""
Dental Directory Backend API

A FastAPI application serving clinic opening hours and live open/closed
status for the Malaysian dental clinic directory.

Features:
- Live clinic status (open, closed, opening soon, closing soon)
- Next opening time lookups
- Admin editing of weekly hours and date overrides
- PostgreSQL database with SQLAlchemy ORM
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import clinics, clinic_hours
from core.config import STATUS_MONITOR_ENABLED
from core.constants import CORS_ORIGINS
from services.clinic_status_monitor import start_clinic_status_monitor, stop_clinic_status_monitor

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting Dental Directory Backend API")

    if STATUS_MONITOR_ENABLED:
        try:
            await start_clinic_status_monitor()
            logger.info("Clinic status monitor started")
        except Exception as e:
            logger.exception(f"Failed to start clinic status monitor: {e}")

    yield

    if STATUS_MONITOR_ENABLED:
        try:
            await stop_clinic_status_monitor()
        except Exception as e:
            logger.exception(f"Error stopping clinic status monitor: {e}")

    logger.info("Shutting down Dental Directory Backend API")


app = FastAPI(
    title="Dental Directory Backend",
    description="Opening hours and live status for Malaysian dental clinics",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware for the directory site
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(
    clinics.router,
    prefix="/api/clinics",
    tags=["clinics"],
    responses={
        404: {"description": "Clinic not found"},
        500: {"description": "Internal server error"},
    },
)
app.include_router(
    clinic_hours.router,
    prefix="/api/clinics",
    tags=["clinic-hours"],
    responses={
        400: {"description": "Invalid opening hours"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Resource not found"},
        500: {"description": "Internal server error"},
    },
)


@app.get(
    "/",
    summary="Root endpoint",
    description="Returns basic API information",
)
async def root() -> dict[str, str]:
    """Get API information."""
    return {
        "message": "Dental Directory Backend API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get(
    "/health",
    summary="Health check",
    description="Returns the health status of the API",
)
async def health_check() -> dict[str, str]:
    """Check if the API is healthy and responding."""
    return {"status": "healthy"}


# Global exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions globally."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": "internal_error"},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions (including malformed opening hours)."""
    logger.warning(f"ValueError: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": "validation_error"},
    )
