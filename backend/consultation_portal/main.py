# backend/consultation_portal/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Dict

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_V1_PREFIX, API_VERSION, BRAND_NAME
from .database import Base, check_database_connection, engine
from .errors import register_error_handlers
from .models import Booking, FacultyProfile, User  # noqa: F401  registers tables on Base
from .routes.v1 import (
    auth as auth_v1,
    bookings as bookings_v1,
    faculty as faculty_v1,
    health as health_v1,
    profile as profile_v1,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    # Refuse to serve if the store is unreachable
    check_database_connection()
    Base.metadata.create_all(bind=engine)

    if not settings.notifications_enabled:
        logger.warning("RESEND_API_KEY not configured; email notifications are disabled")

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")
    engine.dispose()


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

# Register unified error envelope handlers
register_error_handlers(app)

_allow_any_origin = "*" in settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=not _allow_any_origin,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)
logger.info("CORS allow_origins=%s", settings.cors_origins)

# Create API v1 router
api_v1 = APIRouter(prefix=API_V1_PREFIX)

api_v1.include_router(auth_v1.router, prefix="/auth")
api_v1.include_router(faculty_v1.router, prefix="/faculty")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(profile_v1.router, prefix="/profile")
api_v1.include_router(health_v1.router)

app.include_router(api_v1)


@app.get("/")
def read_root() -> Dict[str, str]:
    """Root endpoint - API information"""
    return {
        "message": f"{BRAND_NAME} API is running...",
        "version": API_VERSION,
        "docs": "/docs",
    }
