"""
Student Roster API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and (optional) Redis connections
- Background job scheduler (annual rollover)
- CORS middleware and the uploads static mount
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from roster.api import api_router
from roster.core.config import settings
from roster.core.database import close_db, init_db
from roster.core.redis import close_redis, init_redis
from roster.core.scheduler import list_registered_jobs, start_scheduler, stop_scheduler
from roster.modules.students.jobs import register_student_jobs

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown of Redis, the database and the scheduler.
    """
    logger.info(f"Starting Student Roster API in {settings.python_env} mode...")

    # Initialize Redis (optional)
    try:
        if await init_redis():
            logger.info("[OK] Redis connected")
        else:
            logger.info("[SKIP] Redis not configured, login throttling is in-process")
    except Exception as e:
        logger.error(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    # Initialize Database
    try:
        await init_db()
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    # Initialize Background Job Scheduler
    if settings.scheduler_enabled:
        try:
            register_student_jobs()
            await start_scheduler()
            logger.info("[OK] Background scheduler started")
        except Exception as e:
            logger.error(f"[FAIL] Background scheduler failed to start: {e}")
            if settings.is_production:
                raise

    yield  # Application runs here

    logger.info("Shutting down Student Roster API...")

    await stop_scheduler()
    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="Student Roster API",
    description="Student enrollment and financial records with yearly payment rollover",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

# Uploaded attachments are served from the uploads directory
settings.upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    f"/{settings.uploads_url_prefix.strip('/')}",
    StaticFiles(directory=settings.upload_dir),
    name="uploads",
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict:
    """Readiness check endpoint, listing scheduled background jobs."""
    return {"status": "ready", "jobs": list_registered_jobs()}
