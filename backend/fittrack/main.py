"""FitTrack API - Main Application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fittrack.config import get_settings
from fittrack.exceptions import MetricError
from fittrack.models.base import init_db
from fittrack.routes import (
    auth_router,
    user_router,
    workout_router,
    nutrition_router,
    sleep_router,
    progress_router,
    dashboard_router,
)

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting FitTrack API...")
    if settings.db_auto_init:
        await init_db()
        logger.info("Database initialized")
    yield
    # Shutdown
    logger.info("Shutting down FitTrack API...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    FitTrack API - personal fitness tracking backend.

    ## Features
    - Accounts with body metrics (BMI, BMR, daily calorie needs)
    - Workout logging with MET-based calorie estimates
    - Meal logging with per-food nutrition totals
    - Sleep and body progress tracking
    - Period statistics and a daily/weekly dashboard

    ## Authentication
    All endpoints except register, login and the public reference lists require
    a valid JWT token in the Authorization header: `Authorization: Bearer <token>`
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MetricError)
async def metric_error_handler(request: Request, exc: MetricError):
    """Formula and window errors are client input problems."""
    logger.warning(f"Rejected input on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
for router in (
    auth_router,
    user_router,
    workout_router,
    nutrition_router,
    sleep_router,
    progress_router,
    dashboard_router,
):
    app.include_router(router, prefix="/api")


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fittrack.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
