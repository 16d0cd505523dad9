"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.api.router import api_router
from app.coach.gemini import build_generator
from app.core.config import settings
from app.core.exceptions import AppError
from app.core.logging import get_logger, setup_logging
from app.db.session import get_db
from app.services.coach_service import CoachService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    app.state.coach = CoachService(build_generator(settings))
    logger.info("Starting API", version=settings.VERSION, coach_available=app.state.coach.is_available())

    yield

    logger.info("Shutting down API")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Workout logging, statistics, AI coaching and PDF export for athletes.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan)

# Template-only coach until the lifespan builds the configured one
app.state.coach = CoachService()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.warning("Request failed", path=request.url.path, error=exc.error, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error, "detail": exc.detail})


# Include API router
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """API banner with the endpoint map."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "endpoints": {
            "auth": "/api/auth",
            "users": "/api/users",
            "workouts": "/api/workouts",
            "ai": "/api/ai",
            "pdf": "/api/pdf",
            "health": "/api/health",
        },
    }


@app.get("/api/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for monitoring."""
    try:
        db.connection().execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as exc:
        logger.error("Health check database failure", error_type=type(exc).__name__)
        database = "disconnected"
    return {
        "status": "healthy" if database == "connected" else "degraded",
        "version": settings.VERSION,
        "database": database,
    }
