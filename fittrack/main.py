"""
FastAPI application
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from fittrack.config import settings
from fittrack.database.session import engine
from fittrack.database.base import Base
from fittrack.api.errors import INTERNAL_ERROR_MESSAGE

# Logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan"""
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")

    # Development only; production uses Alembic
    if settings.DEBUG:
        import fittrack.models  # noqa: F401
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("📊 Database tables created (debug mode)")

    from fittrack.scheduler.jobs import start_scheduler
    start_scheduler()

    logger.info(f"✅ {settings.APP_NAME} started")
    logger.info(f"📍 API docs: http://{settings.HOST}:{settings.PORT}/docs")

    yield

    logger.info(f"👋 {settings.APP_NAME} shutting down...")

    from fittrack.scheduler.jobs import shutdown_scheduler
    shutdown_scheduler()

    await engine.dispose()
    logger.info("✅ Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Fitness tracking API - workouts, nutrition, body metrics and trainers",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS if not settings.DEBUG else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded avatars
upload_dir = Path(settings.UPLOAD_DIR)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")


# Error bodies are {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(location),
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid input data", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


@app.get("/")
async def root():
    """API info"""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Liveness probe"""
    return {"status": "ok"}


# Routers
from fittrack.api.v1 import (  # noqa: E402
    achievements, admin, auth, dashboard, exercises, foods, health, nutrition_logs,
    nutrition_targets, profile, trainers, workout_logs, workouts,
)

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(profile.router, prefix="/api/v1/profile", tags=["Profile"])
app.include_router(exercises.router, prefix="/api/v1/exercises", tags=["Exercises"])
app.include_router(workouts.router, prefix="/api/v1/workouts", tags=["Workouts"])
app.include_router(workout_logs.router, prefix="/api/v1/workout-logs", tags=["Workout logs"])
app.include_router(foods.router, prefix="/api/v1/foods", tags=["Foods"])
app.include_router(nutrition_logs.router, prefix="/api/v1/nutrition-logs", tags=["Nutrition logs"])
app.include_router(nutrition_targets.router, prefix="/api/v1/nutrition-targets", tags=["Nutrition targets"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
app.include_router(achievements.router, prefix="/api/v1/achievements", tags=["Achievements"])
app.include_router(trainers.router, prefix="/api/v1/trainers", tags=["Trainers"])
app.include_router(trainers.courses_router, prefix="/api/v1/courses", tags=["Courses"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(health.router, prefix="/api/v1/health", tags=["Health"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fittrack.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
