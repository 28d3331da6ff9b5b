"""Main FastAPI application."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from api import exercise_routes, user_routes
from api.error_handlers import register_error_handlers
from config.settings import get_settings
from models.database import close_mongo_connection, init_mongo
from services.exercise_store import ExerciseStore
from utils.logger import setup_logger

logger = setup_logger(__name__)

settings = get_settings()

BASE_DIR = Path(__file__).resolve().parent.parent
VIEWS_DIR = BASE_DIR / "views"
PUBLIC_DIR = BASE_DIR / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    database = await init_mongo(settings)
    app.state.database = database
    app.state.store = ExerciseStore(database)
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await close_mongo_connection(database)
    logger.info("Application shut down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Exercise tracking API: users, exercises and filtered exercise logs",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

# Include API routes
app.include_router(user_routes.router)
app.include_router(exercise_routes.router)


@app.get("/", include_in_schema=False)
async def root():
    """Landing page."""
    return FileResponse(VIEWS_DIR / "index.html")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Your app is listening on port {settings.port}")
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
