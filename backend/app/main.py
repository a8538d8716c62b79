"""
Taskflow - project and task management API with per-user ownership.
"""

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config import get_settings
from app.database import init_db
from app.routes import auth, users, projects, tasks
from app.exceptions import register_exception_handlers
from app.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Taskflow API...")
    await init_db()
    logger.info("Database initialized")
    yield
    logger.info("Shutting down Taskflow API...")


app = FastAPI(
    title=settings.app_name,
    description="Project and task management with owner-scoped access",
    version="0.1.0",
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
