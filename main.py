import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from jobportal.core.config import Settings, settings
from jobportal.core.database import Database
from jobportal.core.errors import register_exception_handlers
from jobportal.core.logging_config import setup_logging
from jobportal.api.endpoints import admin, auth, health, jobs, users

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application for the given settings.

    The optional /users and /admin mounts are only included when enabled.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup and shutdown events.
        """
        logger.info(f"Starting up {app_settings.PROJECT_NAME} ({app_settings.ENVIRONMENT})...")
        database = Database(app_settings.DATABASE_URL, create_tables=app_settings.AUTO_CREATE_TABLES)
        database.connect()
        app.state.database = database

        yield

        logger.info(f"Shutting down {app_settings.PROJECT_NAME}...")
        database.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version="1.0.0",
        description="Job board API: accounts, roles and job postings",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(jobs.router, prefix=app_settings.API_PREFIX)
    app.include_router(auth.router, prefix=app_settings.API_PREFIX)
    if app_settings.ENABLE_USER_ROUTES:
        app.include_router(users.router, prefix=app_settings.API_PREFIX)
    if app_settings.ENABLE_ADMIN_ROUTES:
        app.include_router(admin.router, prefix=app_settings.API_PREFIX)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        """Root endpoint - API health check"""
        return {
            "success": True,
            "message": "Job Portal API is running!"
        }

    return app


setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=5000,
        reload=not settings.is_production,
        log_level=settings.LOG_LEVEL.lower()
    )
