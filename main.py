import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_admin.auth import AuthManager
from content_admin.config import Settings, settings as default_settings
from content_admin.database import Base, engine
from content_admin.exception_handlers import register_exception_handlers
from content_admin.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from content_admin.routes import auth, content, stats, translations, versions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    app_settings = app.state.settings
    logger.info(f"Starting {app_settings.app_name} in {app_settings.environment} mode")
    if app_settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")
    yield
    logger.info("Shutting down the application...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        description="Admin API for a hierarchical multi-language content tree",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_manager = AuthManager.from_settings(settings)

    # Add middleware
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(content.router, prefix="/api")
    app.include_router(translations.router, prefix="/api")
    app.include_router(versions.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    if settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)  # Logs SQL statements

    return app


setup_structured_logging(log_level=default_settings.log_level, json_format=default_settings.log_json)

app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
