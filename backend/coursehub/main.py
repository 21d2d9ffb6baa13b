import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursehub.api.routes import courses, users
from coursehub.core.config import Settings, get_settings
from coursehub.core.context import AppContext
from coursehub.core.database import init_db
from coursehub.core.errors import UnhandledErrorMiddleware, register_exception_handlers
from coursehub.core.request_logging import RequestLoggingMiddleware, configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create any missing tables
    Shutdown: release pooled database connections
    """
    context: AppContext = app.state.context
    init_db(context.engine)
    logger.info("CourseHub API started")
    yield
    context.engine.dispose()
    logger.info("CourseHub API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application with its own database and hasher"""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="CourseHub API",
        description="Users and courses with per-owner access control",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = AppContext.from_settings(settings)

    # Last added runs outermost: faults become a 500 before the access log sees them
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # All routes are prefixed with /api
    app.include_router(users.router, prefix="/api")
    app.include_router(courses.router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint - friendly greeting"""
        return {"message": "Welcome to the REST API project!"}

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the default app with uvicorn"""
    settings = get_settings()
    uvicorn.run("coursehub.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
