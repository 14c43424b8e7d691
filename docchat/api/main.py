"""
FastAPI application with assembled routers.

Builds the RAG container in the lifespan (document load, chunking and
index build happen before the first request is served) and registers the
generate, session history and health routers.

Dependencies: fastapi, uvicorn, docchat.api.routers, docchat.application
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from docchat import __version__
from docchat.api.error_handling import register_exception_handlers
from docchat.application.rag_application import RAGApplication
from docchat.configs.settings import Settings, get_settings
from docchat.observability import configure_logging
from docchat.observability.middleware import RequestLoggingMiddleware

from .routers import generate_router, health_router, sessions_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup builds the vector index; a failure propagates and aborts
    startup. Shutdown drops the container reference.
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    application: RAGApplication | None = app.state.rag_application
    if application is None:
        application = RAGApplication.from_settings(settings)
        app.state.rag_application = application

    if not application.is_ready:
        logger.info("Building vector index...")
        await application.startup()
        logger.info("Vector index built")

    yield

    app.state.rag_application = None
    logger.info("RAG application released")


def create_app(
    settings: Settings | None = None,
    application: RAGApplication | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Application settings (cached environment settings if None)
        application: Pre-built RAG container (built from settings if None)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="DocChat RAG API",
        description="Conversational question answering over a single document",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rag_application = application

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(sessions_router)
    app.include_router(generate_router)

    return app


if __name__ == "__main__":
    server = get_settings().server
    uvicorn.run(
        "docchat.api.main:create_app",
        host=server.host,
        port=server.port,
        factory=True,
    )
