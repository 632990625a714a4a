"""
FastAPI application with assembled routers.

Initializes the FastAPI app, registers routers, middleware and exception
handlers, and launches uvicorn when run as a module.

Dependencies: fastapi, uvicorn, portfolio_rag.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_rag import __version__
from portfolio_rag.api.deps.dependencies import ServiceContainer
from portfolio_rag.api.error_handlers import register_exception_handlers
from portfolio_rag.configs import Settings, get_settings
from portfolio_rag.observability.logger import configure_logging
from portfolio_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import admin_router, chat_router, documents_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the vector store and services once at startup so the first
    request does not pay for client construction.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    container = ServiceContainer(settings)
    logger.info(f"Starting portfolio assistant (vector store: {settings.vector_store.store_type})")
    _ = container.vector_store
    _ = container.document_service
    _ = container.chat_service
    if not container.auth_gate.enabled:
        logger.warning("ADMIN_PASSWORD is not set; admin endpoints are disabled")

    app.state.services = container

    yield

    container.clear()
    logger.info("Service container cleared")


def create_app(settings: Settings | None = None, use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings used for CORS (defaults to get_settings())
        use_lifespan: Build services at startup; tests disable this and
            override the dependencies instead

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Portfolio Assistant RAG API",
        description="Retrieval-augmented chat about a portfolio owner's background",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    # Added last so it runs first and answers preflight requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Correlation-ID"],
    )

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api")
    app.include_router(documents_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "portfolio_rag.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
