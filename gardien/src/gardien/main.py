"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from gardien import __version__
from gardien.config.settings import Settings, get_settings
from gardien.di import get_container, initialize_container, shutdown_container
from gardien.domain.exceptions import GardienException
from gardien.infrastructure.monitoring import get_logger, setup_logging
from gardien.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    gardien_exception_handler,
)
from gardien.presentation.api.routes import bindings, health, session, verification


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # JSON logs only in production
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Gardien application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Gardien application...")
        await initialize_container()
        logger.info("Gardien application started successfully")

        yield

        logger.info("Shutting down Gardien application...")
        await shutdown_container()
        logger.info("Gardien application shutdown complete")

    app = FastAPI(
        title="Gardien API",
        description="Wallet ownership verification for chat identities",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GardienException, gardien_exception_handler)

    app.include_router(health.router, prefix="/api")
    app.include_router(verification.router, prefix="/api")
    app.include_router(bindings.router, prefix="/api")
    app.include_router(session.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": "Gardien",
            "status": "running",
            "version": __version__,
            "description": "Wallet ownership verification",
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Component health summary."""
        components = await get_container().health()
        healthy = all(components.values())

        return {
            "status": "healthy" if healthy else "degraded",
            "version": __version__,
            "components": {
                name: {"status": "healthy" if ok else "unhealthy"}
                for name, ok in components.items()
            },
            "backends": {
                "bindings": settings.BINDING_BACKEND,
                "redis_enabled": settings.REDIS_ENABLED,
            },
        }

    @app.get("/metrics", tags=["Monitoring"])
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    logger.info("Gardien application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn gardien.main:get_app --factory
    """
    return create_app()


# For: uvicorn gardien.main:app
_app: Optional[FastAPI] = None


def __getattr__(name: str):
    """Module-level __getattr__ for lazy app initialization."""
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gardien.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
