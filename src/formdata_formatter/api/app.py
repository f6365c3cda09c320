"""
FastAPI application for the multipart/form-data formatting service.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
import structlog

from ..version import API_VERSION, FORMATTER_VERSION
from ..config import settings
from ..logging_config import setup_logging
from .routes import formatting, health, version
from .middleware import setup_error_handling_middleware, setup_logging_middleware

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log service startup and shutdown."""
    logger.info(
        "Starting Form-Data Formatter API",
        version=API_VERSION,
        formatter_version=FORMATTER_VERSION,
        log_level=settings.log_level,
        soap_version=settings.soap_version,
    )
    yield
    logger.info("Shutting down Form-Data Formatter API")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="XML to multipart/form-data Formatter",
        description="Re-expresses XML and SOAP payloads as multipart/form-data request bodies",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Custom middleware (order matters - last added = outermost)
    setup_logging_middleware(app)
    setup_error_handling_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(formatting.router, prefix="/api/v1", tags=["Formatting"])

    return app


# Create app instance
app = create_app()


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, use uvicorn directly.
    """
    import uvicorn

    uvicorn.run(
        "formdata_formatter.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
