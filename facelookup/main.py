"""HTTP application exposing the pipelines for local and container deployments."""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI

from facelookup.api import router as api_v1_router
from facelookup.core.config import settings
from facelookup.core.container import container
from facelookup.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, None]:
    """Handle application startup and shutdown events."""
    logger.info(
        "Starting up face lookup service",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
    )
    container.initialize()
    logger.info("Initialized application services")

    yield

    logger.info("Shutting down face lookup service")
    container.cleanup()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    lifespan=lifespan,
)

app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}
