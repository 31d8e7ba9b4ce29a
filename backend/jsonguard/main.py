"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from jsonguard.api.v1 import validate
from jsonguard.core.config import settings
from jsonguard.core.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging()
    logger = get_logger("startup")
    logger.info("Application starting", env=settings.APP_ENV)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="jsonguard",
    description="Fetch JSON resources, validate them against an ad-hoc schema, and preview them",
    version="0.1.0",
    lifespan=lifespan,
)

API_PREFIX = "/api/v1"
app.include_router(validate.router, prefix=API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
