"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from wagewise.agents.idp.main import IngestionPipeline
from wagewise.api.routes import deductions, health, ingest
from wagewise.core.config import AppSettings
from wagewise.core.log import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    configure_logging(app.state.settings)
    yield


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or AppSettings()
    app = FastAPI(
        title="WageWise Payroll Ingestion Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = IngestionPipeline(settings=settings)
    app.include_router(health.router)
    app.include_router(ingest.router)
    app.include_router(deductions.router)
    return app
