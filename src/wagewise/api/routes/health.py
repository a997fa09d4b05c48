"""Health check endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, Any]:
    settings = request.app.state.settings
    pipeline = request.app.state.pipeline
    return {
        "status": "ready",
        "environment": settings.environment,
        "ruleset_version": settings.deductions.ruleset_version,
        "strategies": [strategy.name for strategy in pipeline.strategies],
    }
