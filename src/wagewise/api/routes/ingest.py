"""Ingestion endpoint: tabulated rows in, canonical employee records out."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from wagewise.models.outputs import ExtractionResult

router = APIRouter(tags=["ingest"])


class IngestRequest(BaseModel):
    source_name: str = ""
    rows: list[dict[str, Any]] = Field(default_factory=list)


@router.post("/ingest", response_model=ExtractionResult)
async def ingest(body: IngestRequest, request: Request) -> ExtractionResult:
    """Extract employee records from rows already read out of a spreadsheet."""
    return request.app.state.pipeline.run(body.rows, body.source_name)
