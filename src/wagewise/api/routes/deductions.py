"""Statutory deduction endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from wagewise.agents.compliance import statutory_calc
from wagewise.agents.compliance.rulesets import available_versions, get_ruleset
from wagewise.core.exceptions import RulesetNotFoundError
from wagewise.models.outputs import DeductionResult
from wagewise.models.rules import StatutoryRuleset

router = APIRouter(tags=["deductions"])


class DeductionRequest(BaseModel):
    gross_income: Decimal
    ruleset_version: Optional[str] = None


class ProratedDeductionRequest(BaseModel):
    monthly_salary: Decimal
    standard_hours: Decimal
    worked_hours: Decimal
    ruleset_version: Optional[str] = None


def _ruleset(request: Request, version: str | None) -> StatutoryRuleset:
    version = version or request.app.state.settings.deductions.ruleset_version
    try:
        return get_ruleset(version)
    except RulesetNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/deductions", response_model=DeductionResult)
async def deductions(body: DeductionRequest, request: Request) -> DeductionResult:
    return statutory_calc.calculate(body.gross_income, _ruleset(request, body.ruleset_version))


@router.post("/deductions/prorated", response_model=DeductionResult)
async def prorated_deductions(body: ProratedDeductionRequest, request: Request) -> DeductionResult:
    """Deductions on gross pay pro-rated by hours worked."""
    return statutory_calc.calculate_prorated(
        body.monthly_salary,
        body.standard_hours,
        body.worked_hours,
        _ruleset(request, body.ruleset_version),
    )


@router.get("/rulesets")
async def rulesets(request: Request) -> dict[str, Any]:
    return {
        "default": request.app.state.settings.deductions.ruleset_version,
        "available": available_versions(),
    }
