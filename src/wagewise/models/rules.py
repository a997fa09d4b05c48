"""Statutory rule models: tax bands, contribution tiers, caps and ruleset versions."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

PretaxDeduction = Literal["pension", "health", "levy"]


class TaxBand(BaseModel):
    """One progressive income tax band.

    ``width`` is the size of the income slice taxed at ``rate``; ``None``
    marks the open-ended top band.
    """

    model_config = {"frozen": True}

    width: Optional[Decimal] = None
    rate: Decimal


class PensionTier(BaseModel):
    """Pension contribution tier: ``rate`` applies to income up to ``upper_limit``
    above the previous tier's limit."""

    model_config = {"frozen": True}

    upper_limit: Decimal
    rate: Decimal


class HealthFeeBand(BaseModel):
    """Flat health fee charged when gross income is at least ``minimum``."""

    model_config = {"frozen": True}

    minimum: Decimal
    amount: Decimal


class SanityCaps(BaseModel):
    """Statutory maxima used to flag implausible imported amounts. ``None`` disables a check."""

    model_config = {"frozen": True}

    pension_cap: Optional[Decimal] = None
    health_cap: Optional[Decimal] = None
    levy_cap: Optional[Decimal] = None


class StatutoryRuleset(BaseModel):
    """A versioned set of statutory deduction rules."""

    model_config = {"frozen": True}

    version: str
    description: str = ""
    tax_bands: tuple[TaxBand, ...]
    personal_relief: Decimal = Decimal("0")
    pension_tiers: tuple[PensionTier, ...] = ()
    health_mode: Literal["percentage", "banded"] = "percentage"
    health_rate: Decimal = Decimal("0")
    health_bands: tuple[HealthFeeBand, ...] = ()
    housing_levy_rate: Decimal = Decimal("0")
    pretax_deductions: frozenset[PretaxDeduction] = Field(default_factory=frozenset)
    caps: SanityCaps = SanityCaps()
