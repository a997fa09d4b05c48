"""Versioned Kenyan statutory rulesets.

Two schedules are in circulation and neither is assumed authoritative; the
active one is chosen by ``DeductionConfig.ruleset_version``.

- ``KE-2023``: NHIF banded flat fees, NSSF tiers 6,000 / 18,000, only the
  pension contribution is deducted before PAYE.
- ``KE-2024``: SHIF at 2.75% of gross, NSSF tiers 8,000 / 72,000, and the
  pension, SHIF and housing levy are all deducted before PAYE.
"""

from __future__ import annotations

from decimal import Decimal

from wagewise.core.exceptions import RulesetNotFoundError
from wagewise.models.rules import (
    HealthFeeBand,
    PensionTier,
    SanityCaps,
    StatutoryRuleset,
    TaxBand,
)

D = Decimal

PAYE_BANDS: tuple[TaxBand, ...] = (
    TaxBand(width=D("24000"), rate=D("0.10")),
    TaxBand(width=D("8333"), rate=D("0.25")),
    TaxBand(width=D("467667"), rate=D("0.30")),
    TaxBand(width=D("300000"), rate=D("0.325")),
    TaxBand(width=None, rate=D("0.35")),
)

PERSONAL_RELIEF = D("2400")
HOUSING_LEVY_RATE = D("0.015")

# (minimum gross, monthly fee)
_NHIF_SCHEDULE = (
    (0, 150), (6000, 300), (8000, 400), (12000, 500), (15000, 600),
    (20000, 750), (25000, 850), (30000, 900), (35000, 950), (40000, 1000),
    (45000, 1100), (50000, 1200), (60000, 1300), (70000, 1400), (80000, 1500),
    (90000, 1600), (100000, 1700),
)

KE_2023 = StatutoryRuleset(
    version="KE-2023",
    description="PAYE bands, NSSF tiers 6,000/18,000 at 6%, NHIF banded fees, 1.5% housing levy",
    tax_bands=PAYE_BANDS,
    personal_relief=PERSONAL_RELIEF,
    pension_tiers=(
        PensionTier(upper_limit=D("6000"), rate=D("0.06")),
        PensionTier(upper_limit=D("18000"), rate=D("0.06")),
    ),
    health_mode="banded",
    health_bands=tuple(HealthFeeBand(minimum=D(lo), amount=D(fee)) for lo, fee in _NHIF_SCHEDULE),
    housing_levy_rate=HOUSING_LEVY_RATE,
    pretax_deductions=frozenset({"pension"}),
    caps=SanityCaps(pension_cap=D("1080"), health_cap=D("1700"), levy_cap=D("2500")),
)

KE_2024 = StatutoryRuleset(
    version="KE-2024",
    description="PAYE bands, NSSF tiers 8,000/72,000 at 6%, SHIF 2.75%, 1.5% AHL, all deducted pre-tax",
    tax_bands=PAYE_BANDS,
    personal_relief=PERSONAL_RELIEF,
    pension_tiers=(
        PensionTier(upper_limit=D("8000"), rate=D("0.06")),
        PensionTier(upper_limit=D("72000"), rate=D("0.06")),
    ),
    health_mode="percentage",
    health_rate=D("0.0275"),
    housing_levy_rate=HOUSING_LEVY_RATE,
    pretax_deductions=frozenset({"pension", "health", "levy"}),
    caps=SanityCaps(pension_cap=D("4320"), health_cap=None, levy_cap=D("2500")),
)

RULESETS: dict[str, StatutoryRuleset] = {r.version: r for r in (KE_2023, KE_2024)}


def available_versions() -> list[str]:
    return sorted(RULESETS)


def get_ruleset(version: str) -> StatutoryRuleset:
    """Look up a ruleset by version. Unknown versions raise, they are never guessed."""
    try:
        return RULESETS[version]
    except KeyError:
        raise RulesetNotFoundError(version, available_versions()) from None
