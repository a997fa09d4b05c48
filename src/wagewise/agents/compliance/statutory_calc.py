"""Statutory deduction calculator: PAYE, pension, health and housing levy.

Pure functions over a :class:`StatutoryRuleset`. Intermediate amounts are
kept unrounded; each reported line item is rounded half-up to whole
currency units.
"""

from __future__ import annotations

import logging
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from wagewise.agents.idp.destring import to_decimal
from wagewise.core.exceptions import DestringError
from wagewise.models.outputs import DeductionResult
from wagewise.models.rules import PensionTier, StatutoryRuleset, TaxBand

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
WHOLE = Decimal("1")
CENTS = Decimal("0.01")
DEFAULT_WORKING_DAYS = 22


def round_whole(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE, rounding=ROUND_HALF_UP)


def _finite_or_none(value: Any) -> Decimal | None:
    try:
        number = to_decimal(value)
    except DestringError:
        return None
    return number if number.is_finite() else None


def _tax_before_relief(taxable: Decimal, bands: Sequence[TaxBand]) -> Decimal:
    remaining = taxable
    total = ZERO
    for band in bands:
        if remaining <= 0:
            break
        portion = remaining if band.width is None else min(remaining, band.width)
        total += portion * band.rate
        remaining -= portion
    return total


def progressive_tax(taxable: Decimal, bands: Sequence[TaxBand], relief: Decimal = ZERO) -> Decimal:
    """Marginal tax across ``bands`` less ``relief``, floored at zero and rounded."""
    if taxable <= 0:
        return ZERO
    return round_whole(max(ZERO, _tax_before_relief(taxable, bands) - relief))


def _pension_exact(gross: Decimal, tiers: Sequence[PensionTier]) -> Decimal:
    total = ZERO
    lower = ZERO
    for tier in tiers:
        if gross <= lower:
            break
        total += (min(gross, tier.upper_limit) - lower) * tier.rate
        lower = tier.upper_limit
    return total


def pension_contribution(gross: Decimal, tiers: Sequence[PensionTier]) -> Decimal:
    """Tiered pension contribution; income above the last tier is not contributory."""
    if gross <= 0:
        return ZERO
    return round_whole(_pension_exact(gross, tiers))


def _health_exact(gross: Decimal, ruleset: StatutoryRuleset) -> Decimal:
    if gross <= 0:
        return ZERO
    if ruleset.health_mode == "banded":
        fee = ZERO
        for band in ruleset.health_bands:
            if gross >= band.minimum:
                fee = band.amount
        return fee
    return gross * ruleset.health_rate


def health_contribution(gross: Decimal, ruleset: StatutoryRuleset) -> Decimal:
    """Percentage of gross, or the flat fee of the highest band reached."""
    return round_whole(_health_exact(gross, ruleset))


def housing_levy(gross: Decimal, rate: Decimal) -> Decimal:
    if gross <= 0:
        return ZERO
    return round_whole(gross * rate)


def calculate(gross: Any, ruleset: StatutoryRuleset) -> DeductionResult:
    """Full statutory breakdown for one gross income figure.

    Zero, negative or non-numeric gross yields an all-zero result.
    """
    amount = _finite_or_none(gross)
    if amount is None or amount <= 0:
        return DeductionResult(ruleset_version=ruleset.version)

    exact = {
        "pension": _pension_exact(amount, ruleset.pension_tiers),
        "health": _health_exact(amount, ruleset),
        "levy": amount * ruleset.housing_levy_rate,
    }
    taxable = max(ZERO, amount - sum((exact[name] for name in ruleset.pretax_deductions), ZERO))

    tax = progressive_tax(taxable, ruleset.tax_bands, ruleset.personal_relief)
    pension = round_whole(exact["pension"])
    levy = round_whole(exact["levy"])
    # A flat health fee can exceed a very small gross; it takes only what is left.
    remaining = max(ZERO, (amount - tax - pension - levy).to_integral_value(rounding=ROUND_FLOOR))
    health = min(round_whole(exact["health"]), remaining)
    total = tax + pension + health + levy

    return DeductionResult(
        gross=amount,
        taxable_base=taxable.quantize(CENTS, rounding=ROUND_HALF_UP),
        tax=tax,
        pension=pension,
        health=health,
        levy=levy,
        total_deductions=total,
        net=amount - total,
        ruleset_version=ruleset.version,
    )


def prorated_gross(monthly_salary: Any, standard_hours: Any, worked_hours: Any) -> Decimal:
    """``monthly_salary / standard_hours * worked_hours`` rounded to cents."""
    salary = _finite_or_none(monthly_salary)
    standard = _finite_or_none(standard_hours)
    worked = _finite_or_none(worked_hours)
    if salary is None or standard is None or worked is None:
        return ZERO
    if standard <= 0 or worked < 0 or salary <= 0:
        return ZERO
    return (salary / standard * worked).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_prorated(
    monthly_salary: Any,
    standard_hours: Any,
    worked_hours: Any,
    ruleset: StatutoryRuleset,
) -> DeductionResult:
    """Deductions on a gross derived from hours actually worked."""
    gross = prorated_gross(monthly_salary, standard_hours, worked_hours)
    logger.debug("Prorated gross %s under %s", gross, ruleset.version)
    return calculate(gross, ruleset)


def earned_wage(salary: Any, days_worked: Any, total_working_days: Any = DEFAULT_WORKING_DAYS) -> Decimal:
    """Wage earned so far in the period, the basis for an earned-wage advance.

    Days worked are clamped to the period length; invalid inputs earn nothing.
    """
    pay = _finite_or_none(salary)
    days = _finite_or_none(days_worked)
    total = _finite_or_none(total_working_days)
    if pay is None or days is None or total is None:
        return ZERO
    if total <= 0 or days < 0 or pay <= 0:
        return ZERO
    return round_whole(pay / total * min(days, total))
