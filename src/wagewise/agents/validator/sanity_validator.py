"""SanityValidator: flags implausible imported amounts without rejecting the record."""

from __future__ import annotations

from decimal import Decimal

from wagewise.agents.compliance.rulesets import get_ruleset
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.rules import SanityCaps


class SanityValidator:
    """Checks statutory amounts against their caps and deductions against gross pay.

    Each check is independent; every failing check contributes one warning.
    """

    def __init__(self, caps: SanityCaps) -> None:
        self._caps = caps

    @classmethod
    def for_version(cls, version: str) -> SanityValidator:
        return cls(get_ruleset(version).caps)

    @property
    def caps(self) -> SanityCaps:
        return self._caps

    def validate(self, record: EmployeeRecord) -> list[str]:
        warnings: list[str] = []
        sd = record.statutory_deductions

        _check_cap(warnings, "Pension (NSSF) contribution", sd.pension, self._caps.pension_cap)
        _check_cap(warnings, "Health (SHIF/NHIF) contribution", sd.health, self._caps.health_cap)
        _check_cap(warnings, "Housing levy", sd.levy, self._caps.levy_cap)

        if record.gross_income > 0 and record.total_deductions > record.gross_income:
            warnings.append(
                f"Total deductions {record.total_deductions} exceed gross income {record.gross_income}"
            )
        return warnings


def _check_cap(warnings: list[str], label: str, amount: Decimal, cap: Decimal | None) -> None:
    if cap is not None and amount > cap:
        warnings.append(f"{label} {amount} exceeds statutory cap of {cap}")
