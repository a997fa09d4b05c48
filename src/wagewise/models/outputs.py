"""Output models: extraction outcomes, failed/skipped rows, deduction results."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from wagewise.models.employee_record import EmployeeRecord


class FailedRow(BaseModel):
    """A source row that could not be confidently mapped to an EmployeeRecord."""

    row: dict[str, Any] = Field(default_factory=dict)
    reason: str
    row_number: Optional[int] = None  # 1-based; None for whole-input failures


class SkippedRow(BaseModel):
    """A source row intentionally not treated as data (blank, header, header echo)."""

    row: dict[str, Any] = Field(default_factory=dict)
    reason: str
    row_number: int


class ExtractionOutcome(BaseModel):
    """What a single extraction strategy produced from the input rows."""

    strategy: str
    records: list[EmployeeRecord] = Field(default_factory=list)
    failed_rows: list[FailedRow] = Field(default_factory=list)
    skipped_rows: list[SkippedRow] = Field(default_factory=list)

    @property
    def has_records(self) -> bool:
        return bool(self.records)


class ExtractionResult(BaseModel):
    """Pipeline result for one uploaded sheet."""

    source_name: str = ""
    strategy: Optional[str] = None
    extracted_records: list[EmployeeRecord] = Field(default_factory=list)
    failed_rows: list[FailedRow] = Field(default_factory=list)
    skipped_rows: list[SkippedRow] = Field(default_factory=list)

    @property
    def succeeded_count(self) -> int:
        return len(self.extracted_records)

    @property
    def failed_count(self) -> int:
        return len(self.failed_rows)


class DeductionResult(BaseModel):
    """Statutory deductions for one gross income figure. Every line item is kept."""

    gross: Decimal = Decimal("0")
    taxable_base: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    pension: Decimal = Decimal("0")
    health: Decimal = Decimal("0")
    levy: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    ruleset_version: str = ""
