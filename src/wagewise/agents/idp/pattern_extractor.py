"""Pattern-based direct extractor: last resort when no header can be found.

Each cell is classified by shape alone. The classifiers are plain predicates
composed in a fixed priority order; every pass claims the first unclaimed
matching cell, so a cell is never used for two fields.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Callable, Sequence

from wagewise.agents.base import BaseStrategy
from wagewise.agents.idp.aliases import SPECS_BY_FIELD
from wagewise.agents.idp.destring import clean_text, is_blank, is_numeric, parse_number
from wagewise.agents.idp.file_parser import BLANK_ROW, RecordAssembler, RecordDraft, is_blank_row
from wagewise.core.types import ColumnKey, RawRow
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.outputs import ExtractionOutcome, FailedRow, SkippedRow
from wagewise.models.schema_mapping import CanonicalField

logger = logging.getLogger(__name__)

NO_PATTERN = "Row does not contain a recognizable employee data pattern (name-like text and a number)"

_NAME_TOKEN_RE = re.compile(r"^[A-Z][A-Za-z'.\-]*$")
_TAX_PIN_RE = re.compile(r"^[A-Z]\d{9}[A-Z]$")
_DIGITS_RE = re.compile(r"^\d+$")
_SALARY_FLOOR = Decimal("1000")
_NUMERIC_ID_MIN_DIGITS = 7


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------

def looks_like_full_name(value: Any) -> bool:
    """Two or more capitalized words, no digits."""
    if not isinstance(value, str):
        return False
    tokens = value.split()
    return len(tokens) >= 2 and all(_NAME_TOKEN_RE.match(t) for t in tokens)


def looks_like_tax_pin(value: Any) -> bool:
    """KRA PIN shape: one letter, nine digits, one letter."""
    return isinstance(value, str) and bool(_TAX_PIN_RE.match(value.strip().upper()))


def _is_number_cell(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _digit_string(value: Any) -> str | None:
    """Digits of a text cell, or of an integral numeric cell."""
    if _is_number_cell(value):
        if not is_numeric(value) or value < 0 or value != int(value):
            return None
        return clean_text(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text if _DIGITS_RE.match(text) else None


def looks_like_national_id(value: Any) -> bool:
    """Five or more digits. Numeric cells need seven, since shorter numbers are pay amounts."""
    digits = _digit_string(value)
    if digits is None:
        return False
    minimum = _NUMERIC_ID_MIN_DIGITS if _is_number_cell(value) else 5
    return len(digits) >= minimum


def looks_like_pension_number(value: Any) -> bool:
    """Four to six digits, from text cells only; numeric cells that short are amounts."""
    if _is_number_cell(value):
        return False
    digits = _digit_string(value)
    return digits is not None and 4 <= len(digits) <= 6


def looks_like_salary(value: Any) -> bool:
    """A number above 1,000: a numeric cell, or formatted text such as ``"45,000.00"``.

    Bare digit strings are left to the ID classifiers.
    """
    if isinstance(value, bool) or is_blank(value):
        return False
    if isinstance(value, str) and _DIGITS_RE.match(value.strip()):
        return False
    if not is_numeric(value):
        return False
    return parse_number(value) > _SALARY_FLOOR


Classifier = Callable[[Any], bool]

CLASSIFIERS: tuple[tuple[CanonicalField, Classifier], ...] = (
    (CanonicalField.FULL_NAME, looks_like_full_name),
    (CanonicalField.TAX_PIN, looks_like_tax_pin),
    (CanonicalField.NATIONAL_ID, looks_like_national_id),
    (CanonicalField.PENSION_NUMBER, looks_like_pension_number),
    (CanonicalField.GROSS_INCOME, looks_like_salary),
)


def is_plain_number(value: Any) -> bool:
    """A finite numeric cell or bare digit text; no currency marks, separators or signs."""
    if _is_number_cell(value):
        return is_numeric(value)
    return isinstance(value, str) and bool(_DIGITS_RE.match(value.strip()))


def passes_gate(row: RawRow) -> bool:
    """Employee-like rows carry a proper name and at least one purely numeric cell."""
    values = list(row.values())
    return any(looks_like_full_name(v) for v in values) and any(is_plain_number(v) for v in values)


def classify_cells(
    row: RawRow, classifiers: Sequence[tuple[CanonicalField, Classifier]] = CLASSIFIERS
) -> dict[CanonicalField, ColumnKey]:
    """Field -> column key, one pass per classifier in priority order."""
    claimed: set[ColumnKey] = set()
    found: dict[CanonicalField, ColumnKey] = {}
    for field, predicate in classifiers:
        for key, value in row.items():
            if key in claimed or not predicate(value):
                continue
            found[field] = key
            claimed.add(key)
            break
    return found


def _floor(amount: Decimal) -> Decimal:
    return amount.to_integral_value(rounding=ROUND_FLOOR)


# ---------------------------------------------------------------------------
# Strategy
# ---------------------------------------------------------------------------

class PatternExtractor(BaseStrategy):
    """Header-free extraction by cell shape."""

    name = "pattern"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._assembler = RecordAssembler(config=self._settings.ingest, validator=self._validator)

    def attempt(self, rows: list[RawRow]) -> ExtractionOutcome | None:
        if not rows:
            return None
        outcome = ExtractionOutcome(strategy=self.name)
        for index, row in enumerate(rows):
            row_number = index + 1
            if is_blank_row(row):
                outcome.skipped_rows.append(SkippedRow(row=dict(row), reason=BLANK_ROW, row_number=row_number))
                continue
            result = self.extract_row(row, row_number)
            if isinstance(result, FailedRow):
                outcome.failed_rows.append(result)
            else:
                outcome.records.append(result)
        logger.info("%s: %d records, %d failed rows", self.name, len(outcome.records), len(outcome.failed_rows))
        return outcome

    def extract(self, rows: list[RawRow]) -> tuple[list[EmployeeRecord], list[FailedRow]]:
        return self.transform(rows)

    def extract_row(self, row: RawRow, row_number: int) -> EmployeeRecord | FailedRow:
        if not passes_gate(row):
            return FailedRow(row=dict(row), reason=NO_PATTERN, row_number=row_number)

        found = classify_cells(row)
        minimum = self._settings.ingest.min_mapped_fields
        if len(found) < minimum:
            return FailedRow(
                row=dict(row),
                reason=f"Could only identify {len(found)} fields (minimum {minimum} required)",
                row_number=row_number,
            )

        draft = RecordDraft()
        for field, key in found.items():
            value = row[key]
            if field == CanonicalField.FULL_NAME:
                draft.set_name(value)
            elif field == CanonicalField.GROSS_INCOME:
                gross = parse_number(value)
                draft.assign(SPECS_BY_FIELD[field].target, gross)
                self._apply_placeholders(draft, gross)
            elif field == CanonicalField.TAX_PIN:
                draft.assign(SPECS_BY_FIELD[field].target, clean_text(value).upper())
            else:
                draft.assign(SPECS_BY_FIELD[field].target, clean_text(value))
            draft.populated.add(field)

        # The gate guarantees a name, so identity always holds here.
        return self._assembler.finalize(draft, row_number=row_number)

    def _apply_placeholders(self, draft: RecordDraft, gross: Decimal) -> None:
        """Approximate statutory amounts; the sheet carries no deduction columns."""
        ratios = self._settings.ingest.placeholder_ratios
        draft.values["statutory_deductions"] = {
            "tax": _floor(gross * ratios.tax_rate),
            "pension": min(_floor(gross * ratios.pension_rate), ratios.pension_cap),
            "health": min(_floor(gross * ratios.health_rate), ratios.health_cap),
            "levy": _floor(gross * ratios.levy_rate),
        }
        draft.warnings.append("Statutory deductions estimated from gross income (no deduction columns)")
