"""Primary row transformer: sheets whose column keys are the header texts.

Builds a column -> field mapping from the first row's keys, then turns each
row into an :class:`EmployeeRecord` or a :class:`FailedRow`. The record
assembly (typing, derived fields, validation, identity) is shared with the
embedded-header fallback and the pattern extractor via ``RecordAssembler``.
"""

from __future__ import annotations

import logging
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Sequence

from wagewise.agents.base import BaseStrategy
from wagewise.agents.idp.aliases import KNOWN_HEADER_TEXTS, SPECS_BY_FIELD
from wagewise.agents.idp.destring import (
    clean_text,
    is_blank,
    parse_boolean,
    split_full_name,
    to_decimal,
)
from wagewise.agents.idp.schema_matcher import HeaderResolver, normalize_header
from wagewise.core.config import IngestConfig
from wagewise.core.exceptions import DestringError
from wagewise.core.protocols import IRecordValidator
from wagewise.core.types import RawRow
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.outputs import ExtractionOutcome, FailedRow, SkippedRow
from wagewise.models.schema_mapping import (
    CanonicalField,
    ColumnMapping,
    FieldKind,
    FieldTarget,
    SimpleTarget,
)

logger = logging.getLogger(__name__)

BLANK_ROW = "Blank row"
HEADER_ECHO = "Repeated header row"
MISSING_IDENTITY = "missing key identifier (employee number or name)"

_NESTED_GROUPS = ("statutory_deductions", "contact", "bank_info")


def is_blank_row(row: RawRow) -> bool:
    return all(is_blank(v) for v in row.values())


def is_header_echo(row: RawRow, min_matches: int) -> bool:
    """Row whose cells repeat known header labels/aliases (a second header line)."""
    hits = sum(
        1 for value in row.values()
        if isinstance(value, str) and normalize_header(value) in KNOWN_HEADER_TEXTS
    )
    return hits >= min_matches


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ---------------------------------------------------------------------------
# Record assembly
# ---------------------------------------------------------------------------

class RecordDraft:
    """Mutable scratch space for one row before it becomes an EmployeeRecord."""

    def __init__(self) -> None:
        self.values: dict[str, Any] = {group: {} for group in _NESTED_GROUPS}
        self.populated: set[CanonicalField] = set()
        self.warnings: list[str] = []

    def assign(self, target: FieldTarget, value: Any) -> None:
        if isinstance(target, SimpleTarget):
            self.values[target.attr] = value
        else:
            self.values[target.group][target.attr] = value

    def set_name(self, full_name: Any) -> None:
        surname, other_names = split_full_name(full_name)
        # Dedicated surname / other-names columns take precedence.
        self.values.setdefault("surname", surname)
        self.values.setdefault("other_names", other_names)

    @property
    def mapped_count(self) -> int:
        return len(self.populated)


class RecordAssembler:
    """Turns mapped cells into a finished record, or explains why it cannot."""

    def __init__(self, *, config: IngestConfig, validator: IRecordValidator) -> None:
        self._config = config
        self._validator = validator

    def draft_from_row(self, row: RawRow, mappings: Sequence[ColumnMapping]) -> RecordDraft:
        draft = RecordDraft()
        # Explicit name parts land first so a full-name column only fills gaps.
        ordered = sorted(mappings, key=lambda m: m.field == CanonicalField.FULL_NAME)
        for mapping in ordered:
            raw = row.get(mapping.column_key)
            if is_blank(raw):
                continue
            spec = SPECS_BY_FIELD[mapping.field]

            if spec.kind == FieldKind.FULL_NAME:
                draft.set_name(raw)
            elif spec.kind == FieldKind.BOOLEAN:
                draft.assign(spec.target, parse_boolean(raw))
            elif spec.kind == FieldKind.NUMERIC:
                try:
                    draft.assign(spec.target, to_decimal(raw))
                except DestringError:
                    draft.assign(spec.target, Decimal("0"))
                    draft.warnings.append(
                        f"Could not parse {mapping.field.value} value '{clean_text(raw)}'; defaulted to 0"
                    )
            else:
                draft.assign(spec.target, clean_text(raw))
            draft.populated.add(mapping.field)
        return draft

    def finalize(self, draft: RecordDraft, *, row_number: int | None) -> EmployeeRecord:
        """Apply derived fields and sanity warnings. Explicit sheet values are kept."""
        record = EmployeeRecord(source_row=row_number, **draft.values)

        updates: dict[str, Any] = {}
        total = record.total_deductions
        if CanonicalField.TOTAL_DEDUCTIONS not in draft.populated:
            total = record.computed_total_deductions
            updates["total_deductions"] = total

        net = record.net_income
        if CanonicalField.NET_INCOME not in draft.populated:
            net = record.gross_income - total
            updates["net_income"] = net

        limit = record.advance_limit
        if CanonicalField.ADVANCE_LIMIT not in draft.populated:
            limit = max(
                Decimal("0"),
                (net * self._config.advance_limit_ratio).to_integral_value(rounding=ROUND_FLOOR),
            )
            updates["advance_limit"] = limit
        updates["available_advance_limit"] = limit

        record = record.model_copy(update=updates)
        warnings = [*draft.warnings, *self._validator.validate(record)]
        return record.model_copy(update={"warnings": warnings})

    def rejection_reason(self, record: EmployeeRecord, mapped_count: int) -> str | None:
        """Why a finished record may not be accepted, or None when it may."""
        minimum = self._config.min_mapped_fields
        problems: list[str] = []
        if mapped_count < minimum:
            verb = "field could" if mapped_count == 1 else "fields could"
            problems.append(
                f"Only {mapped_count} {verb} be mapped to known columns (minimum {minimum} required)"
            )
        if not record.has_identity:
            problems.append(MISSING_IDENTITY)
        if not problems:
            return None
        reason = "; ".join(problems)
        return reason[0].upper() + reason[1:]

    def assemble(
        self, row: RawRow, mappings: Sequence[ColumnMapping], row_number: int
    ) -> EmployeeRecord | FailedRow:
        draft = self.draft_from_row(row, mappings)
        record = self.finalize(draft, row_number=row_number)
        reason = self.rejection_reason(record, draft.mapped_count)
        if reason is not None:
            logger.debug("Row %d rejected: %s", row_number, reason)
            return FailedRow(row=dict(row), reason=reason, row_number=row_number)
        return record


# ---------------------------------------------------------------------------
# Primary strategy
# ---------------------------------------------------------------------------

class HeaderRowTransformer(BaseStrategy):
    """Rows keyed by header text: map once from the first row's keys, then transform."""

    name = "header_row"

    def __init__(
        self,
        *,
        resolver: HeaderResolver | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._resolver = resolver or HeaderResolver()
        self._assembler = RecordAssembler(
            config=self._settings.ingest, validator=self._validator
        )

    def mappings_for_keys(self, row: RawRow) -> list[ColumnMapping]:
        return self._resolver.column_mappings({key: str(key) for key in row})

    def attempt(self, rows: list[RawRow]) -> ExtractionOutcome | None:
        if not rows:
            return None
        mappings = self.mappings_for_keys(rows[0])
        if not mappings:
            logger.info("No column keys resolved to known fields; declining")
            return None
        logger.info("Resolved %s from column keys", _plural(len(mappings), "field"))
        return self.transform_rows(rows, mappings)

    def transform_rows(
        self,
        rows: Sequence[RawRow],
        mappings: Sequence[ColumnMapping],
        first_row_number: int = 1,
    ) -> ExtractionOutcome:
        """Transform ``rows`` with a fixed mapping. Row numbers start at ``first_row_number``."""
        outcome = ExtractionOutcome(strategy=self.name)
        echo_threshold = self._settings.ingest.header_echo_min_matches

        for index, row in enumerate(rows):
            row_number = first_row_number + index
            if is_blank_row(row):
                outcome.skipped_rows.append(SkippedRow(row=dict(row), reason=BLANK_ROW, row_number=row_number))
                continue
            if index == 0 and len(rows) > 1 and is_header_echo(row, echo_threshold):
                outcome.skipped_rows.append(SkippedRow(row=dict(row), reason=HEADER_ECHO, row_number=row_number))
                continue

            result = self._assembler.assemble(row, mappings, row_number)
            if isinstance(result, FailedRow):
                outcome.failed_rows.append(result)
            else:
                outcome.records.append(result)

        logger.info(
            "%s: %s, %s, %s",
            self.name,
            _plural(len(outcome.records), "record"),
            _plural(len(outcome.failed_rows), "failed row"),
            _plural(len(outcome.skipped_rows), "skipped row"),
        )
        return outcome
