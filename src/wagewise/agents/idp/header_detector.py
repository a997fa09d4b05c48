"""Embedded-header fallback: the real header is a data row below titles or blanks.

Typical source: a spreadsheet exported with a title block, so the reader
assigned placeholder keys (``__EMPTY``, ``Unnamed: 3``) and the header text
ended up as cell values a few rows down.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from wagewise.agents.idp.aliases import KNOWN_HEADER_TEXTS
from wagewise.agents.idp.destring import clean_text
from wagewise.agents.idp.file_parser import BLANK_ROW, HeaderRowTransformer, is_blank_row
from wagewise.core.types import RawRow
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.outputs import ExtractionOutcome, FailedRow, SkippedRow

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z0-9]+")
_LETTER_RE = re.compile(r"[A-Za-z]")

ABOVE_HEADER = "Above detected header row"
DETECTED_HEADER = "Detected header row"

_KNOWN_PHRASES: tuple[tuple[str, ...], ...] = tuple(
    sorted({tuple(_WORD_RE.findall(text)) for text in KNOWN_HEADER_TEXTS} - {()})
)


def _words(text: str) -> tuple[str, ...]:
    return tuple(_WORD_RE.findall(text.lower()))


def _contains_phrase(haystack: tuple[str, ...], needle: tuple[str, ...]) -> bool:
    size = len(needle)
    return any(haystack[i:i + size] == needle for i in range(len(haystack) - size + 1))


def is_header_like(value: Any) -> bool:
    """Text cell naming a known field: a label or alias contains it or is contained in it,
    compared as whole words."""
    if not isinstance(value, str):
        return False
    letters = len(_LETTER_RE.findall(value))
    if letters < 2:
        return False
    words = _words(value)
    if not words:
        return False
    # Two-letter fragments ("No", "ID") only count as a whole alias, not inside one.
    allow_partial = letters >= 3
    return any(
        _contains_phrase(words, phrase) or (allow_partial and _contains_phrase(phrase, words))
        for phrase in _KNOWN_PHRASES
    )


def header_score(row: RawRow) -> int:
    return sum(1 for value in row.values() if is_header_like(value))


class EmbeddedHeaderTransformer(HeaderRowTransformer):
    """Finds a header among the first rows' cell values and transforms the rows below it."""

    name = "embedded_header"

    def find_header_row(self, rows: list[RawRow]) -> int | None:
        """Index of the header row within the scan window, or None.

        The first row whose header-like cells reach the mapping minimum wins;
        failing that, the first row with any header-like cell.
        """
        limit = self._settings.ingest.header_scan_rows
        minimum = self._settings.ingest.min_mapped_fields
        first_hit: int | None = None
        for index, row in enumerate(rows[:limit]):
            score = header_score(row)
            if score >= minimum:
                return index
            if score and first_hit is None:
                first_hit = index
        return first_hit

    def attempt(self, rows: list[RawRow]) -> ExtractionOutcome | None:
        if not rows:
            return None
        if self.mappings_for_keys(rows[0]):
            # Keys already carry headers; the primary strategy owns this sheet.
            return None

        header_index = self.find_header_row(rows)
        if header_index is None:
            logger.info("No header-like row in the first %d rows; declining",
                        self._settings.ingest.header_scan_rows)
            return None

        header_row = rows[header_index]
        headers = {
            key: clean_text(value)
            for key, value in header_row.items()
            if isinstance(value, str) and value.strip()
        }
        mappings = self._resolver.column_mappings(headers)
        logger.info("Header row detected at row %d with %d mapped fields",
                    header_index + 1, len(mappings))

        preamble = [
            SkippedRow(
                row=dict(row),
                reason=DETECTED_HEADER if index == header_index else ABOVE_HEADER,
                row_number=index + 1,
            )
            for index, row in enumerate(rows[:header_index + 1])
        ]
        data_rows = rows[header_index + 1:]
        first_row_number = header_index + 2

        if len(mappings) < self._settings.ingest.min_mapped_fields:
            outcome = self._unmappable(data_rows, len(mappings), first_row_number)
        else:
            outcome = self.transform_rows(data_rows, mappings, first_row_number)
        outcome.skipped_rows[:0] = preamble
        return outcome

    def detect_and_transform(self, rows: list[RawRow]) -> tuple[list[EmployeeRecord], list[FailedRow]]:
        return self.transform(rows)

    def _unmappable(self, rows: list[RawRow], mapped: int, first_row_number: int) -> ExtractionOutcome:
        outcome = ExtractionOutcome(strategy=self.name)
        reason = f"Could not reliably map detected headers ({mapped} fields mapped)"
        for index, row in enumerate(rows):
            row_number = first_row_number + index
            if is_blank_row(row):
                outcome.skipped_rows.append(SkippedRow(row=dict(row), reason=BLANK_ROW, row_number=row_number))
            else:
                outcome.failed_rows.append(FailedRow(row=dict(row), reason=reason, row_number=row_number))
        return outcome
