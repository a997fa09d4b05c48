"""Protocol interfaces for the ingestion pipeline.

Strategies and validators are wired structurally: no inheritance required,
easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from wagewise.core.types import RawRow
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.outputs import ExtractionOutcome


# ---------------------------------------------------------------------------
# Extraction strategies
# ---------------------------------------------------------------------------

@runtime_checkable
class IExtractionStrategy(Protocol):
    """One way of turning raw rows into employee records.

    ``attempt`` returns ``None`` when the strategy does not apply to the rows
    at all, so the pipeline can move on to the next one.
    """

    name: str

    def attempt(self, rows: list[RawRow]) -> ExtractionOutcome | None: ...


# ---------------------------------------------------------------------------
# Record validation
# ---------------------------------------------------------------------------

@runtime_checkable
class IRecordValidator(Protocol):
    """Plausibility checks over a finished record. Returns warning strings."""

    def validate(self, record: EmployeeRecord) -> list[str]: ...
