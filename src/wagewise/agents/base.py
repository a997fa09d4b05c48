"""Base strategy with common dependency wiring for the extraction strategies."""

from __future__ import annotations

from wagewise.agents.validator.sanity_validator import SanityValidator
from wagewise.core.config import AppSettings
from wagewise.core.protocols import IRecordValidator
from wagewise.core.types import RawRow
from wagewise.models.employee_record import EmployeeRecord
from wagewise.models.outputs import ExtractionOutcome, FailedRow


class BaseStrategy:
    """Common base for all WageWise extraction strategies.

    Provides the shared dependency injection pattern: settings and the record
    validator are injected at construction time. Both default from the
    environment, the validator using the configured ruleset's caps.
    """

    name: str = "base"

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        validator: IRecordValidator | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._validator = validator or SanityValidator.for_version(
            self._settings.deductions.ruleset_version
        )

    def attempt(self, rows: list[RawRow]) -> ExtractionOutcome | None:
        raise NotImplementedError

    def transform(self, rows: list[RawRow]) -> tuple[list[EmployeeRecord], list[FailedRow]]:
        """Records and failed rows; both empty when the strategy does not apply."""
        outcome = self.attempt(rows)
        if outcome is None:
            return [], []
        return outcome.records, outcome.failed_rows
