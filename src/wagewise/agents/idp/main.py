"""Ingestion entrypoint: runs the extraction strategies as an escalation chain.

Header row -> embedded header -> cell patterns. The first strategy whose
outcome holds at least one record wins; the rest are never consulted.
"""

from __future__ import annotations

import logging
from typing import Sequence

from wagewise.agents.idp.file_parser import HeaderRowTransformer
from wagewise.agents.idp.header_detector import EmbeddedHeaderTransformer
from wagewise.agents.idp.pattern_extractor import PatternExtractor
from wagewise.agents.validator.sanity_validator import SanityValidator
from wagewise.core.config import AppSettings
from wagewise.core.exceptions import IngestionError
from wagewise.core.protocols import IExtractionStrategy
from wagewise.core.types import RawRow
from wagewise.models.outputs import ExtractionOutcome, ExtractionResult, FailedRow

logger = logging.getLogger(__name__)

EMPTY_INPUT = "No data found in the uploaded file."
NOTHING_EXTRACTED = "No data found: no extraction strategy produced any records."


def default_strategies(settings: AppSettings) -> list[IExtractionStrategy]:
    validator = SanityValidator.for_version(settings.deductions.ruleset_version)
    return [
        HeaderRowTransformer(settings=settings, validator=validator),
        EmbeddedHeaderTransformer(settings=settings, validator=validator),
        PatternExtractor(settings=settings, validator=validator),
    ]


class IngestionPipeline:
    """Turns a tabulated sheet into canonical employee records."""

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        strategies: Sequence[IExtractionStrategy] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._strategies = list(strategies) if strategies is not None else default_strategies(self._settings)
        if not self._strategies:
            raise IngestionError("IngestionPipeline needs at least one extraction strategy")

    @property
    def strategies(self) -> list[IExtractionStrategy]:
        return list(self._strategies)

    def run(self, rows: Sequence[RawRow], source_name: str = "") -> ExtractionResult:
        rows = list(rows)
        if not rows:
            logger.info("%s: empty input", source_name or "<unnamed>")
            return ExtractionResult(
                source_name=source_name,
                failed_rows=[FailedRow(reason=EMPTY_INPUT)],
            )

        first: ExtractionOutcome | None = None
        for strategy in self._strategies:
            outcome = strategy.attempt(rows)
            if outcome is None:
                logger.debug("%s declined", strategy.name)
                continue
            if outcome.has_records:
                logger.info(
                    "%s: %d records via %s (%d failed, %d skipped)",
                    source_name or "<unnamed>", len(outcome.records), strategy.name,
                    len(outcome.failed_rows), len(outcome.skipped_rows),
                )
                return ExtractionResult(
                    source_name=source_name,
                    strategy=outcome.strategy,
                    extracted_records=outcome.records,
                    failed_rows=outcome.failed_rows,
                    skipped_rows=outcome.skipped_rows,
                )
            logger.info("%s produced no records; escalating", strategy.name)
            # Failures are reported from the earliest strategy that applied.
            if first is None:
                first = outcome

        logger.warning("%s: no strategy produced records from %d rows", source_name or "<unnamed>", len(rows))
        failed = [FailedRow(reason=NOTHING_EXTRACTED)]
        skipped = []
        if first is not None:
            failed.extend(first.failed_rows)
            skipped = first.skipped_rows
        return ExtractionResult(source_name=source_name, failed_rows=failed, skipped_rows=skipped)


def ingest_rows(
    rows: Sequence[RawRow],
    source_name: str = "",
    settings: AppSettings | None = None,
) -> ExtractionResult:
    """Run the default pipeline once over ``rows``."""
    return IngestionPipeline(settings=settings).run(rows, source_name)
