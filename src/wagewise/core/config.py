"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class PlaceholderRatios(BaseModel):
    """Approximate statutory ratios used when a sheet carries no deduction columns."""

    tax_rate: Decimal = Decimal("0.30")
    pension_rate: Decimal = Decimal("0.015")
    pension_cap: Decimal = Decimal("2160")
    health_rate: Decimal = Decimal("0.01")
    health_cap: Decimal = Decimal("1700")
    levy_rate: Decimal = Decimal("0.015")


class IngestConfig(BaseSettings):
    """Spreadsheet ingestion thresholds."""

    model_config = {"env_prefix": "WAGEWISE_INGEST_"}

    min_mapped_fields: int = 3
    header_scan_rows: int = 10
    header_echo_min_matches: int = 2
    advance_limit_ratio: Decimal = Decimal("0.5")
    placeholder_ratios: PlaceholderRatios = PlaceholderRatios()


class DeductionConfig(BaseSettings):
    """Statutory deduction calculator configuration."""

    model_config = {"env_prefix": "WAGEWISE_DEDUCTIONS_"}

    ruleset_version: str = "KE-2024"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "WAGEWISE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    ingest: IngestConfig = IngestConfig()
    deductions: DeductionConfig = DeductionConfig()
