"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from decimal import Decimal

from wagewise.core.config import AppSettings, DeductionConfig, IngestConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.log_level == "INFO"
    assert settings.deductions.ruleset_version == "KE-2024"


def test_ingest_config_defaults():
    config = IngestConfig()
    assert config.min_mapped_fields == 3
    assert config.header_scan_rows == 10
    assert config.header_echo_min_matches == 2
    assert config.advance_limit_ratio == Decimal("0.5")
    assert config.placeholder_ratios.pension_cap == Decimal("2160")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("WAGEWISE_INGEST_MIN_MAPPED_FIELDS", "4")
    monkeypatch.setenv("WAGEWISE_DEDUCTIONS_RULESET_VERSION", "KE-2023")
    assert IngestConfig().min_mapped_fields == 4
    assert DeductionConfig().ruleset_version == "KE-2023"
