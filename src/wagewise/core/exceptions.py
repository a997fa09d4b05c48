"""WageWise exception hierarchy."""

from __future__ import annotations


class WageWiseError(Exception):
    """Base exception for all WageWise errors."""


class IngestionError(WageWiseError):
    """Error raised by the ingestion layer outside of per-row recovery."""


class DestringError(ValueError, WageWiseError):
    """A cell value could not be coerced to a number."""

    def __init__(self, value: object, message: str = "not a number") -> None:
        self.value = value
        super().__init__(f"{value!r}: {message}")


class RulesetNotFoundError(WageWiseError):
    """No statutory ruleset registered under the requested version."""

    def __init__(self, version: str, available: list[str] | None = None) -> None:
        self.version = version
        self.available = available or []
        super().__init__(
            f"Unknown statutory ruleset {version!r}; available: {', '.join(self.available) or 'none'}"
        )
