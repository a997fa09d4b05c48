"""Type aliases used across the WageWise platform."""

from __future__ import annotations

from typing import Any

ColumnKey = str
RawRow = dict[ColumnKey, Any]
