"""HeaderResolver: picks the observed sheet header that best names a canonical field.

Four tiers, strongest first:

1. exact match with the field's canonical label;
2. exact match with any alias;
3. substring containment between the label and the header, either way;
4. token overlap (tokens longer than two characters).

All comparisons are case-insensitive on trimmed text. Placeholder headers
produced by spreadsheet readers (``__EMPTY_3``, ``Unnamed: 4``, bare column
indices) never match anything.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping, Sequence

from wagewise.agents.idp.aliases import ALIASES, FIELD_SPECS
from wagewise.core.types import ColumnKey
from wagewise.models.schema_mapping import (
    CanonicalField,
    ColumnMapping,
    HeaderMatch,
    MatchTier,
)

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"[\s.,\-_]+")
_PLACEHOLDER_RE = re.compile(
    r"^(?:__empty.*|unnamed:?\s*\d+.*|\d+|col(?:umn)?[\s_]*\d+|field[\s_]*\d+)$",
    re.IGNORECASE,
)
_MIN_SUBSTRING_LEN = 3
_MIN_TOKEN_LEN = 3


def normalize_header(header: object) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    return " ".join(str(header).split()).lower()


def is_placeholder_header(header: object) -> bool:
    """Blank or reader-generated header that carries no meaning."""
    text = normalize_header(header) if header is not None else ""
    return not text or bool(_PLACEHOLDER_RE.match(text))


def header_tokens(text: str) -> set[str]:
    return {t for t in _TOKEN_SPLIT_RE.split(text.lower()) if len(t) >= _MIN_TOKEN_LEN}


class HeaderResolver:
    """Resolves canonical fields against a set of observed headers."""

    def __init__(self, aliases: Mapping[CanonicalField, tuple[str, ...]] = ALIASES) -> None:
        self._labels: dict[CanonicalField, str] = {}
        self._aliases: dict[CanonicalField, frozenset[str]] = {}
        self._label_tokens: dict[CanonicalField, set[str]] = {}
        for field, names in aliases.items():
            label = normalize_header(names[0])
            self._labels[field] = label
            self._aliases[field] = frozenset(normalize_header(n) for n in names[1:])
            self._label_tokens[field] = header_tokens(label)
        # Field order decides ties at equal tier.
        order = {spec.field: i for i, spec in enumerate(FIELD_SPECS)}
        self._fields: list[CanonicalField] = sorted(
            self._labels, key=lambda f: order.get(f, len(order))
        )

    def tier_for(self, field: CanonicalField, header: object) -> MatchTier | None:
        """Strongest tier at which ``header`` names ``field``, or None."""
        if is_placeholder_header(header):
            return None
        observed = normalize_header(header)
        label = self._labels[field]

        if observed == label:
            return MatchTier.EXACT_LABEL
        if observed in self._aliases[field]:
            return MatchTier.EXACT_ALIAS
        shorter = min(len(observed), len(label))
        if shorter >= _MIN_SUBSTRING_LEN and (label in observed or observed in label):
            return MatchTier.SUBSTRING
        if self._label_tokens[field] & header_tokens(observed):
            return MatchTier.TOKEN_OVERLAP
        return None

    def match(self, field: CanonicalField, observed: Sequence[str]) -> HeaderMatch | None:
        """Best observed header for ``field``: strongest tier, then first in order."""
        best: HeaderMatch | None = None
        for header in observed:
            tier = self.tier_for(field, header)
            if tier is None:
                continue
            if best is None or tier < best.tier:
                best = HeaderMatch(header=header, tier=tier)
                if tier == MatchTier.EXACT_LABEL:
                    break
        return best

    def resolve(self, field: CanonicalField, observed: Sequence[str]) -> str | None:
        """Original text of the observed header chosen for ``field``, if any."""
        found = self.match(field, observed)
        return found.header if found else None

    def column_mappings(self, headers: Mapping[ColumnKey, str]) -> list[ColumnMapping]:
        """Assign fields to columns, at most one field per column.

        ``headers`` maps column keys to the header text shown for them. All
        tier-1 assignments are made before any tier-2 assignment and so on,
        so a weak match never steals a column a stronger match wants.
        """
        tiers: dict[tuple[CanonicalField, ColumnKey], MatchTier] = {}
        for field in self._fields:
            for key, text in headers.items():
                tier = self.tier_for(field, text)
                if tier is not None:
                    tiers[(field, key)] = tier

        claimed_fields: set[CanonicalField] = set()
        claimed_columns: set[ColumnKey] = set()
        mappings: list[ColumnMapping] = []
        for tier in MatchTier:
            for field in self._fields:
                if field in claimed_fields:
                    continue
                for key, text in headers.items():
                    if key in claimed_columns or tiers.get((field, key)) != tier:
                        continue
                    mappings.append(ColumnMapping(
                        column_key=key, source_header=text, field=field, tier=tier,
                    ))
                    claimed_fields.add(field)
                    claimed_columns.add(key)
                    break

        logger.debug(
            "Mapped %d of %d columns: %s",
            len(mappings), len(headers),
            ", ".join(f"{m.source_header!r}->{m.field.value}@{int(m.tier)}" for m in mappings),
        )
        return mappings

    def build_mapping(self, observed: Sequence[str]) -> dict[str, CanonicalField]:
        """Observed header (original text) -> canonical field."""
        mappings = self.column_mappings({header: header for header in observed})
        return {m.source_header: m.field for m in mappings}
