from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional

from core.records import FILTER_FIELDS, as_year

logger = logging.getLogger(__name__)

_ALIASES = {"year": "end_year"}


@dataclass(frozen=True)
class RecordFilters:
    end_year: Optional[int] = None
    topics: Optional[str] = None
    sector: Optional[str] = None
    region: Optional[str] = None
    pestle: Optional[str] = None
    source: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    search: Optional[str] = None
    # Set when end_year was supplied but is not a whole number.
    invalid_year: bool = False

    def active(self) -> Dict[str, object]:
        """Equality constraints keyed by record field, in declaration order."""
        out: Dict[str, object] = {}
        for f in fields(self):
            if f.name not in FILTER_FIELDS:
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[FILTER_FIELDS[f.name]] = value
        return out


def _clean_str(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def normalize_filters(raw: Optional[Mapping[str, object]]) -> RecordFilters:
    raw = raw or {}
    values: Dict[str, object] = {}
    for key, value in raw.items():
        name = _ALIASES.get(key, key)
        if name not in FILTER_FIELDS and name != "search":
            logger.debug("ignoring unknown filter %r", key)
            continue
        cleaned = _clean_str(value)
        if cleaned is None:
            continue
        if name == "search":
            # Blank terms are dropped; surrounding spaces are part of the substring.
            cleaned = str(value)
        # An explicit end_year wins over the `year` alias.
        if name in values and key in _ALIASES:
            continue
        values[name] = cleaned

    invalid_year = False
    raw_year = values.pop("end_year", None)
    end_year = as_year(raw_year) if raw_year is not None else None
    if raw_year is not None and end_year is None:
        logger.debug("end_year %r is not a whole number; query will match nothing", raw_year)
        invalid_year = True

    return RecordFilters(end_year=end_year, invalid_year=invalid_year, **values)  # type: ignore[arg-type]
