"""Typed predicate over records.

A ``RecordQuery`` is built once from ``RecordFilters`` and rendered for
whichever store backs the API: a MongoDB filter document or a pandas mask.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from core.filters import RecordFilters
from core.records import SEARCH_FIELDS

MATCH_NOTHING: Dict[str, Any] = {"_id": {"$in": []}}


@dataclass(frozen=True)
class RecordQuery:
    equals: Tuple[Tuple[str, object], ...] = field(default_factory=tuple)
    search: Optional[str] = None
    search_fields: Tuple[str, ...] = SEARCH_FIELDS
    matches_nothing: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.equals and self.search is None and not self.matches_nothing

    def to_mongo(self) -> Dict[str, Any]:
        if self.matches_nothing:
            return dict(MATCH_NOTHING)
        clauses: List[Dict[str, Any]] = [{name: value} for name, value in self.equals]
        if self.search is not None:
            pattern = re.escape(self.search)
            clauses.append({"$or": [{name: {"$regex": pattern, "$options": "i"}} for name in self.search_fields]})
        if not clauses:
            return {}
        if len(clauses) == 1:
            return clauses[0]
        return {"$and": clauses}

    def mask(self, df: pd.DataFrame) -> pd.Series:
        """Boolean row mask over a records frame."""
        if self.matches_nothing:
            return pd.Series(False, index=df.index)
        out = pd.Series(True, index=df.index)
        for name, value in self.equals:
            if name not in df.columns:
                return pd.Series(False, index=df.index)
            out &= (df[name] == value).fillna(False).astype(bool)
        if self.search is not None:
            needle = self.search.lower()
            hit = pd.Series(False, index=df.index)
            for name in self.search_fields:
                if name not in df.columns:
                    continue
                text = df[name].astype("string").str.lower()
                hit |= text.str.contains(needle, regex=False, na=False).astype(bool)
            out &= hit
        return out


def build_query(filters: RecordFilters) -> RecordQuery:
    if filters.invalid_year:
        return RecordQuery(matches_nothing=True)
    equals = tuple(filters.active().items())
    return RecordQuery(equals=equals, search=filters.search)
