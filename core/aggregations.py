"""Chart-ready summaries of an already filtered record list.

Every function here is pure: the same records always give the same series,
so the dashboard can recompute them on each filter change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import pandas as pd

from core.records import NOT_AVAILABLE, NUMERIC_FIELDS, as_number, is_missing

TOP_N = 10


@dataclass(frozen=True)
class CategorySeries:
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(self.labels, self.values))

    def to_frame(self, label_col: str = "label", value_col: str = "value") -> pd.DataFrame:
        return pd.DataFrame({label_col: self.labels, value_col: self.values})


def _label(value: object) -> str:
    return NOT_AVAILABLE if is_missing(value) else str(value)


def _grouping_frame(records: Sequence[Dict[str, Any]], label_field: str, value_field: str | None = None) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "label": [_label(r.get(label_field)) for r in records],
            "value": [as_number(r.get(value_field)) if value_field else 1 for r in records],
        },
        columns=["label", "value"],
    )


def _as_plain(value: Any) -> float:
    out = float(value)
    return int(out) if out.is_integer() else out


def sum_by_category(
    records: Sequence[Dict[str, Any]], value_field: str, label_field: str, *, top_n: int = TOP_N
) -> CategorySeries:
    """Sum ``value_field`` per ``label_field`` group; top ``top_n`` by sum, descending."""
    df = _grouping_frame(records, label_field, value_field)
    if df.empty:
        return CategorySeries()
    sums = df.groupby("label", sort=False)["value"].sum().sort_values(ascending=False, kind="stable").head(top_n)
    return CategorySeries(labels=[str(k) for k in sums.index], values=[_as_plain(v) for v in sums.tolist()])


def count_by_category(records: Sequence[Dict[str, Any]], label_field: str) -> CategorySeries:
    """Count records per ``label_field`` group, all groups in first-seen order."""
    df = _grouping_frame(records, label_field)
    if df.empty:
        return CategorySeries()
    counts = df.groupby("label", sort=False)["value"].count()
    return CategorySeries(labels=[str(k) for k in counts.index], values=[int(v) for v in counts.tolist()])


def average(records: Sequence[Dict[str, Any]], value_field: str) -> float:
    if not records:
        return 0.0
    return sum(as_number(r.get(value_field)) for r in records) / len(records)


def summarize(records: Sequence[Dict[str, Any]]) -> Dict[str, float]:
    out: Dict[str, float] = {"total_records": len(records)}
    for col in NUMERIC_FIELDS:
        out[f"avg_{col}"] = average(records, col)
    return out
