from __future__ import annotations

from typing import Any, Dict, Iterable, List

from core.records import OPTION_FIELDS, as_year, is_missing
from core.store import RecordStore

NUMERIC_OPTIONS = {"years"}


def clean_values(values: Iterable[Any], *, numeric: bool = False) -> List[Any]:
    """Distinct non-null, non-blank values, sorted."""
    if numeric:
        years = {as_year(v) for v in values if not is_missing(v)}
        return sorted(y for y in years if y is not None)
    return sorted({str(v) for v in values if not is_missing(v)})


def compute_filter_options(store: RecordStore) -> Dict[str, List[Any]]:
    raw = store.distinct_values()
    if not raw:
        return {}
    return {key: clean_values(raw.get(key, []), numeric=key in NUMERIC_OPTIONS) for key in OPTION_FIELDS}
