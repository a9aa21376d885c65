from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

NUMERIC_FIELDS = ("intensity", "likelihood", "relevance")
CATEGORICAL_FIELDS = ("country", "topics", "region", "city", "source", "sector", "pestle")
TEXT_FIELDS = CATEGORICAL_FIELDS + ("title",)

# Query parameter -> record field. `end_year` is stored as `year`.
FILTER_FIELDS: Dict[str, str] = {
    "end_year": "year",
    "topics": "topics",
    "sector": "sector",
    "region": "region",
    "pestle": "pestle",
    "source": "source",
    "country": "country",
    "city": "city",
}

SEARCH_FIELDS = ("source", "country", "topics", "region", "sector", "title")

# Filter-options response key -> record field.
OPTION_FIELDS: Dict[str, str] = {
    "years": "year",
    "topics": "topics",
    "sectors": "sector",
    "regions": "region",
    "pestles": "pestle",
    "sources": "source",
    "countries": "country",
    "cities": "city",
}

NOT_AVAILABLE = "N/A"


def is_missing(value: object) -> bool:
    """True for None/NaN/NA and for strings that are blank after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def as_year(value: object) -> Optional[int]:
    if is_missing(value):
        return None
    try:
        out = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if out != out or not out.is_integer():
        return None
    return int(out)


def as_number(value: object) -> float:
    """Numeric metric value; missing or non-numeric input counts as 0."""
    if isinstance(value, bool) or is_missing(value):
        return 0
    if isinstance(value, int):
        return value
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if math.isnan(out) or math.isinf(out):
        return 0
    return out


def normalize_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(doc)
    if is_missing(out.get("year")) and not is_missing(out.get("end_year")):
        out["year"] = out.get("end_year")
    out["year"] = as_year(out.get("year"))
    for col in NUMERIC_FIELDS:
        out[col] = as_number(out.get(col))
    for col in TEXT_FIELDS:
        value = out.get(col)
        out[col] = None if is_missing(value) else str(value)
    return out


def records_frame(records: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Build a DataFrame with every known column present, numerics defaulted to 0."""
    df = pd.DataFrame([normalize_record(r) for r in records])
    for col in NUMERIC_FIELDS:
        if col not in df.columns:
            df[col] = 0
    for col in TEXT_FIELDS + ("year",):
        if col not in df.columns:
            df[col] = None
    df["year"] = df["year"].astype("Int64")
    for col in TEXT_FIELDS:
        df[col] = df[col].astype(object).where(df[col].notna(), None)
    return df


def frame_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df.empty:
        return []
    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.to_dict(orient="records")
