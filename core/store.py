from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

import pandas as pd
from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection

from core.config import Settings
from core.query import RecordQuery
from core.records import OPTION_FIELDS, frame_records, records_frame

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def find(self, query: RecordQuery) -> List[Dict[str, Any]]:
        ...

    def distinct_values(self) -> Optional[Dict[str, List[Any]]]:
        """Raw distinct values per filter-options key, or None for an empty collection."""
        ...


def _stringify_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(doc.get("_id"), ObjectId):
        doc["_id"] = str(doc["_id"])
    return doc


class MongoRecordStore:
    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @classmethod
    def connect(cls, uri: str, database: str, collection: str, *, timeout_ms: int = 5000) -> "MongoRecordStore":
        client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        return cls(client[database][collection])

    def find(self, query: RecordQuery) -> List[Dict[str, Any]]:
        if query.matches_nothing:
            return []
        return [_stringify_id(doc) for doc in self._collection.find(query.to_mongo())]

    def distinct_values(self) -> Optional[Dict[str, List[Any]]]:
        group: Dict[str, Any] = {"_id": None}
        for key, field in OPTION_FIELDS.items():
            group[key] = {"$addToSet": f"${field}"}
        rows = list(self._collection.aggregate([{"$group": group}]))
        if not rows:
            return None
        row = rows[0]
        return {key: list(row.get(key) or []) for key in OPTION_FIELDS}


class FrameRecordStore:
    """Records held in memory as a DataFrame (local dataset, tests)."""

    def __init__(self, df: pd.DataFrame) -> None:
        self._df = df

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "FrameRecordStore":
        return cls(records_frame(records))

    @classmethod
    def from_json(cls, path: Path) -> "FrameRecordStore":
        if not path.exists():
            logger.warning("data file %s not found; serving an empty collection", path)
            return cls(records_frame([]))
        return cls(_load_json_frame((str(path), path.stat().st_mtime)))

    @property
    def frame(self) -> pd.DataFrame:
        return self._df

    def find(self, query: RecordQuery) -> List[Dict[str, Any]]:
        if query.is_empty:
            return frame_records(self._df)
        return frame_records(self._df[query.mask(self._df)])

    def distinct_values(self) -> Optional[Dict[str, List[Any]]]:
        if self._df.empty:
            return None
        out: Dict[str, List[Any]] = {}
        for key, field in OPTION_FIELDS.items():
            series = self._df[field] if field in self._df.columns else pd.Series(dtype=object)
            out[key] = series.dropna().unique().tolist()
        return out


@lru_cache(maxsize=4)
def _load_json_frame(file_sig: Tuple[str, float]) -> pd.DataFrame:
    path, _ = file_sig
    with open(path, encoding="utf-8") as fh:
        payload = json.load(fh)
    if isinstance(payload, dict):
        payload = payload.get("data") or payload.get("records") or []
    logger.info("loaded %d records from %s", len(payload), path)
    return records_frame(payload)


@lru_cache(maxsize=4)
def _mongo_store(uri: str, database: str, collection: str) -> MongoRecordStore:
    return MongoRecordStore.connect(uri, database, collection)


def get_record_store(settings: Settings) -> RecordStore:
    if settings.mongo_uri:
        return _mongo_store(settings.mongo_uri, settings.mongo_database, settings.mongo_collection)
    return FrameRecordStore.from_json(settings.data_file)
