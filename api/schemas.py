from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.records import normalize_record

Number = Union[int, float]


class RecordModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    intensity: Number = 0
    likelihood: Number = 0
    relevance: Number = 0
    year: Optional[int] = None
    country: Optional[str] = None
    topics: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    source: Optional[str] = None
    sector: Optional[str] = None
    pestle: Optional[str] = None
    title: Optional[str] = None
    createdAt: Optional[Union[datetime, str]] = None
    updatedAt: Optional[Union[datetime, str]] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "RecordModel":
        doc = normalize_record(doc)
        oid = doc.get("_id")
        if isinstance(oid, dict):
            oid = oid.get("$oid")
        doc["_id"] = None if oid is None else str(oid)
        return cls.model_validate(doc)


class FilterOptionsModel(BaseModel):
    years: List[int] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    sectors: List[str] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    pestles: List[str] = Field(default_factory=list)
    sources: List[str] = Field(default_factory=list)
    countries: List[str] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list)
