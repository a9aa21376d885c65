from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from bson import ObjectId
from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.schemas import FilterOptionsModel, RecordModel
from core.config import get_settings
from core.filter_options import compute_filter_options
from core.filters import RecordFilters, normalize_filters
from core.metrics_dashboard import compute_dashboard
from core.query import build_query
from core.store import RecordStore, get_record_store

app = FastAPI(title="Survey Insights Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api/data", tags=["data"])

_SERVER_ERROR = {"message": "Server Error"}


def get_store() -> RecordStore:
    return get_record_store(get_settings())


def record_filters(
    end_year: Optional[str] = Query(default=None),
    topics: Optional[str] = Query(default=None),
    sector: Optional[str] = Query(default=None),
    region: Optional[str] = Query(default=None),
    pestle: Optional[str] = Query(default=None),
    source: Optional[str] = Query(default=None),
    country: Optional[str] = Query(default=None),
    city: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
) -> RecordFilters:
    return normalize_filters(
        {
            "end_year": end_year,
            "topics": topics,
            "sector": sector,
            "region": region,
            "pestle": pestle,
            "source": source,
            "country": country,
            "city": city,
            "search": search,
        }
    )


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy/bson objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
                datetime: lambda dt: dt.isoformat(),
                ObjectId: str,
            },
        )
    )


def _find_records(store: RecordStore, filters: RecordFilters) -> List[Dict[str, Any]]:
    docs = store.find(build_query(filters))
    return [RecordModel.from_document(doc).model_dump(by_alias=True, exclude_none=True) for doc in docs]


@app.get("/", response_class=PlainTextResponse)
def liveness() -> str:
    return "API is running..."


@router.get("")
def list_records(filters: RecordFilters = Depends(record_filters), store: RecordStore = Depends(get_store)):
    try:
        return _json(_find_records(store, filters))
    except Exception:
        logger.exception("list_records failed")
        return JSONResponse(status_code=500, content=_SERVER_ERROR)


@router.get("/filters")
def filter_options(store: RecordStore = Depends(get_store)):
    try:
        options = compute_filter_options(store)
        if not options:
            return _json({})
        return _json(FilterOptionsModel(**options).model_dump())
    except Exception:
        logger.exception("filter_options failed")
        return JSONResponse(status_code=500, content=_SERVER_ERROR)


@router.get("/summary")
def summary(filters: RecordFilters = Depends(record_filters), store: RecordStore = Depends(get_store)):
    try:
        return _json(compute_dashboard(filters, _find_records(store, filters)))
    except Exception:
        logger.exception("summary failed")
        return JSONResponse(status_code=500, content=_SERVER_ERROR)


app.include_router(router)
