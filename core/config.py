from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[1]


def _split(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


@dataclass(frozen=True)
class Settings:
    port: int = 5000
    mongo_uri: Optional[str] = None
    mongo_database: str = "dashboard"
    mongo_collection: str = "datas"
    data_file: Path = BASE_DIR / "data" / "jsondata.json"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    api_url: str = "http://localhost:5000/api/data"
    debounce_seconds: float = 0.3
    request_timeout: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    data_file = Path(os.getenv("DATA_FILE", str(Settings.data_file)))
    if not data_file.is_absolute():
        data_file = BASE_DIR / data_file
    return Settings(
        port=int(os.getenv("PORT", "5000")),
        mongo_uri=os.getenv("MONGO_URI") or None,
        mongo_database=os.getenv("MONGO_DATABASE", "dashboard"),
        mongo_collection=os.getenv("MONGO_COLLECTION", "datas"),
        data_file=data_file,
        cors_origins=_split(os.getenv("CORS_ORIGINS", "*")),
        api_url=os.getenv("API_URL", "http://localhost:5000/api/data").rstrip("/"),
        debounce_seconds=float(os.getenv("DEBOUNCE_SECONDS", "0.3")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "10")),
    )
