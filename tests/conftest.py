"""
Shared fixtures: seeded in-memory record stores and an API client wired to them.
"""

import pytest

from core.store import FrameRecordStore

SEED = [
    {"country": "USA", "topics": "energy", "intensity": 5},
    {"country": "USA", "topics": "oil", "intensity": 3},
    {"country": "UK", "topics": "energy", "intensity": 2},
]

SAMPLE = [
    {"year": 2020, "country": "India", "topics": "gas", "region": "Southern Asia", "sector": "Energy",
     "source": "EIA", "pestle": "Economic", "city": "Delhi", "intensity": 6, "likelihood": 3, "relevance": 2,
     "title": "Gas demand keeps rising"},
    {"year": 2020, "country": "India", "topics": "oil", "region": "Southern Asia", "sector": "Energy",
     "source": "Reuters", "pestle": "Industries", "intensity": 10, "likelihood": 4, "relevance": 3},
    {"year": 2025, "country": "Mexico", "topics": "climate", "region": "Central America",
     "sector": "Environment", "source": "NOAA", "pestle": "Environmental", "intensity": 48,
     "likelihood": 3, "relevance": 4, "title": "Warmest year on record"},
    {"year": None, "country": "", "topics": "market", "region": "World", "sector": "Financial services",
     "source": "WSJ", "pestle": "Political", "intensity": 16, "likelihood": 2, "relevance": 3},
    {"end_year": "2018", "country": "Saudi Arabia", "topics": "oil", "region": "Western Asia",
     "sector": "Energy", "source": "Reuters", "pestle": "Political", "intensity": 4},
]


@pytest.fixture
def seed_store():
    return FrameRecordStore.from_records(SEED)


@pytest.fixture
def sample_store():
    return FrameRecordStore.from_records(SAMPLE)


@pytest.fixture
def empty_store():
    return FrameRecordStore.from_records([])


@pytest.fixture
def sample_records():
    return [dict(r) for r in SAMPLE]
