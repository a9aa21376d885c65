"""
Tests for core/store.py — FrameRecordStore and MongoRecordStore.

MongoRecordStore is exercised against a stand-in collection that records the
filter documents and pipelines it receives.
"""

import json

from bson import ObjectId

from core.config import Settings
from core.filters import normalize_filters
from core.query import build_query
from core.records import OPTION_FIELDS
from core.store import FrameRecordStore, MongoRecordStore, get_record_store


class FakeCollection:
    def __init__(self, docs=None, groups=None):
        self.docs = docs or []
        self.groups = groups or []
        self.queries = []
        self.pipelines = []

    def find(self, query):
        self.queries.append(query)
        return iter([dict(d) for d in self.docs])

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return iter(self.groups)


class TestFrameRecordStore:
    def test_numeric_fields_default_to_zero(self):
        store = FrameRecordStore.from_records([{"country": "UK"}])
        (rec,) = store.find(build_query(normalize_filters({})))
        assert rec["intensity"] == 0
        assert rec["likelihood"] == 0
        assert rec["relevance"] == 0
        assert rec["year"] is None

    def test_blank_strings_become_none(self):
        store = FrameRecordStore.from_records([{"country": "  ", "topics": "oil"}])
        (rec,) = store.find(build_query(normalize_filters({})))
        assert rec["country"] is None
        assert rec["topics"] == "oil"

    def test_empty_store_find(self, empty_store):
        assert empty_store.find(build_query(normalize_filters({}))) == []
        assert empty_store.find(build_query(normalize_filters({"country": "UK"}))) == []

    def test_distinct_values_none_when_empty(self, empty_store):
        assert empty_store.distinct_values() is None

    def test_distinct_values_keys(self, sample_store):
        raw = sample_store.distinct_values()
        assert set(raw) == set(OPTION_FIELDS)
        assert set(raw["countries"]) == {"India", "Mexico", "Saudi Arabia"}

    def test_from_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps([
            {"end_year": 2027, "country": "Mexico", "intensity": "6"},
            {"end_year": "", "country": "Peru", "intensity": ""},
        ]))
        store = FrameRecordStore.from_json(path)
        recs = store.find(build_query(normalize_filters({})))
        assert [r["year"] for r in recs] == [2027, None]
        assert [r["intensity"] for r in recs] == [6, 0]

    def test_from_json_missing_file(self, tmp_path):
        store = FrameRecordStore.from_json(tmp_path / "missing.json")
        assert store.distinct_values() is None

    def test_get_record_store_without_mongo_uses_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps([{"country": "Chile"}]))
        store = get_record_store(Settings(mongo_uri=None, data_file=path))
        assert isinstance(store, FrameRecordStore)
        assert store.distinct_values()["countries"] == ["Chile"]


class TestMongoRecordStore:
    def test_find_passes_mongo_filter(self):
        oid = ObjectId()
        coll = FakeCollection(docs=[{"_id": oid, "country": "UK"}])
        store = MongoRecordStore(coll)
        docs = store.find(build_query(normalize_filters({"country": "UK"})))
        assert coll.queries == [{"country": "UK"}]
        assert docs == [{"_id": str(oid), "country": "UK"}]

    def test_find_skips_store_when_nothing_can_match(self):
        coll = FakeCollection(docs=[{"country": "UK"}])
        store = MongoRecordStore(coll)
        assert store.find(build_query(normalize_filters({"end_year": "x"}))) == []
        assert coll.queries == []

    def test_distinct_values_single_group_stage(self):
        coll = FakeCollection(groups=[{"_id": None, "years": [2020, None], "regions": ["Africa", ""]}])
        store = MongoRecordStore(coll)
        raw = store.distinct_values()
        (pipeline,) = coll.pipelines
        assert len(pipeline) == 1
        group = pipeline[0]["$group"]
        assert group["_id"] is None
        assert group["years"] == {"$addToSet": "$year"}
        assert group["countries"] == {"$addToSet": "$country"}
        assert raw["years"] == [2020, None]
        assert raw["regions"] == ["Africa", ""]
        assert raw["cities"] == []

    def test_distinct_values_empty_collection(self):
        assert MongoRecordStore(FakeCollection()).distinct_values() is None
