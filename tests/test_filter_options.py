"""
Tests for core/filter_options.py — distinct dropdown values per field.
"""

from core.filter_options import clean_values, compute_filter_options
from core.records import OPTION_FIELDS
from core.store import FrameRecordStore


class TestCleanValues:
    def test_drops_blank_and_null(self):
        assert clean_values(["Africa", "", None, "Africa"]) == ["Africa"]

    def test_whitespace_only_is_blank(self):
        assert clean_values(["  ", "\t", "Asia"]) == ["Asia"]

    def test_lexicographic_case_sensitive(self):
        assert clean_values(["beta", "Alpha", "alpha", "Beta"]) == ["Alpha", "Beta", "alpha", "beta"]

    def test_numeric_ascending(self):
        assert clean_values([2030, 2018, None, 2025, 2018], numeric=True) == [2018, 2025, 2030]

    def test_numeric_keeps_zero(self):
        assert clean_values([0, 2020], numeric=True) == [0, 2020]

    def test_numeric_from_strings(self):
        assert clean_values(["2020", "", "2019.0"], numeric=True) == [2019, 2020]


class TestComputeFilterOptions:
    def test_empty_collection(self, empty_store):
        assert compute_filter_options(empty_store) == {}

    def test_all_keys_present(self, sample_store):
        options = compute_filter_options(sample_store)
        assert list(options) == list(OPTION_FIELDS)

    def test_sample_values(self, sample_store):
        options = compute_filter_options(sample_store)
        assert options["years"] == [2018, 2020, 2025]
        assert options["countries"] == ["India", "Mexico", "Saudi Arabia"]
        assert options["sectors"] == ["Energy", "Environment", "Financial services"]
        assert options["cities"] == ["Delhi"]

    def test_blank_and_null_regions_excluded(self):
        store = FrameRecordStore.from_records(
            [{"region": "Africa"}, {"region": ""}, {"region": None}, {"region": "Africa"}]
        )
        assert compute_filter_options(store)["regions"] == ["Africa"]

    def test_ignores_active_filters(self, sample_store):
        # Options always describe the whole collection.
        assert len(compute_filter_options(sample_store)["topics"]) == 4
