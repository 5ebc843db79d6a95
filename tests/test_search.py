"""
Tests for occupation search.
"""
from wage_finder.lookup.search import MAX_RESULTS, build_search_index, search_occupations


def test_code_query_matches_base_and_specialty(sample_dataset):
    matches = search_occupations(sample_dataset["occupations"], "15-1243")
    assert [m.get("o") for m in matches] == ["15-1243.01", None]


def test_specialty_code_query(sample_dataset):
    matches = search_occupations(sample_dataset["occupations"], "1243.01")
    assert matches == [{"c": "15-1243", "t": "Data Warehousing Specialists", "o": "15-1243.01"}]


def test_title_query_case_insensitive(sample_dataset):
    matches = search_occupations(sample_dataset["occupations"], "SOFTWARE dev")
    assert [m["c"] for m in matches] == ["15-1252"]


def test_no_cross_field_matches(sample_dataset):
    assert search_occupations(sample_dataset["occupations"], "15-1252 software") == []


def test_empty_query_returns_nothing(sample_dataset):
    assert search_occupations(sample_dataset["occupations"], "") == []


def test_results_capped_and_in_dataset_order():
    occupations = [{"c": f"15-{i:04d}", "t": f"Analyst {i:03d}"} for i in range(120)]
    matches = search_occupations(occupations, "analyst")
    assert len(matches) == MAX_RESULTS == 50
    assert matches == occupations[:50]


def test_prebuilt_index_reused(sample_dataset):
    index = build_search_index(sample_dataset["occupations"])
    assert list(index["o"]) == ["15-1243.01", "", ""]
    matches = search_occupations(sample_dataset["occupations"], "data", index=index)
    assert len(matches) == 2
