"""
Tests for area interning, serialization and manifest writing.
"""
import gzip
import json

import pandas as pd

from wage_finder.curate.compact import (
    compact_wages,
    intern_areas,
    serialize_dataset,
    write_dataset,
    write_manifest,
)


def test_intern_areas_sorted_unique():
    areas, index = intern_areas(["Austin, TX", "Abilene, TX", "Austin, TX"])
    assert areas == ["Abilene, TX", "Austin, TX"]
    assert index == {"Abilene, TX": 0, "Austin, TX": 1}


def test_compact_wages_rewrites_area_names():
    rows = pd.DataFrame({
        "s": ["15-1252", "15-1243"],
        "n": ["Austin, TX", "Abilene, TX"],
        "l1": [1, 5], "l2": [2, 6], "l3": [3, 7], "l4": [4, 8],
    })
    areas, index = intern_areas(rows["n"])
    wages = compact_wages(rows, index)
    assert wages == [
        {"s": "15-1252", "a": 1, "l1": 1, "l2": 2, "l3": 3, "l4": 4},
        {"s": "15-1243", "a": 0, "l1": 5, "l2": 6, "l3": 7, "l4": 8},
    ]
    assert all(type(w["a"]) is int and type(w["l2"]) is int for w in wages)


def test_compact_wages_empty():
    assert compact_wages(pd.DataFrame(columns=["s", "n", "l1", "l2", "l3", "l4"]), {}) == []


def test_serialize_dataset_is_gzipped_compact_json(sample_dataset):
    blob, ratio = serialize_dataset(sample_dataset)
    text = gzip.decompress(blob).decode("utf-8")
    assert json.loads(text) == sample_dataset
    assert ", " not in text.split('"areas"')[0]
    assert 0 < ratio < 100


def test_write_dataset_returns_manifest_entry(tmp_path, sample_dataset):
    entry = write_dataset(sample_dataset, tmp_path / "out")
    assert entry == {"label": "2025-26", "file": "wages-2025-26.bin"}
    written = tmp_path / "out" / "wages-2025-26.bin"
    assert json.loads(gzip.decompress(written.read_bytes())) == sample_dataset


def test_write_manifest_keeps_last_entry_per_label(tmp_path):
    path = write_manifest(
        [{"label": "2024-25", "file": "old.bin"},
         {"label": "2025-26", "file": "wages-2025-26.bin"},
         {"label": "2024-25", "file": "wages-2024-25.bin"}],
        tmp_path,
    )
    manifest = json.loads(path.read_text())
    assert manifest == {"years": [
        {"label": "2024-25", "file": "wages-2024-25.bin"},
        {"label": "2025-26", "file": "wages-2025-26.bin"},
    ]}
