"""
Compaction and serialization of wage datasets.

Area names are interned into a sorted list and wage rows reference them by
position; the dataset is then written as compact JSON, gzip-compressed, one
file per fiscal year, plus a manifest listing the available years.
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from wage_finder.io.readers import resolve_output_path

logger = logging.getLogger(__name__)

LEVEL_COLS = ["l1", "l2", "l3", "l4"]
DEFAULT_OUTPUT_TEMPLATE = "wages-{label}.bin"
DEFAULT_MANIFEST_NAME = "manifest.json"


def intern_areas(names: Iterable[str]) -> Tuple[List[str], Dict[str, int]]:
    """Deduplicate and sort area names; return the list and name -> index map."""
    areas = sorted(set(names))
    return areas, {name: i for i, name in enumerate(areas)}


def compact_wages(wages: pd.DataFrame, area_index: Dict[str, int]) -> List[dict]:
    """Rewrite wage rows from area name to area index.

    Expects columns s, n (area name), l1..l4.
    """
    if wages.empty:
        return []
    positions = wages["n"].map(area_index)
    rows = zip(wages["s"], positions, *(wages[c] for c in LEVEL_COLS))
    # json cannot encode numpy ints
    return [
        {"s": str(s), "a": int(a), "l1": int(l1), "l2": int(l2), "l3": int(l3), "l4": int(l4)}
        for s, a, l1, l2, l3, l4 in rows
    ]


def serialize_dataset(dataset: dict) -> Tuple[bytes, float]:
    """Encode as compact JSON and gzip it.

    Returns:
        (compressed bytes, percent saved versus the raw JSON)
    """
    raw = json.dumps(dataset, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    compressed = gzip.compress(raw)
    ratio = (1 - len(compressed) / len(raw)) * 100 if raw else 0.0
    return compressed, ratio


def write_dataset(dataset: dict, output_dir, template: str = DEFAULT_OUTPUT_TEMPLATE) -> Dict[str, str]:
    """Write one year's dataset and return its manifest entry."""
    label = dataset["year"]
    file_name = template.format(label=label)
    out_path = resolve_output_path(output_dir, file_name)

    compressed, ratio = serialize_dataset(dataset)
    out_path.write_bytes(compressed)
    logger.info(
        "  Written: %s (%.1fMB, %.1f%% smaller)",
        file_name, len(compressed) / 1024 / 1024, ratio,
    )
    return {"label": label, "file": file_name}


def write_manifest(entries: List[Dict[str, str]], output_dir, name: str = DEFAULT_MANIFEST_NAME) -> Path:
    """Write manifest.json; a label appearing twice keeps its last entry."""
    by_label: Dict[str, Dict[str, str]] = {}
    for entry in entries:
        by_label[entry["label"]] = entry
    manifest = {"years": list(by_label.values())}

    out_path = resolve_output_path(output_dir, name)
    out_path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    logger.info("Manifest written: %s (%d year(s))", out_path, len(manifest["years"]))
    return out_path
