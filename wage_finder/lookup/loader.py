"""Load the manifest and per-year datasets written by the build step.

The base location is either a local directory or an http(s) URL serving the
same files. Requests are made once; any failure becomes a WageDataError.
"""

import gzip
import json
import logging
import urllib.request
from pathlib import Path
from typing import Dict, List, Optional

from wage_finder.lookup.errors import WageDataError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
MANIFEST_KEYS = ("label", "file")
DATASET_KEYS = ("year", "occupations", "areas", "wages")
WAGE_KEYS = ("s", "a", "l1", "l2", "l3", "l4")


def _is_url(base: str) -> bool:
    return str(base).startswith(("http://", "https://"))


def _read_bytes(base, name: str) -> bytes:
    if _is_url(base):
        url = f"{str(base).rstrip('/')}/{name}"
        logger.debug("GET %s", url)
        with urllib.request.urlopen(url, timeout=30) as resp:
            return resp.read()
    return (Path(base) / name).read_bytes()


def load_manifest(base) -> dict:
    """Read manifest.json from base."""
    try:
        manifest = json.loads(_read_bytes(base, MANIFEST_NAME))
    except (OSError, ValueError) as e:
        raise WageDataError(f"Failed to load: {e}") from e
    if not isinstance(manifest, dict) or not isinstance(manifest.get("years"), list):
        raise WageDataError("Failed to load: manifest has no 'years' list")
    for entry in manifest["years"]:
        if not isinstance(entry, dict) or not all(isinstance(entry.get(k), str) for k in MANIFEST_KEYS):
            raise WageDataError(f"Failed to load: manifest entry {entry!r} needs 'label' and 'file'")
    return manifest


def sorted_years(manifest: dict) -> List[str]:
    """Year labels, newest first."""
    return sorted((y["label"] for y in manifest["years"]), reverse=True)


def latest_year(manifest: dict) -> Optional[str]:
    labels = sorted_years(manifest)
    return labels[0] if labels else None


def find_year(manifest: dict, label: str) -> Dict[str, str]:
    for entry in manifest["years"]:
        if entry["label"] == label:
            return entry
    raise WageDataError(f"Failed to load wage data: no dataset for FY {label}")


def load_dataset(base, entry: Dict[str, str]) -> dict:
    """Fetch, gunzip and parse one year's dataset."""
    try:
        raw = _read_bytes(base, entry["file"])
        dataset = json.loads(gzip.decompress(raw).decode("utf-8"))
    except (OSError, EOFError, ValueError) as e:
        raise WageDataError(f"Failed to load wage data: {e}") from e

    problem = _dataset_problem(dataset)
    if problem:
        raise WageDataError(f"Failed to load wage data: {problem}")
    logger.info(
        "Loaded FY %s: %d occupations, %d areas, %d wage records",
        dataset["year"], len(dataset["occupations"]), len(dataset["areas"]), len(dataset["wages"]),
    )
    return dataset


def _dataset_problem(dataset) -> Optional[str]:
    """Describe the first structural defect of a parsed dataset, or None."""
    if not isinstance(dataset, dict):
        return f"expected an object, got {type(dataset).__name__}"
    missing = [k for k in DATASET_KEYS if k not in dataset]
    if missing:
        return f"missing keys {missing}"
    for key in ("occupations", "areas", "wages"):
        if not isinstance(dataset[key], list):
            return f"'{key}' is not a list"

    if not all(isinstance(o, dict) and isinstance(o.get("c"), str) and isinstance(o.get("t"), str)
               for o in dataset["occupations"]):
        return "occupation entries need 'c' and 't'"
    if not all(isinstance(a, str) for a in dataset["areas"]):
        return "area names must be strings"

    n_areas = len(dataset["areas"])
    for w in dataset["wages"]:
        if not isinstance(w, dict) or any(k not in w for k in WAGE_KEYS):
            return f"wage record {w!r} needs {list(WAGE_KEYS)}"
        a = w["a"]
        if not isinstance(a, int) or isinstance(a, bool) or not 0 <= a < n_areas:
            return f"wage record area index {a!r} out of range"
        if not all(isinstance(w[k], (int, float)) and not isinstance(w[k], bool) for k in WAGE_KEYS[2:]):
            return f"wage record {w!r} has non-numeric levels"
    return None
