"""Data quality checks for built wage datasets.

    python -m wage_finder.validate.dq_checks public/data/wages-2025-26.bin
"""

import argparse
import gzip
import json
import logging
import sys
from collections import Counter, defaultdict
from pathlib import Path
from typing import Dict, List

from wage_finder.curate.onet_merge import occupation_key
from wage_finder.normalize.mappings import base_soc_code

logger = logging.getLogger(__name__)


def read_dataset_file(path) -> dict:
    """Gunzip and parse a dataset file written by the build."""
    return json.loads(gzip.decompress(Path(path).read_bytes()).decode("utf-8"))


def check_wage_records(dataset: dict) -> Dict[str, object]:
    """Every wage row has a SOC code, Level2 > 0 and a valid area index."""
    n_areas = len(dataset["areas"])
    bad_l2 = sum(1 for w in dataset["wages"] if not w.get("l2", 0) > 0)
    missing_soc = sum(1 for w in dataset["wages"] if not w.get("s"))
    bad_area = sum(
        1 for w in dataset["wages"]
        if not isinstance(w.get("a"), int) or not 0 <= w["a"] < n_areas
    )
    return {
        "check": "wage_records",
        "rows": len(dataset["wages"]),
        "non_positive_l2": bad_l2,
        "missing_soc": missing_soc,
        "invalid_area_index": bad_area,
        "passed": bad_l2 == 0 and missing_soc == 0 and bad_area == 0,
    }


def check_areas(dataset: dict) -> Dict[str, object]:
    """Area list is sorted, unique and has no blank names."""
    areas = dataset["areas"]
    return {
        "check": "areas",
        "rows": len(areas),
        "sorted": areas == sorted(areas),
        "duplicates": len(areas) - len(set(areas)),
        "blank": sum(1 for a in areas if not a),
        "passed": areas == sorted(areas) and len(areas) == len(set(areas)) and all(areas),
    }


def check_duplicate_occupations(dataset: dict) -> Dict[str, object]:
    """No two occupations share a key; titles shared by several codes are reported, not failed."""
    keys = Counter(occupation_key(o) for o in dataset["occupations"])
    dup_keys = sorted(k for k, n in keys.items() if n > 1)

    by_title: Dict[str, List[str]] = defaultdict(list)
    for occ in dataset["occupations"]:
        by_title[occ["t"]].append(occ.get("o") or occ["c"])
    shared_titles = {t: codes for t, codes in by_title.items() if len(codes) > 1}

    return {
        "check": "duplicate_occupations",
        "rows": len(dataset["occupations"]),
        "duplicate_keys": dup_keys,
        "shared_titles": shared_titles,
        "passed": not dup_keys,
    }


def check_orphan_specialties(dataset: dict) -> Dict[str, object]:
    """Every O*NET specialty joins to a base occupation present in the list."""
    base_codes = {o["c"] for o in dataset["occupations"] if not o.get("o")}
    orphans = sorted(
        o["o"] for o in dataset["occupations"]
        if o.get("o") and (base_soc_code(o["o"]) not in base_codes or o["c"] != base_soc_code(o["o"]))
    )
    return {
        "check": "orphan_specialties",
        "orphans": orphans,
        "passed": not orphans,
    }


def run_checks(dataset: dict) -> Dict[str, object]:
    """Run every check and summarize."""
    results = [
        check_wage_records(dataset),
        check_areas(dataset),
        check_duplicate_occupations(dataset),
        check_orphan_specialties(dataset),
    ]
    return {
        "year": dataset.get("year"),
        "checks": results,
        "passed": all(r["passed"] for r in results),
    }


def print_report(report: dict) -> None:
    print(f"[DQ CHECKS] FY {report['year']}")
    for result in report["checks"]:
        status = "PASS" if result["passed"] else "FAIL"
        details = {k: v for k, v in result.items() if k not in ("check", "passed", "shared_titles")}
        print(f"  {status}  {result['check']}: {details}")
        shared = result.get("shared_titles")
        if shared:
            print(f"    Titles appearing multiple times: {len(shared)}")
            for title, codes in list(shared.items())[:5]:
                print(f'      "{title}" appears with codes: {", ".join(codes)}')


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")
    parser = argparse.ArgumentParser(description="Validate built wage dataset files")
    parser.add_argument("files", nargs="+", help="wages-YYYY-YY.bin files")
    args = parser.parse_args(argv)

    all_passed = True
    for path in args.files:
        try:
            dataset = read_dataset_file(path)
        except (OSError, EOFError, ValueError) as e:
            logger.error("Cannot read %s: %s", path, e)
            all_passed = False
            continue
        report = run_checks(dataset)
        print_report(report)
        all_passed = all_passed and report["passed"]
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
