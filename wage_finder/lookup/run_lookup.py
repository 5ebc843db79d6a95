"""CLI entrypoint for the prevailing wage lookup.

    python -m wage_finder.lookup.run_lookup --data-dir public/data \\
        --query "software dev" --salary 120,000 [--year 2025-26] [--level 2] \\
        [--filter "CA"] [--sort wage]
"""

import argparse
import logging
import sys

from wage_finder.lookup.bucketing import (
    WAGE_LEVELS,
    bucket_locations,
    displayed_locations,
    format_currency,
    parse_salary,
    wage_range,
)
from wage_finder.lookup.errors import WageFinderError
from wage_finder.lookup.loader import find_year, latest_year, load_dataset, load_manifest, sorted_years
from wage_finder.lookup.search import search_occupations


def print_years(manifest: dict) -> None:
    print("Available fiscal years:")
    for label in sorted_years(manifest):
        print(f"  FY {label}")


def print_level_guide(dataset: dict) -> None:
    print("Wage Level Guide")
    for level, info in WAGE_LEVELS.items():
        print(f"  {info['label']}: {info['percentile']} percentile - {info['desc']}")
    print(f"Data: DOL OFLC • {len(dataset['occupations'])} occupations • {len(dataset['areas'])} areas")


def print_matches(matches: list, picked: int) -> None:
    print(f"Matching occupations ({len(matches)}):")
    for i, occ in enumerate(matches, start=1):
        marker = "*" if i == picked else " "
        print(f" {marker}{i:>3}. {occ['t']}  [{occ.get('o') or occ['c']}]")


def print_results(result: dict, level: int, location_filter: str, sort_by: str) -> None:
    occupation = result["occupation"]
    print()
    print("=" * 60)
    print(occupation["t"])
    print(f"{format_currency(result['salary'])} annual salary • {result['total']} locations analyzed")
    print("=" * 60)
    print("  ".join(f"{WAGE_LEVELS[lv]['label']}: {len(result['levels'][lv])}" for lv in (1, 2, 3, 4)))
    print()

    shown = displayed_locations(result, level, location_filter, sort_by)
    tier_size = len(result["levels"][level])
    print(f"[{WAGE_LEVELS[level]['label']}] {len(shown)} of {tier_size}")
    if not shown:
        if tier_size == 0:
            print(f"  No locations qualify as {WAGE_LEVELS[level]['label']}")
        else:
            print("  No locations match your filter")
    for loc in shown:
        print(f"  {loc['area']:<55} {wage_range(loc, level)}")

    below = len(result["levels"][0])
    if below:
        print(f"\n{below} location(s) below Level 1 threshold")


def run(args) -> int:
    salary = parse_salary(args.salary) if args.salary is not None else None
    manifest = load_manifest(args.data_dir)
    if args.list_years:
        print_years(manifest)
        return 0

    year = args.year or latest_year(manifest)
    if year is None:
        print("ERROR: manifest lists no datasets")
        return 1
    dataset = load_dataset(args.data_dir, find_year(manifest, year))

    if not args.query:
        print_level_guide(dataset)
        return 0

    matches = search_occupations(dataset["occupations"], args.query)
    if not matches:
        print(f"No occupations match '{args.query}'")
        return 1
    pick = min(max(args.pick, 1), len(matches))
    print_matches(matches, pick)

    if salary is None:
        return 0
    result = bucket_locations(dataset, matches[pick - 1], salary)
    print_results(result, args.level, args.filter or "", args.sort)
    return 0


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s  %(message)s")

    parser = argparse.ArgumentParser(description="Find where a salary meets each DOL prevailing wage level")
    parser.add_argument("--data-dir", default="public/data", help="Directory or URL holding manifest.json")
    parser.add_argument("--year", help="Fiscal year label, e.g. 2025-26 (default: newest)")
    parser.add_argument("--list-years", action="store_true", help="List available fiscal years and exit")
    parser.add_argument("--query", help="Job title, SOC code or O*NET code to search")
    parser.add_argument("--pick", type=int, default=1, help="Which match to use (1-based)")
    parser.add_argument("--salary", help="Annual salary, e.g. 120,000")
    parser.add_argument("--level", type=int, choices=[1, 2, 3, 4], default=2, help="Level to list")
    parser.add_argument("--filter", help="Only show locations whose name contains this text")
    parser.add_argument("--sort", choices=["name", "wage"], default="name", help="Location order")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dataset loading")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("wage_finder").setLevel(logging.INFO)

    try:
        return run(args)
    except WageFinderError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
