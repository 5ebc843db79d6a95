"""Compare the O*NET specialty tables of two OFLC archives.

    python -m wage_finder.validate.compare_onet OFLC_Wages_2023-24.zip OFLC_Wages_2024-25.zip
"""

import argparse
import logging
import sys
from typing import Dict

from wage_finder.curate.archive_loader import read_onet_map


def compare_onet_maps(old: Dict[str, str], new: Dict[str, str]) -> dict:
    """Common codes, codes only in one side and title changes for shared codes."""
    common = sorted(set(old) & set(new))
    return {
        "old_count": len(old),
        "new_count": len(new),
        "common": common,
        "only_old": sorted(set(old) - set(new)),
        "only_new": sorted(set(new) - set(old)),
        "retitled": {c: (old[c], new[c]) for c in common if old[c] != new[c]},
    }


def main(argv=None):
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s  %(message)s")
    parser = argparse.ArgumentParser(description="Compare O*NET codes between two OFLC archives")
    parser.add_argument("old", help="Older OFLC zip")
    parser.add_argument("new", help="Newer OFLC zip")
    parser.add_argument("--code", help="Show this O*NET code in both archives")
    parser.add_argument("--sample", type=int, default=5, help="How many codes to list per group")
    args = parser.parse_args(argv)

    old, new = read_onet_map(args.old), read_onet_map(args.new)
    diff = compare_onet_maps(old, new)

    print(f"{args.old} O*NET codes: {diff['old_count']}")
    print(f"{args.new} O*NET codes: {diff['new_count']}")
    if args.code:
        print(f"\n{args.code} in old: {old.get(args.code)}")
        print(f"{args.code} in new: {new.get(args.code)}")

    print(f"\nCommon codes: {len(diff['common'])}")
    print(f"Only in old: {len(diff['only_old'])}")
    print(f"Only in new: {len(diff['only_new'])}")
    print(f"Retitled: {len(diff['retitled'])}")
    if diff["only_old"]:
        print(f"\nRemoved (sample): {diff['only_old'][:args.sample]}")
    if diff["only_new"]:
        print(f"\nNew (sample): {diff['only_new'][:args.sample]}")
    for code, (before, after) in list(diff["retitled"].items())[:args.sample]:
        print(f"  {code}: '{before}' -> '{after}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
