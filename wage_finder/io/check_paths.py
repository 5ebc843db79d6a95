"""CLI tool to check the configured source and output directories."""

import argparse
import sys
from pathlib import Path

from wage_finder.io.readers import DEFAULT_PATHS_CONFIG, load_layout, load_paths_config


def check_paths(config_path) -> int:
    """Validate source_dir, report discovered archives and create output_dir.

    Returns a process exit code.
    """
    try:
        config = load_paths_config(config_path)
    except (FileNotFoundError, KeyError) as e:
        print(f"ERROR: {e}")
        return 1

    source_dir = Path(config["source_dir"]).expanduser().resolve()
    output_dir = Path(config["output_dir"]).expanduser().resolve()

    print("=" * 60)
    print("PATH VALIDATION")
    print("=" * 60)
    print(f"\nsource_dir (absolute):\n  {source_dir}")
    print(f"\noutput_dir (absolute):\n  {output_dir}\n")

    print("Checking source_dir...")
    if not source_dir.is_dir():
        print(f"  ✗ ERROR: source_dir is not an existing directory: {source_dir}")
        return 1
    print("  ✓ OK: source_dir exists and is a directory")

    archive_glob = load_layout()["archives"]["glob"]
    archives = sorted(source_dir.glob(archive_glob))
    print(f"  Found {len(archives)} archive(s) matching {archive_glob}")
    for archive in archives:
        print(f"    - {archive.name}")

    print("\nChecking output_dir...")
    if output_dir.exists() and not output_dir.is_dir():
        print(f"  ✗ ERROR: output_dir exists but is not a directory: {output_dir}")
        return 1
    if not output_dir.exists():
        output_dir.mkdir(parents=True, exist_ok=True)
        print("  ✓ OK: output_dir created")
    else:
        print("  ✓ OK: output_dir exists and is a directory")

    print("\n" + "=" * 60)
    print("PATH VALIDATION COMPLETE")
    print("=" * 60)
    return 0


def main():
    parser = argparse.ArgumentParser(description="Check configured paths")
    parser.add_argument("--paths", default=str(DEFAULT_PATHS_CONFIG), help="Path to paths.yaml config")
    args = parser.parse_args()
    return check_paths(args.paths)


if __name__ == "__main__":
    sys.exit(main())
