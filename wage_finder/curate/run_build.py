"""CLI entrypoint for the wage dataset build.

Scans source_dir for OFLC_Wages_YYYY-YY.zip bundles and writes one
gzip-compressed dataset per fiscal year plus manifest.json into output_dir.

    python -m wage_finder.curate.run_build --paths configs/paths.yaml [--dry-run]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

from wage_finder.curate.archive_loader import extract_year_label, load_archive, read_onet_map
from wage_finder.curate.compact import write_dataset, write_manifest
from wage_finder.curate.onet_merge import collect_onet_fallback
from wage_finder.io.readers import DEFAULT_PATHS_CONFIG, list_files_by_pattern, load_layout, load_paths_config

logger = logging.getLogger(__name__)


def discover_archives(source_dir: Path, layout: dict) -> List[Dict]:
    """Find source archives and derive their year labels and output names."""
    archives_cfg = layout["archives"]
    plan = []
    for path in list_files_by_pattern(source_dir, archives_cfg["glob"]):
        label = extract_year_label(path.name, archives_cfg["year_pattern"])
        plan.append({
            "path": path,
            "label": label,
            "file": archives_cfg["output_template"].format(label=label),
        })
    return plan


def build_all(source_dir, output_dir, layout: dict = None, dry_run: bool = False) -> List[Dict[str, str]]:
    """Process every archive in source_dir sequentially.

    Archives that cannot be read or hold no wage CSV are logged and skipped.

    Returns:
        Manifest entries of the datasets written (planned entries in dry-run)
    """
    layout = layout or load_layout()
    source_dir = Path(source_dir)
    plan = discover_archives(source_dir, layout)

    if not plan:
        logger.warning("No OFLC zip files found in %s", source_dir)
        folders = sorted(p.name for p in source_dir.glob("OFLC*") if p.is_dir())
        if folders:
            logger.warning("Found extracted folders (zip them to process): %s", folders)
        return []

    print(f"Found {len(plan)} archive(s):")
    for item in plan:
        print(f"  {item['label']}: {item['path'].name} -> {item['file']}")

    if dry_run:
        print(f"\nDRY RUN: Would write {len(plan)} dataset(s) and manifest to {output_dir}")
        print("No files were created.")
        return [{"label": item["label"], "file": item["file"]} for item in plan]

    # Newest year first so its specialty titles take precedence
    newest_first = sorted(plan, key=lambda item: item["label"], reverse=True)
    fallback_onet = collect_onet_fallback(read_onet_map(item["path"], layout) for item in newest_first)
    logger.info("Shared O*NET map: %d code(s) across %d archive(s)", len(fallback_onet), len(plan))

    entries = []
    failed = []
    for item in plan:
        dataset = load_archive(item["path"], item["label"], fallback_onet=fallback_onet, layout=layout)
        if dataset is None:
            failed.append(item["path"].name)
            continue
        entries.append(write_dataset(dataset, output_dir, layout["archives"]["output_template"]))

    if failed:
        logger.warning("Skipped %d archive(s): %s", len(failed), ", ".join(failed))
    write_manifest(entries, output_dir, layout["archives"]["manifest_name"])
    return entries


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")

    parser = argparse.ArgumentParser(description="Build compressed wage datasets from OFLC archives")
    parser.add_argument("--paths", default=str(DEFAULT_PATHS_CONFIG), help="Path to paths.yaml config")
    parser.add_argument("--dry-run", action="store_true", help="List archives and planned outputs without writing")
    args = parser.parse_args()

    try:
        config = load_paths_config(args.paths)
    except (FileNotFoundError, KeyError) as e:
        print(f"ERROR: {e}")
        return 1

    print("=" * 60)
    print("WAGE DATASET BUILD" + (" [DRY RUN]" if args.dry_run else ""))
    print("=" * 60)
    print(f"Source dir: {config['source_dir']}")
    print(f"Output dir: {config['output_dir']}")
    print()

    entries = build_all(config["source_dir"], config["output_dir"], dry_run=args.dry_run)

    print()
    print("=" * 60)
    print(f"DONE: {len(entries)} dataset(s)" + (" planned" if args.dry_run else " written"))
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
