"""
OFLC wage archive loader.

Reads one zipped OFLC bundle (Geography, oes_soc_occs, Onet_occs and
ALC_Export/EDC_Export CSVs), resolves headers through the layout registry
aliases, annualizes the four wage levels and returns a compact dataset dict:

    {"year": "2025-26",
     "occupations": [{"c": "15-1252", "t": "Software Developers"}, ...],
     "areas": ["Abilene, TX", ...],
     "wages": [{"s": "15-1252", "a": 0, "l1": ..., "l4": ...}, ...]}

An archive without a wage CSV yields None so the caller can skip it.
"""

import logging
import re
import zipfile
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from wage_finder.curate.compact import compact_wages, intern_areas
from wage_finder.curate.onet_merge import build_occupations, merge_onet_maps
from wage_finder.io.readers import ArchiveSource, load_layout, open_archive, read_first_match
from wage_finder.normalize.mappings import (
    HOURLY_THRESHOLD,
    HOURS_PER_YEAR,
    column_or_blank,
    parse_wage_series,
    resolve_headers,
)

logger = logging.getLogger(__name__)

LEVEL_FIELDS = ["level1", "level2", "level3", "level4"]


def extract_year_label(file_name: str, pattern: str = r"(\d{4}-\d{2})") -> str:
    """'OFLC_Wages_2025-26.zip' -> '2025-26'; falls back to the file stem."""
    match = re.search(pattern, file_name)
    if match:
        return match.group(1)
    return Path(file_name).stem


def build_lookup(df: Optional[pd.DataFrame], aliases: dict, code_field: str, name_field: str) -> Dict[str, str]:
    """Build a code -> name map from a lookup CSV; later rows win."""
    if df is None or df.empty:
        return {}
    cols = resolve_headers(df, aliases, [code_field, name_field])
    if cols[code_field] is None or cols[name_field] is None:
        logger.warning(
            "  Could not resolve %s/%s columns. Available: %s",
            code_field, name_field, list(df.columns)[:20],
        )
        return {}
    codes = column_or_blank(df, cols[code_field])
    names = column_or_blank(df, cols[name_field])
    return {c: n for c, n in zip(codes, names) if c and n}


def _onet_lookup(zf: zipfile.ZipFile, layout: dict) -> Dict[str, str]:
    onet_df = read_first_match(zf, layout["file_patterns"]["onet"])
    return build_lookup(onet_df, layout["aliases"], "onet_code", "onet_title")


def read_onet_map(source: ArchiveSource, layout: dict = None) -> Dict[str, str]:
    """O*NET code -> title map of a single archive ({} when absent or unreadable)."""
    layout = layout or load_layout()
    try:
        with open_archive(source) as zf:
            return _onet_lookup(zf, layout)
    except zipfile.BadZipFile as e:
        logger.error("Cannot open archive %s: %s", _describe(source), e)
        return {}


def normalize_wage_rows(wage_df: pd.DataFrame, layout: dict) -> pd.DataFrame:
    """Resolve wage columns and annualize levels.

    Returns a frame with area, s, l1..l4, filtered to rows with both codes
    present and l2 > 0.
    """
    rules = layout.get("wages", {})
    hours = rules.get("hours_per_year", HOURS_PER_YEAR)
    threshold = rules.get("hourly_threshold", HOURLY_THRESHOLD)

    cols = resolve_headers(wage_df, layout["aliases"], ["area_code", "soc_code"] + LEVEL_FIELDS)
    unresolved = [f for f, c in cols.items() if c is None]
    if unresolved:
        logger.warning("  Unresolved wage columns: %s", unresolved)

    rows = pd.DataFrame({
        "area": column_or_blank(wage_df, cols["area_code"]),
        "s": column_or_blank(wage_df, cols["soc_code"]),
    })
    for i, field in enumerate(LEVEL_FIELDS, start=1):
        rows[f"l{i}"] = parse_wage_series(column_or_blank(wage_df, cols[field]), hours, threshold)

    keep = (rows["s"] != "") & (rows["area"] != "") & (rows["l2"] > 0)
    dropped = int((~keep).sum())
    if dropped:
        logger.info("  Dropped %d wage row(s) without SOC/area or with Level2 <= 0", dropped)
    return rows[keep].reset_index(drop=True)


def load_archive(source: ArchiveSource, year_label: str, fallback_onet: Dict[str, str] = None,
                 layout: dict = None) -> Optional[dict]:
    """Build one fiscal year's dataset from a zipped OFLC bundle.

    Args:
        source: Path to the zip or its raw bytes
        year_label: Fiscal year label, e.g. "2025-26"
        fallback_onet: O*NET codes from other archives, used for codes this
            archive does not define
        layout: Layout registry (defaults to configs/layouts/oflc.yml)

    Returns:
        Dataset dict, or None when the archive holds no wage CSV
    """
    layout = layout or load_layout()
    patterns = layout["file_patterns"]
    aliases = layout["aliases"]
    logger.info("Processing %s...", _describe(source))

    try:
        zf = open_archive(source)
    except zipfile.BadZipFile as e:
        logger.error("Cannot open archive %s: %s", _describe(source), e)
        return None

    with zf:
        wage_df = read_first_match(zf, patterns["wages"])
        if wage_df is None:
            logger.error("Could not find wage data file in %s", _describe(source))
            return None
        geo_df = read_first_match(zf, patterns["geography"])
        soc_df = read_first_match(zf, patterns["soc"])
        local_onet = _onet_lookup(zf, layout)

    area_map = build_lookup(geo_df, aliases, "area_code", "area_name")
    soc_map = build_lookup(soc_df, aliases, "soc_code", "soc_title")
    onet_map = merge_onet_maps(local_onet, fallback_onet)
    logger.info("  Areas: %d, Occupations: %d, O*NET codes: %d", len(area_map), len(soc_map), len(onet_map))

    rows = normalize_wage_rows(wage_df, layout)
    rows["n"] = rows["area"].map(area_map).fillna(rows["area"])

    occupations = build_occupations(soc_map, pd.unique(rows["s"]), onet_map)
    areas, area_index = intern_areas(rows["n"])
    wages = compact_wages(rows, area_index)

    logger.info(
        "  Processed: %d wage records, %d occupations, %d areas",
        len(wages), len(occupations), len(areas),
    )
    return {
        "year": year_label,
        "occupations": occupations,
        "areas": areas,
        "wages": wages,
    }


def _describe(source: ArchiveSource) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(source)
