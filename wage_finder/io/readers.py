"""Helpers for config loading, path resolution and reading OFLC archives."""

import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd
import yaml

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_PATHS_CONFIG = REPO_ROOT / "configs" / "paths.yaml"
DEFAULT_LAYOUTS_DIR = REPO_ROOT / "configs" / "layouts"

ArchiveSource = Union[str, Path, bytes]


def load_paths_config(config_path: Union[str, Path] = DEFAULT_PATHS_CONFIG) -> Dict[str, str]:
    """Load paths from YAML config file.

    Args:
        config_path: Path to paths.yaml

    Returns:
        Dictionary with source_dir and output_dir
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Paths config not found: {config_path}")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    for key in ("source_dir", "output_dir"):
        if key not in config:
            raise KeyError(f"{key} not defined in {config_path}")
    return config


def load_layout(layouts_dir: Union[str, Path, None] = None, name: str = "oflc.yml") -> dict:
    """Load the OFLC layout registry (file patterns, header aliases, wage rules)."""
    layout_path = Path(layouts_dir or DEFAULT_LAYOUTS_DIR) / name
    if not layout_path.exists():
        raise FileNotFoundError(f"Layout registry not found: {layout_path}")
    with open(layout_path, "r") as f:
        return yaml.safe_load(f)


def resolve_output_path(output_dir: Union[str, Path], *parts: str) -> Path:
    """Build a path within the output directory, creating parent dirs."""
    path = Path(output_dir) / Path(*parts)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def list_files_by_pattern(directory: Path, pattern: str) -> List[Path]:
    """List files matching glob pattern, sorted by name."""
    directory = Path(directory)
    if not directory.exists():
        logger.warning("Directory does not exist: %s", directory)
        return []
    return sorted(p for p in directory.glob(pattern) if p.is_file())


# ---------------------------------------------------------------------------
# Archive access
# ---------------------------------------------------------------------------

def open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """Open a zip archive from a filesystem path or raw bytes."""
    if isinstance(source, (bytes, bytearray)):
        return zipfile.ZipFile(io.BytesIO(source), "r")
    return zipfile.ZipFile(source, "r")


def find_member(names: List[str], patterns: List[str]) -> Optional[str]:
    """Return the first .csv member matching any pattern, patterns in priority order.

    Matching is a case-insensitive substring test on the member name.
    """
    for pattern in patterns:
        needle = pattern.lower()
        for name in names:
            if needle in name.lower() and name.lower().endswith(".csv"):
                return name
    return None


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_csv_text(text: str) -> pd.DataFrame:
    """Parse CSV text into an all-string DataFrame, skipping malformed records.

    Rows with too many fields are dropped, short rows are padded with "".
    Quotes inside an unquoted field are kept as literal text.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="skip",
            engine="python",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()

    df.columns = [str(c).strip() for c in df.columns]
    return df.fillna("")


def read_csv_member(zf: zipfile.ZipFile, name: str) -> pd.DataFrame:
    """Read one CSV member of an open archive."""
    with zf.open(name) as fh:
        raw = fh.read()
    df = read_csv_text(_decode(raw))
    logger.debug("Read %s: %d rows, columns=%s", name, len(df), list(df.columns))
    return df


def read_first_match(zf: zipfile.ZipFile, patterns: List[str]) -> Optional[pd.DataFrame]:
    """Read the first CSV member matching the pattern list, or None."""
    member = find_member(zf.namelist(), patterns)
    if member is None:
        return None
    logger.info("  Reading member: %s", member)
    return read_csv_member(zf, member)
