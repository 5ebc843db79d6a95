"""Header alias resolution, wage parsing and SOC/O*NET code normalization."""

import re
import unicodedata
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

HOURS_PER_YEAR = 2080
HOURLY_THRESHOLD = 500

_CURRENCY_RE = r"[$,]"
_ONET_SUFFIX_RE = re.compile(r"\.\d{2}$")


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------

def resolve_header(columns: Iterable[str], aliases: List[str]) -> Optional[str]:
    """Find the actual column name using an alias list.

    Exact matches are tried first, then a case-insensitive pass.
    """
    columns = list(columns)
    for alias in aliases:
        if alias in columns:
            return alias

    cols_lower = {str(c).lower().strip(): c for c in columns}
    for alias in aliases:
        key = alias.lower().strip()
        if key in cols_lower:
            return cols_lower[key]
    return None


def resolve_headers(df: pd.DataFrame, aliases: Dict[str, List[str]], fields: List[str]) -> Dict[str, Optional[str]]:
    """Resolve several logical fields against one DataFrame's header, once per file."""
    return {field: resolve_header(df.columns, aliases.get(field, [field])) for field in fields}


def column_or_blank(df: pd.DataFrame, column: Optional[str]) -> pd.Series:
    """Stripped string values of a resolved column, or blanks when unresolved."""
    if column is None:
        return pd.Series([""] * len(df), index=df.index, dtype=object)
    return df[column].fillna("").astype(str).str.strip()


# ---------------------------------------------------------------------------
# Wage parsing
# ---------------------------------------------------------------------------

def round_half_up(values):
    return np.floor(np.asarray(values, dtype=float) + 0.5)


def parse_wage_series(values: pd.Series, hours_per_year: int = HOURS_PER_YEAR,
                      hourly_threshold: float = HOURLY_THRESHOLD) -> pd.Series:
    """Parse raw wage figures into integer annual dollars.

    '$45.00' -> 93600 (hourly), '120,000' -> 120000. Missing or unparsable
    values become 0. Values under hourly_threshold are treated as hourly
    rates and multiplied by hours_per_year; the rest are already annual.
    """
    cleaned = values.fillna("").astype(str).str.replace(_CURRENCY_RE, "", regex=True).str.strip()
    numbers = pd.to_numeric(cleaned, errors="coerce").fillna(0.0).astype(float)
    numbers = numbers.where(np.isfinite(numbers), 0.0)
    annual = np.where(numbers < hourly_threshold, numbers * hours_per_year, numbers)
    return pd.Series(round_half_up(annual).astype("int64"), index=values.index)


# ---------------------------------------------------------------------------
# Codes
# ---------------------------------------------------------------------------

def base_soc_code(onet_code: str) -> str:
    """Strip a trailing O*NET '.NN' suffix: '15-1243.01' -> '15-1243'."""
    return _ONET_SUFFIX_RE.sub("", str(onet_code).strip())


def is_generic_specialty(onet_code: str) -> bool:
    """True for the catch-all '.00' specialty of a base SOC code."""
    return str(onet_code).strip().endswith(".00")


# ---------------------------------------------------------------------------
# Collation
# ---------------------------------------------------------------------------

# Root-locale order of common punctuation and symbols
_PUNCT_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"


def _primary_weight(ch: str):
    if ch.isspace():
        return (0, 0)
    pos = _PUNCT_ORDER.find(ch)
    if pos >= 0:
        return (1, pos)
    if ch.isdigit():
        return (3, unicodedata.digit(ch, 0))
    if ch.isalpha():
        return (4, ch.casefold())
    return (2, ord(ch))


def collation_key(text: str):
    """Locale-style sort key for display names.

    Whitespace sorts before punctuation, then symbols, digits and letters.
    Accents and then case only break ties, lowercase first; the raw text
    makes the order total.
    """
    base, accents, case = [], [], []
    for ch in unicodedata.normalize("NFD", str(text)):
        if unicodedata.combining(ch):
            if accents:
                accents[-1] += ch
            continue
        base.append(_primary_weight(ch))
        accents.append("")
        case.append(1 if ch.isupper() else 0)
    return (tuple(base), tuple(accents), tuple(case), str(text))
