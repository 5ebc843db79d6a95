"""Occupation search over a loaded dataset."""

from typing import Dict, List

import pandas as pd

MAX_RESULTS = 50
SEARCH_FIELDS = ["c", "t", "o"]


def build_search_index(occupations: List[Dict[str, str]]) -> pd.DataFrame:
    """Lowercased code, title and O*NET code per occupation, in dataset order."""
    index = pd.DataFrame(occupations, columns=SEARCH_FIELDS).fillna("")
    for col in SEARCH_FIELDS:
        index[col] = index[col].astype(str).str.lower()
    return index


def search_occupations(occupations: List[Dict[str, str]], query: str, limit: int = MAX_RESULTS,
                       index: pd.DataFrame = None) -> List[Dict[str, str]]:
    """Case-insensitive substring match on SOC code, title or O*NET code.

    Results keep dataset order (alphabetical by title) and are capped at limit.
    An index from build_search_index can be passed to avoid rebuilding it.
    """
    if not query or not occupations:
        return []
    if index is None:
        index = build_search_index(occupations)

    needle = query.lower()
    mask = pd.Series(False, index=index.index)
    for col in SEARCH_FIELDS:
        mask |= index[col].str.contains(needle, regex=False)
    return [occupations[i] for i in index.index[mask.to_numpy()][:limit]]
