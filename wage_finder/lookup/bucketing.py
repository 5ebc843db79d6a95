"""
Bucket every wage area of an occupation by the highest prevailing-wage level
a salary meets.

Levels are checked from 4 down to 1; a location whose Level 1 exceeds the
salary lands in tier 0 ("below threshold"). Tiers partition the locations.
"""

import re
from typing import Dict, List, Union

import numpy as np
import pandas as pd

from wage_finder.lookup.errors import InvalidSalaryError
from wage_finder.normalize.mappings import collation_key

LEVEL_COLS = ["l1", "l2", "l3", "l4"]
TIERS = [4, 3, 2, 1, 0]

WAGE_LEVELS = {
    1: {"label": "Level 1", "percentile": "17th", "desc": "Entry Level"},
    2: {"label": "Level 2", "percentile": "34th", "desc": "Qualified"},
    3: {"label": "Level 3", "percentile": "50th", "desc": "Experienced"},
    4: {"label": "Level 4", "percentile": "67th", "desc": "Fully Competent"},
}


def parse_salary(text: Union[str, float, int]) -> float:
    """'$120,000' -> 120000.0; rejects non-numeric and non-positive input."""
    cleaned = re.sub(r"[$,\s]", "", str(text if text is not None else ""))
    try:
        value = float(cleaned)
    except ValueError:
        raise InvalidSalaryError("Please enter a valid salary")
    if not np.isfinite(value) or value <= 0:
        raise InvalidSalaryError("Please enter a valid salary")
    return value


def format_currency(value: float) -> str:
    """120000 -> '$120,000'."""
    return f"${value:,.0f}"


def wage_range(location: Dict, level: int) -> str:
    """Display range of a location for the given tier."""
    if level == 4:
        return f"{format_currency(location['l4'])}+"
    if level == 0:
        return f"below {format_currency(location['l1'])}"
    return f"{format_currency(location[f'l{level}'])} – {format_currency(location[f'l{level + 1}'])}"


def assign_tiers(wages: pd.DataFrame, salary: float) -> pd.Series:
    """Tier per wage row: highest level whose threshold the salary meets, else 0."""
    conditions = [salary >= wages[f"l{level}"] for level in (4, 3, 2, 1)]
    return pd.Series(np.select(conditions, [4, 3, 2, 1], default=0), index=wages.index)


def bucket_locations(dataset: dict, occupation: Union[Dict[str, str], str], salary: float) -> dict:
    """Categorize every location of an occupation's base SOC code.

    Args:
        dataset: Loaded dataset (year, occupations, areas, wages)
        occupation: Occupation entry (its base code "c" is used) or a SOC code
        salary: Annual salary, already validated

    Returns:
        {"salary", "occupation", "total", "levels": {4: [...], ..., 0: [...]}}
        with each tier's locations sorted by area name
    """
    soc_code = occupation["c"] if isinstance(occupation, dict) else occupation
    rows = [w for w in dataset["wages"] if w["s"] == soc_code]
    levels: Dict[int, List[dict]] = {tier: [] for tier in TIERS}

    if rows:
        wages = pd.DataFrame(rows, columns=["a"] + LEVEL_COLS)
        wages["area"] = [dataset["areas"][a] for a in wages["a"]]
        wages["tier"] = assign_tiers(wages, salary)
        for tier, group in wages.groupby("tier", sort=False):
            locations = [
                {"area": area, "l1": int(l1), "l2": int(l2), "l3": int(l3), "l4": int(l4)}
                for area, l1, l2, l3, l4 in zip(group["area"], group["l1"], group["l2"], group["l3"], group["l4"])
            ]
            levels[int(tier)] = sorted(locations, key=lambda loc: collation_key(loc["area"]))

    return {
        "salary": salary,
        "occupation": occupation,
        "total": len(rows),
        "levels": levels,
    }


def displayed_locations(result: dict, level: int, location_filter: str = "", sort_by: str = "name") -> List[dict]:
    """Locations of one tier as shown: optional area-name filter, name or wage order.

    Filtering only narrows the display; tier membership is never recomputed.
    """
    locations = result["levels"].get(level, [])
    if location_filter:
        needle = location_filter.lower()
        locations = [loc for loc in locations if needle in loc["area"].lower()]
    if sort_by == "wage":
        key = f"l{max(level, 1)}"
        locations = sorted(locations, key=lambda loc: loc[key])
    return list(locations)
