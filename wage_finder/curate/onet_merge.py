"""
Merge O*NET specialty codes into the occupation list of a wage dataset.

Base SOC codes carry the wages; O*NET specialties (15-1243.01, ...) only add
searchable titles that join back to their base code. Specialty coverage
differs between fiscal years, so an archive's own O*NET table can be topped
up from the other archives in the same build.
"""

import logging
from typing import Dict, Iterable, List, Mapping

from wage_finder.normalize.mappings import base_soc_code, collation_key, is_generic_specialty

logger = logging.getLogger(__name__)


def occupation_key(occ: Mapping[str, str]) -> str:
    """Uniqueness key: the O*NET code when present, else 'code|title'."""
    return occ.get("o") or f"{occ['c']}|{occ['t']}"


def merge_onet_maps(local: Mapping[str, str], fallback: Mapping[str, str] = None) -> Dict[str, str]:
    """Top up an archive's O*NET map with fallback entries for codes it lacks."""
    merged = dict(local)
    added = 0
    for code, title in (fallback or {}).items():
        if code not in merged:
            merged[code] = title
            added += 1
    if added:
        logger.info("  O*NET fallback added %d specialty code(s)", added)
    return merged


def collect_onet_fallback(onet_maps: Iterable[Mapping[str, str]]) -> Dict[str, str]:
    """Union of several O*NET maps; the first archive to define a code wins."""
    combined: Dict[str, str] = {}
    for onet_map in onet_maps:
        for code, title in onet_map.items():
            combined.setdefault(code, title)
    return combined


def dedupe_occupations(occupations: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """Drop entries sharing a key; the last one in title order survives."""
    ordered = sorted(occupations, key=lambda o: collation_key(o["t"]))
    survivors: Dict[str, Dict[str, str]] = {}
    for occ in ordered:
        survivors[occupation_key(occ)] = occ
    return sorted(survivors.values(), key=lambda o: collation_key(o["t"]))


def build_occupations(soc_titles: Mapping[str, str], wage_socs: Iterable[str],
                      onet_map: Mapping[str, str] = None) -> List[Dict[str, str]]:
    """Build the title-sorted occupation list for one dataset.

    Args:
        soc_titles: SOC code -> title lookup (may be incomplete)
        wage_socs: SOC codes that have at least one retained wage record
        onet_map: O*NET code -> specialty title

    Returns:
        List of {"c", "t"} base entries plus {"c", "t", "o"} specialty entries
    """
    occupations: List[Dict[str, str]] = []
    base_titles: Dict[str, str] = {}
    for code in wage_socs:
        if code in base_titles:
            continue
        title = soc_titles.get(code) or code
        base_titles[code] = title
        occupations.append({"c": code, "t": title})

    orphans = 0
    redundant = 0
    for onet_code, onet_title in (onet_map or {}).items():
        base = base_soc_code(onet_code)
        if base not in base_titles:
            orphans += 1
            continue
        if is_generic_specialty(onet_code) and onet_title == base_titles[base]:
            redundant += 1
            continue
        occupations.append({"c": base, "t": onet_title, "o": onet_code})

    result = dedupe_occupations(occupations)
    logger.info(
        "  Occupations: %d base, %d specialties (%d orphaned, %d redundant .00 dropped)",
        len(base_titles), len(result) - len(base_titles), orphans, redundant,
    )
    return result
