"""
Shared fixtures: synthetic OFLC bundles built in memory or under tmp_path.
"""
import gzip
import io
import json
import zipfile
from pathlib import Path

import pytest

GEOGRAPHY_CSV = """Area,AreaName,StateAb,CountyTownName
12345,"San Jose-Sunnyvale-Santa Clara, CA",CA,Santa Clara
12345,"San Jose-Sunnyvale-Santa Clara, CA",CA,San Benito
23456,"Austin-Round Rock, TX",TX,Travis
34567,"Abilene, TX",TX,Taylor
"""

SOC_CSV = """soccode,Title
15-1243,Database Architects
15-1252,Software Developers
11-1011,Chief Executives
"""

ONET_CSV = """OnetCode,OnetTitle
15-1243.00,Database Architects
15-1243.01,Data Warehousing Specialists
15-1252.00,Software Developers
13-1111.00,Management Analysts
"""

WAGES_CSV = """Area,SocCode,GeoLvl,Level1,Level2,Level3,Level4,Average,Label
12345,15-1243,1,45.00,55.00,65.00,75.00,60.00,
23456,15-1243,1,"$80,000","$95,000","$110,000","$130,000",,
34567,15-1243,1,20.00,0,30.00,40.00,,
99999,15-1252,1,50.00,60.00,70.00,80.00,,
12345,15-1252,1,52.00,62.00,72.00,82.00,,
,15-1252,1,52.00,62.00,72.00,82.00,,
23456,15-1252,1,52.00,62.00,72.00,82.00,,,extra,fields,here
"""

DEFAULT_MEMBERS = {
    "OFLC_Wages/Geography.csv": GEOGRAPHY_CSV,
    "OFLC_Wages/oes_soc_occs.csv": SOC_CSV,
    "OFLC_Wages/Onet_occs.csv": ONET_CSV,
    "OFLC_Wages/ALC_Export.csv": WAGES_CSV,
    "OFLC_Wages/ReadMe.txt": "OFLC wage data\n",
}


def build_zip(members: dict) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, text in members.items():
            zf.writestr(name, text)
    return buf.getvalue()


@pytest.fixture
def oflc_members():
    """Member name -> CSV text of a small but complete bundle."""
    return dict(DEFAULT_MEMBERS)


@pytest.fixture
def oflc_zip_bytes(oflc_members):
    return build_zip(oflc_members)


@pytest.fixture
def make_archive(tmp_path):
    """Factory writing a bundle into a source dir: make_archive(name, members=None) -> Path."""
    source_dir = tmp_path / "source"
    source_dir.mkdir(exist_ok=True)

    def _make(name: str, members: dict = None) -> Path:
        path = source_dir / name
        path.write_bytes(build_zip(DEFAULT_MEMBERS if members is None else members))
        return path

    return _make


@pytest.fixture
def sample_dataset():
    """A built dataset in its serialized shape."""
    return {
        "year": "2025-26",
        "occupations": [
            {"c": "15-1243", "t": "Data Warehousing Specialists", "o": "15-1243.01"},
            {"c": "15-1243", "t": "Database Architects"},
            {"c": "15-1252", "t": "Software Developers"},
        ],
        "areas": ["Abilene, TX", "Austin-Round Rock, TX", "San Jose-Sunnyvale-Santa Clara, CA"],
        "wages": [
            {"s": "15-1243", "a": 2, "l1": 93600, "l2": 114400, "l3": 135200, "l4": 156000},
            {"s": "15-1243", "a": 1, "l1": 80000, "l2": 95000, "l3": 110000, "l4": 130000},
            {"s": "15-1243", "a": 0, "l1": 60000, "l2": 70000, "l3": 80000, "l4": 90000},
            {"s": "15-1252", "a": 2, "l1": 108160, "l2": 128960, "l3": 149760, "l4": 170560},
        ],
    }


@pytest.fixture
def zip_builder():
    return build_zip


@pytest.fixture
def data_dir(tmp_path, sample_dataset):
    """Output directory holding two built years and their manifest."""
    out = tmp_path / "data"
    out.mkdir()
    (out / "wages-2025-26.bin").write_bytes(gzip.compress(json.dumps(sample_dataset).encode("utf-8")))
    older = dict(sample_dataset, year="2024-25")
    (out / "wages-2024-25.bin").write_bytes(gzip.compress(json.dumps(older).encode("utf-8")))
    manifest = {"years": [
        {"label": "2024-25", "file": "wages-2024-25.bin"},
        {"label": "2025-26", "file": "wages-2025-26.bin"},
    ]}
    (out / "manifest.json").write_text(json.dumps(manifest, indent=2))
    return out
