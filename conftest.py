"""
conftest.py  –  Root-level pytest configuration for prevailing-wage-finder.
Puts the repo root on sys.path so wage_finder and configs/ resolve when
pytest is run from a plain checkout.
"""
from __future__ import annotations

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))