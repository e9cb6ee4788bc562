"""Test package for leaguehub."""

from __future__ import annotations

import sys
from pathlib import Path


# Make src/ importable when pytest runs without an editable install.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if SRC_ROOT.exists():
    src_str = str(SRC_ROOT)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)
