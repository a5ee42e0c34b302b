"""
Make the pipeline packages under src/ importable when running scripts from
the repository root without installing the project or setting PYTHONPATH.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent

SOURCE_PATHS = [
    ROOT / "src",
]

for path in SOURCE_PATHS:
    if path.exists() and str(path) not in sys.path:
        sys.path.insert(0, str(path))
