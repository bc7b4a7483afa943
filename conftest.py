"""Pytest configuration.

Ensures that the repository root is importable so that the ``src`` and
``scripts`` packages resolve when tests run from a source checkout.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
