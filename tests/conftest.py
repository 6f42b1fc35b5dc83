"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`frostwind` package (e.g., `from frostwind.engine import GameEngine`) without
requiring an editable install in CI. The tests directory itself is added too
so the shared `support` helpers can be imported from any test package, and
the repository root for the `main` entrypoint.
"""

import sys
from pathlib import Path

TESTS_PATH = Path(__file__).resolve().parent
REPO_ROOT = TESTS_PATH.parent
SRC_PATH = REPO_ROOT / "src"
for path in (SRC_PATH, TESTS_PATH, REPO_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
