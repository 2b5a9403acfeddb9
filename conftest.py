"""
Project-wide PyTest bootstrap.

Puts every ``packages/*/src`` directory on ``sys.path`` so tests can import
the packages without an editable install.
"""

from pathlib import Path
import sys

ROOT = Path(__file__).parent.resolve()
_paths = [str(p) for p in sorted((ROOT / "packages").glob("*/src"))]
# Preserve order but ensure local paths take precedence
for _p in reversed(_paths):
    if _p not in sys.path:
        sys.path.insert(0, _p)

#     Fail early with a clear, readable message if a developer forgets the
#     dependency pin.
try:
    __import__("pytest_asyncio")
except ImportError as exc:
    raise RuntimeError(
        "pytest_asyncio is required for async tests – install the [test] extra."
    ) from exc
