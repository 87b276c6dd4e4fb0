"""Development entrypoint: run the command line front-end from a checkout."""

import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
_SRC_PATH = _ROOT / "src"
if _SRC_PATH.exists():
    src_str = str(_SRC_PATH)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from samanage.cli import main  # noqa: E402

__all__ = ["main"]


if __name__ == "__main__":
    main()
