from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'hotcold' can be imported
REPO_ROOT = Path(__file__).resolve().parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from hotcold.gui.application import main as run_gui_main


def main(argv: Sequence[str] | None = None) -> None:
    """
    Entry point for the HotCold desktop GUI.

    Parameters
    ----------
    argv:
        Command-line arguments to pass through to the GUI. If None, uses sys.argv.
    """
    if argv is None:
        argv = sys.argv
    # Ensure we pass a list, not a generic Sequence
    run_gui_main(list(argv))


if __name__ == "__main__":
    main(sys.argv)
