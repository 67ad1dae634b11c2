"""Qt application entry point for the HotCold desktop GUI.

This module wires up argument parsing and logging, loads ``hotcold.yaml``,
builds the :class:`~hotcold.gui.main_window.MainWindow`, and starts the Qt
event loop. All GUI launches, whether through ``python main.py``,
``python -m hotcold.gui.application`` or the ``hotcold`` script, flow
through ``main()`` here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Tuple

from PySide6.QtWidgets import QApplication, QMainWindow

from .main_window import MainWindow
from ..config.app_config import AppPaths
from ..config.runtime import HotColdConfig, load_config
from ..tools.debug import configure_logging

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HotCold Bluetooth discovery logger")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML settings file (default: hotcold.yaml next to the package config)",
    )
    parser.add_argument(
        "--files-dir",
        type=str,
        default=None,
        help="Directory holding the status log (overrides HOTCOLD_FILES_DIR)",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        default=None,
        help="Length of one discovery scan in seconds (default: 12)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _parse_cli_args(
    argv: list[str],
) -> tuple[argparse.Namespace, list[str]]:
    parser = _build_arg_parser()
    args, qt_args = parser.parse_known_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    return args, qt_argv


def build_config(args: argparse.Namespace, app_paths: AppPaths | None = None) -> HotColdConfig:
    """Merge the YAML settings file with command-line overrides."""
    paths = app_paths or AppPaths()
    config_path = args.config if args.config else paths.settings_file
    config = load_config(config_path)
    return config.with_overrides(
        scan_timeout_s=args.scan_timeout,
        files_dir=args.files_dir,
    )


def create_app(
    argv: list[str] | None = None,
    *,
    config: HotColdConfig | None = None,
) -> Tuple[QApplication, QMainWindow]:
    """
    Create the QApplication and main HotCold window.

    Parameters
    ----------
    argv:
        Optional argument list to pass to :class:`QApplication`.

    Returns
    -------
    app:
        The QApplication instance (owned by caller).
    window:
        The main window instance, not yet shown.
    """
    qt_args = argv if argv is not None else sys.argv
    app = QApplication.instance() or QApplication(qt_args)
    window = MainWindow(config=config)
    return app, window


def main(argv: list[str] | None = None) -> None:
    raw_argv = argv if argv is not None else sys.argv
    args, qt_argv = _parse_cli_args(raw_argv)
    configure_logging(verbose=args.verbose)
    config = build_config(args)
    logger.debug("Starting HotCold with %s", config)

    app, win = create_app(qt_argv, config=config)
    win.show()
    raise SystemExit(app.exec())


if __name__ == "__main__":
    main()
