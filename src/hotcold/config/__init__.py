"""Configuration objects and helpers for HotCold.

:mod:`app_config` resolves where the private status log lives, and
:mod:`runtime` loads ``hotcold.yaml`` (scan length, log file name) into a
typed dataclass that the GUI entry point merges with command-line overrides.
"""

from .app_config import AppPaths
from .runtime import HotColdConfig, config_from_mapping, load_config

__all__ = ["AppPaths", "HotColdConfig", "config_from_mapping", "load_config"]
