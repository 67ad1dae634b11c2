"""Runtime configuration loaded from YAML and command-line overrides."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml

from ..dataio.status_log import DEFAULT_LOG_FILENAME


@dataclass(slots=True)
class HotColdConfig:
    """
    Tuning knobs for the scan and the status log.

    The default scan length matches a classic Bluetooth inquiry (~12 s).
    """

    scan_timeout_s: float = 12.0
    log_filename: str = DEFAULT_LOG_FILENAME
    files_dir: Optional[Path] = None

    def sanitized(self) -> HotColdConfig:
        """Return a copy with derived limits applied."""
        files_dir = Path(self.files_dir).expanduser() if self.files_dir else None
        return HotColdConfig(
            scan_timeout_s=max(1.0, float(self.scan_timeout_s)),
            log_filename=_safe_log_filename(self.log_filename),
            files_dir=files_dir,
        )

    def with_overrides(self, **overrides: Any) -> HotColdConfig:
        """Return a sanitized copy with every non-``None`` override applied."""
        payload = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **payload).sanitized()


# Names that would make the log path point at a directory.
_UNUSABLE_FILENAMES = {"", ".", ".."}


def _safe_log_filename(value: Any) -> str:
    """Strip any directory part; fall back to the default for unusable names."""
    name = Path(str(value or "").strip()).name
    if name in _UNUSABLE_FILENAMES:
        return DEFAULT_LOG_FILENAME
    return name


def _section_keys(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Merge the ``scan:``/``log:`` sections of ``hotcold.yaml`` into flat keys.

    Inside a section the short spellings ``timeout_s`` and ``filename`` are
    accepted; flat top-level ``scan_timeout_s``/``log_filename`` win if both
    are present.
    """
    flat: MutableMapping[str, Any] = {}
    for key, value in data.items():
        if key in {"scan", "log"} and isinstance(value, Mapping):
            flat.update(value)
        else:
            flat[key] = value
    aliases = {"timeout_s": "scan_timeout_s", "filename": "log_filename"}
    for short, full in aliases.items():
        if short in flat:
            flat.setdefault(full, flat.pop(short))
    return flat


def config_from_mapping(data: Mapping[str, Any] | None) -> HotColdConfig:
    """Turn parsed YAML into a sanitized :class:`HotColdConfig`; stray keys are dropped."""
    settable = {f.name for f in fields(HotColdConfig)}
    flat = _section_keys(data or {})
    return HotColdConfig(**{k: v for k, v in flat.items() if k in settable}).sanitized()


def load_config(path: str | Path | None) -> HotColdConfig:
    """
    Read the settings file at ``path``.

    No path, or a path that does not exist, means "use the built-in defaults".
    An empty file is treated the same way. Anything other than a YAML mapping
    at the top level is a startup error.
    """
    if path is None or not Path(path).exists():
        return HotColdConfig()
    settings_path = Path(path)
    with settings_path.open("r", encoding="utf-8") as fh:
        document = yaml.safe_load(fh)
    if document is None:
        return HotColdConfig()
    if not isinstance(document, Mapping):
        raise ValueError(
            f"{settings_path} must contain a mapping of settings, "
            f"not {type(document).__name__}"
        )
    return config_from_mapping(document)
