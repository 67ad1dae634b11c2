"""Bluetooth adapter capability backed by bleak.

:class:`BleakAdapterProvider` answers "is there a radio at all?",
:class:`BleakAdapter` answers "is it switched on?" and runs one-shot scans in
a :class:`~hotcold.bluetooth.discovery_worker.DiscoveryWorker` thread. The
adapter doubles as the device-discovery notification channel: registered
listeners get ``on_device_discovered`` on the GUI thread.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot

from ..core.models import DiscoveryRecord
from ..core.scan_coordinator import DiscoveryListener
from .discovery_worker import DiscoveryWorker

logger = logging.getLogger(__name__)

SYSFS_CLASS_ROOT = Path("/sys/class")

# Substrings of bleak error messages raised when the radio is switched off.
_POWERED_OFF_HINTS = ("turned off", "powered off", "not powered", "poweredoff")


def rfkill_bluetooth_blocked(rfkill_root: Path) -> Optional[bool]:
    """
    Return whether every bluetooth rfkill switch under ``rfkill_root`` is blocked.

    ``None`` means no bluetooth switch was found (state unknown).
    """
    if not rfkill_root.is_dir():
        return None
    states: list[bool] = []
    for entry in sorted(rfkill_root.iterdir()):
        try:
            kind = (entry / "type").read_text(encoding="utf-8").strip()
            if kind != "bluetooth":
                continue
            soft = (entry / "soft").read_text(encoding="utf-8").strip()
            hard = (entry / "hard").read_text(encoding="utf-8").strip()
        except OSError:
            continue
        states.append(soft == "1" or hard == "1")
    if not states:
        return None
    return all(states)


def has_bluetooth_controller(sysfs_root: Path = SYSFS_CLASS_ROOT) -> bool:
    """Return True when the host exposes a Bluetooth controller to bleak."""
    if not sys.platform.startswith("linux"):
        # WinRT and CoreBluetooth report a missing radio when the scan starts.
        return True
    bt_root = sysfs_root / "bluetooth"
    try:
        return any(bt_root.iterdir())
    except OSError:
        return False


class BleakAdapter(QObject):
    """Adapter and discovery channel used by :class:`~hotcold.core.ScanCoordinator`."""

    error_reported = Signal(str)
    discovery_running_changed = Signal(bool)

    def __init__(
        self,
        scan_timeout_s: float = 12.0,
        *,
        rfkill_root: Path = SYSFS_CLASS_ROOT / "rfkill",
        worker_factory: Callable[[float], DiscoveryWorker] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._scan_timeout_s = float(scan_timeout_s)
        self._rfkill_root = Path(rfkill_root)
        self._worker_factory = worker_factory or DiscoveryWorker
        self._listeners: list[DiscoveryListener] = []
        self._powered = True
        self._thread: Optional[QThread] = None
        self._worker: Optional[DiscoveryWorker] = None

    # ----------------------------------------------------------- capability
    def is_enabled(self) -> bool:
        blocked = rfkill_bluetooth_blocked(self._rfkill_root)
        if blocked:
            return False
        return self._powered

    def mark_enabled(self) -> None:
        """Record that the user switched the radio on."""
        self._powered = True

    def is_discovering(self) -> bool:
        return self._thread is not None

    def start_discovery(self) -> bool:
        if self._thread is not None:
            logger.info("Discovery already running; not restarting.")
            return True

        try:
            worker = self._worker_factory(self._scan_timeout_s)
            thread = QThread(self)
            worker.moveToThread(thread)

            worker.device_found.connect(self._on_device_found)
            worker.error.connect(self._on_worker_error)
            worker.finished.connect(self._on_worker_finished)

            thread.started.connect(worker.run)
            # quit() is thread-safe; a direct call lets wait() return on shutdown.
            worker.finished.connect(thread.quit, Qt.DirectConnection)
            worker.finished.connect(worker.deleteLater)
            thread.finished.connect(thread.deleteLater)

            self._worker = worker
            self._thread = thread
            thread.start()
        except Exception:
            logger.exception("Failed to start discovery thread")
            self._worker = None
            self._thread = None
            return False

        self.discovery_running_changed.emit(True)
        return True

    def cancel_discovery(self) -> None:
        worker = self._worker
        if worker is not None:
            worker.stop()

    def wait(self, timeout_ms: int = 2000) -> None:
        """Block until a running scan thread has exited (used on shutdown)."""
        thread = self._thread
        if thread is not None:
            thread.wait(timeout_ms)

    # -------------------------------------------------------------- channel
    def register_listener(self, listener: DiscoveryListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unregister_listener(self, listener: DiscoveryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ---------------------------------------------------------------- slots
    @Slot(object)
    def _on_device_found(self, record: DiscoveryRecord) -> None:
        for listener in list(self._listeners):
            listener.on_device_discovered(record)

    @Slot(str)
    def _on_worker_error(self, message: str) -> None:
        if any(hint in message.lower() for hint in _POWERED_OFF_HINTS):
            self._powered = False
        self.error_reported.emit(message)

    @Slot()
    def _on_worker_finished(self) -> None:
        self._worker = None
        self._thread = None
        self.discovery_running_changed.emit(False)
        for listener in list(self._listeners):
            finished = getattr(listener, "on_discovery_finished", None)
            if finished is not None:
                finished()


class BleakAdapterProvider:
    """Supply the default adapter, or ``None`` when no radio is present."""

    def __init__(
        self,
        scan_timeout_s: float = 12.0,
        *,
        sysfs_root: Path = SYSFS_CLASS_ROOT,
        parent: QObject | None = None,
    ) -> None:
        self._sysfs_root = Path(sysfs_root)
        self.adapter = BleakAdapter(
            scan_timeout_s,
            rfkill_root=self._sysfs_root / "rfkill",
            parent=parent,
        )

    def get_default_adapter(self) -> Optional[BleakAdapter]:
        if not has_bluetooth_controller(self._sysfs_root):
            logger.error("No Bluetooth controller found under %s", self._sysfs_root)
            return None
        return self.adapter
