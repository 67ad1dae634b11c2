"""Threaded worker that runs one bleak discovery scan and emits Qt signals."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from bleak import BleakScanner
from bleak.exc import BleakError
from PySide6.QtCore import QObject, Signal, Slot

from ..core.models import DiscoveryRecord

logger = logging.getLogger(__name__)


class DiscoveryWorker(QObject):
    """QObject-based worker that scans for nearby devices for a bounded time.

    It is meant to live in its own QThread with its own asyncio loop; every
    device is reported once per scan through the ``device_found`` signal,
    which Qt delivers to the GUI thread.
    """

    device_found = Signal(object)  # DiscoveryRecord
    error = Signal(str)
    finished = Signal()

    def __init__(
        self,
        timeout_s: float,
        *,
        scanner_factory: Callable[..., Any] = BleakScanner,
        poll_interval_s: float = 0.1,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._timeout_s = max(0.0, float(timeout_s))
        self._scanner_factory = scanner_factory
        self._poll_interval_s = max(0.001, float(poll_interval_s))
        self._stop_requested = False

    @Slot()
    def run(self) -> None:
        """Entry point for the QThread: scan until the timeout or ``stop``."""
        try:
            asyncio.run(self._scan())
        except BleakError as exc:
            logger.error("Bluetooth discovery failed: %s", exc)
            self.error.emit(str(exc))
        except Exception as exc:
            logger.exception("Bluetooth discovery failed")
            self.error.emit(str(exc))
        finally:
            self.finished.emit()

    @Slot()
    def stop(self) -> None:
        """Request the scan loop to terminate, even before ``run`` starts."""
        self._stop_requested = True

    async def _scan(self) -> None:
        seen: set[str] = set()

        def on_detection(device, advertisement_data) -> None:
            address = str(device.address)
            if address in seen:
                return
            seen.add(address)
            rssi = getattr(advertisement_data, "rssi", None)
            record = DiscoveryRecord(name=device.name, address=address, rssi=rssi)
            logger.debug("Discovered %s", record)
            self.device_found.emit(record)

        scanner = self._scanner_factory(detection_callback=on_detection)
        await scanner.start()
        try:
            loop = asyncio.get_running_loop()
            deadline = loop.time() + self._timeout_s
            while not self._stop_requested and loop.time() < deadline:
                await asyncio.sleep(self._poll_interval_s)
        finally:
            await scanner.stop()
        logger.info("Discovery scan reported %d device(s)", len(seen))
