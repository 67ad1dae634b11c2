"""Adapter-enable and discovery state machine feeding the status log."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from ..dataio.status_log import LogStore
from .models import DiscoveryRecord

logger = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    AWAITING_ADAPTER_ENABLE = "awaiting_adapter_enable"
    SCANNING = "scanning"


class Adapter(Protocol):
    def is_enabled(self) -> bool: ...

    def start_discovery(self) -> bool: ...

    def cancel_discovery(self) -> None: ...


class AdapterProvider(Protocol):
    def get_default_adapter(self) -> Optional[Adapter]: ...


class DiscoveryListener(Protocol):
    def on_device_discovered(self, record: DiscoveryRecord) -> None: ...


class DiscoveryChannel(Protocol):
    def register_listener(self, listener: DiscoveryListener) -> None: ...

    def unregister_listener(self, listener: DiscoveryListener) -> None: ...


class ScanCoordinator:
    """
    Drive a one-shot discovery scan and log every device it reports.

    Flow: ``request_scan`` -> (optional enable prompt via ``request_enable``,
    answered by ``on_adapter_enable_result``) -> ``start_discovery``. Devices
    arrive later through the discovery channel as ``on_device_discovered``.

    Discovery completion is tracked only so ``teardown`` knows whether a
    cancel is needed; the state stays ``SCANNING`` until the next request.
    """

    def __init__(
        self,
        adapter_provider: AdapterProvider,
        log_store: LogStore,
        *,
        request_enable: Callable[[], None],
        channel: DiscoveryChannel | None = None,
        status: Callable[[str], None] | None = None,
    ) -> None:
        self._provider = adapter_provider
        self._log_store = log_store
        self._request_enable = request_enable
        self._channel = channel
        self._status = status
        self._adapter: Optional[Adapter] = None
        self._state = ScanState.IDLE
        self._discovery_started = False

        if self._channel is not None:
            self._channel.register_listener(self)

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def discovery_started(self) -> bool:
        """True while a successfully started scan has not reported completion."""
        return self._discovery_started

    # ------------------------------------------------------------ operations
    def request_scan(self) -> None:
        """Make sure the adapter is enabled, then start discovery."""
        self._adapter = self._provider.get_default_adapter()
        if self._adapter is None:
            logger.error("No Bluetooth support.")
            self._report("Bluetooth is not supported on this system.")
            self._state = ScanState.IDLE
            return

        logger.info("Have Bluetooth support.")
        if not self._adapter.is_enabled():
            logger.info("Bluetooth not enabled -- requesting enable.")
            self._state = ScanState.AWAITING_ADAPTER_ENABLE
            self._request_enable()
            return

        logger.info("Bluetooth is already enabled.")
        self.start_discovery()

    def on_adapter_enable_result(self, granted: bool) -> None:
        if self._state is not ScanState.AWAITING_ADAPTER_ENABLE:
            logger.debug("Ignoring adapter enable result in state %s", self._state.value)
            return

        if granted:
            logger.info("Bluetooth enable request granted.")
            self.start_discovery()
            return

        logger.error("Bluetooth enable request denied.")
        self._report("Bluetooth was not enabled; scan cancelled.")
        self._state = ScanState.IDLE

    def start_discovery(self) -> None:
        if self._adapter is None:
            self._adapter = self._provider.get_default_adapter()
        if self._adapter is None:
            self._report("Bluetooth is not supported on this system.")
            self._state = ScanState.IDLE
            return

        self._discovery_started = bool(self._adapter.start_discovery())
        logger.debug("start_discovery returned %s", self._discovery_started)
        self._state = ScanState.SCANNING
        if self._discovery_started:
            self._report("Scanning for Bluetooth devices...")
        else:
            self._report("Bluetooth discovery could not be started.")

    def on_device_discovered(self, record: DiscoveryRecord) -> None:
        self._log_store.append(record.to_log_entry(), persist=True)

    def on_discovery_finished(self) -> None:
        # TODO: return to IDLE here once the product decision on scan completion is made.
        self._discovery_started = False
        logger.info("Bluetooth discovery finished.")

    def teardown(self) -> None:
        """Cancel an unfinished scan and stop listening for devices."""
        if self._adapter is not None and self._discovery_started:
            try:
                self._adapter.cancel_discovery()
            except Exception:
                logger.debug("Ignoring failure to cancel discovery", exc_info=True)
        self._discovery_started = False

        if self._channel is not None:
            self._channel.unregister_listener(self)
            self._channel = None

    # --------------------------------------------------------------- helpers
    def _report(self, message: str) -> None:
        if self._status is not None:
            self._status(message)
