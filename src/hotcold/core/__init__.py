"""Core scan flow: discovery records, the scan state machine and view sync.

Nothing in this package imports Qt or bleak; the adapter, the enable prompt
and the display surface are injected so the flow can be driven by the GUI in
:mod:`hotcold.gui` or by test doubles.
"""

from .models import DiscoveryRecord
from .scan_coordinator import (
    Adapter,
    AdapterProvider,
    DiscoveryChannel,
    DiscoveryListener,
    ScanCoordinator,
    ScanState,
)
from .view_sync import DisplaySurface, ViewSync

__all__ = [
    "DiscoveryRecord",
    "Adapter",
    "AdapterProvider",
    "DiscoveryChannel",
    "DiscoveryListener",
    "ScanCoordinator",
    "ScanState",
    "DisplaySurface",
    "ViewSync",
]
