"""Bluetooth discovery backed by bleak.

The adapter runs each scan in a QThread worker and hands discovered devices
back to the GUI thread, where :mod:`hotcold.core` logs them.
"""

from .bleak_adapter import BleakAdapter, BleakAdapterProvider
from .discovery_worker import DiscoveryWorker

__all__ = ["BleakAdapter", "BleakAdapterProvider", "DiscoveryWorker"]
