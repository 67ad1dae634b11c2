"""HotCold: toggle a Bluetooth discovery scan and keep a persistent status log."""

__version__ = "0.1.0"
