"""Shared dataclasses for discovery results."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DiscoveryRecord:
    """One device reported by a discovery scan (at most once per scan)."""

    name: Optional[str]
    address: str
    rssi: Optional[int] = None

    def to_log_entry(self) -> str:
        """Render as the three-line status log entry ``name/address/rssi``."""
        return f"{self.name}\n{self.address}\n{self.rssi}\n"
