"""Tick: a single timestamped price observation."""

from dataclasses import dataclass
from decimal import Decimal

WINDOW_MS = 60_000  # trailing window length


@dataclass(frozen=True, slots=True)
class Tick:
    timestamp: int  # epoch millis
    price: Decimal

    def is_fresh(self, current_timestamp: int) -> bool:
        """True while the tick still belongs to the window ending at `current_timestamp`."""
        return current_timestamp - WINDOW_MS <= self.timestamp
