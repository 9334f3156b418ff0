"""Price movement generators for the simulated tick feed."""

import random
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


class PriceWalk:
    """Gaussian random walk in relative terms, rounded to cents and kept above one cent."""

    def __init__(self, start: Decimal, volatility: float, rng: random.Random | None = None):
        self.price = start
        self.volatility = volatility
        self._rng = rng or random.Random()

    def step(self) -> Decimal:
        change = Decimal(str(self._rng.gauss(0.0, self.volatility)))
        moved = (self.price * (1 + change / 100)).quantize(CENT, rounding=ROUND_HALF_UP)
        self.price = max(moved, CENT)
        return self.price


def late_offset_ms(rng: random.Random, probability: float, max_delay_ms: int = 90_000) -> int:
    """Occasionally delay a tick's timestamp, sometimes past the 60s window."""
    if rng.random() < probability:
        return rng.randint(1, max_delay_ms)
    return 0
