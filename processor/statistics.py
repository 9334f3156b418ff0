"""Min/max/sum/count statistics over a set of ticks, with exact decimal arithmetic."""

from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, Inexact, InvalidOperation, Overflow
from typing import ClassVar, Iterable

from processor.tick import Tick

# Sums and differences under this context are never rounded; a result that
# cannot be represented exactly raises instead.
EXACT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, Inexact, Overflow],
)


@dataclass(frozen=True, slots=True)
class Statistics:
    """
    Summary of the live ticks in a window.

    Invariant: when count > 0, min_val <= max_val, both are prices of live ticks,
    and total is the exact sum of live prices. The empty value has no min/max.
    """

    min_val: Decimal | None
    max_val: Decimal | None
    total: Decimal
    count: int

    EMPTY: ClassVar["Statistics"]

    @classmethod
    def empty(cls) -> "Statistics":
        return cls.EMPTY

    @classmethod
    def of(cls, min_val: Decimal | None, max_val: Decimal | None, total: Decimal, count: int) -> "Statistics":
        return cls(min_val=min_val, max_val=max_val, total=total, count=count)

    @classmethod
    def calculate(cls, ticks: Iterable[Tick]) -> "Statistics":
        """Full O(n) scan."""
        min_val = max_val = None
        total = Decimal(0)
        count = 0
        for tick in ticks:
            price = tick.price
            if min_val is None or price < min_val:
                min_val = price
            if max_val is None or price > max_val:
                max_val = price
            total = EXACT.add(total, price)
            count += 1
        if count == 0:
            return cls.EMPTY
        return cls(min_val=min_val, max_val=max_val, total=total, count=count)

    def with_tick(self, tick: Tick, subtracted_sum: Decimal, new_count: int) -> "Statistics":
        """
        Fold one admitted tick into these statistics after `subtracted_sum` worth of
        evicted prices has been removed.

        Only sound when none of the evicted ticks was on the min/max boundary;
        the caller guarantees that, nothing is checked here.
        """
        price = tick.price
        return Statistics(
            min_val=price if self.min_val is None else min(self.min_val, price),
            max_val=price if self.max_val is None else max(self.max_val, price),
            total=EXACT.add(EXACT.subtract(self.total, subtracted_sum), price),
            count=new_count,
        )

    def is_edge(self, tick: Tick) -> bool:
        """True if the tick's price is the current min or max."""
        return tick.price == self.min_val or tick.price == self.max_val

    @property
    def avg(self) -> Decimal:
        if self.count == 0:
            return Decimal(0)
        return self.total / self.count


Statistics.EMPTY = Statistics(min_val=None, max_val=None, total=Decimal(0), count=0)
