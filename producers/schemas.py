"""Canonical tick and statistics schemas shared by the API, consumer and producer."""

from decimal import Decimal

from pydantic import BaseModel, Field

from processor.statistics import Statistics
from processor.tick import Tick


class TickEvent(BaseModel):
    timestamp: int = Field(description="Unix epoch in milliseconds")
    price: Decimal

    @classmethod
    def from_tick(cls, tick: Tick) -> "TickEvent":
        return cls(timestamp=tick.timestamp, price=tick.price)

    def to_tick(self) -> Tick:
        return Tick(timestamp=self.timestamp, price=self.price)

    def to_message(self) -> dict:
        """Wire form: price travels as a string so no precision is lost."""
        return {"timestamp": self.timestamp, "price": str(self.price)}


class StatisticsView(BaseModel):
    min: Decimal | None
    max: Decimal | None
    sum: Decimal
    avg: Decimal
    count: int
    start_timestamp: int = 0

    @classmethod
    def from_statistics(cls, statistics: Statistics, start_timestamp: int = 0) -> "StatisticsView":
        return cls(
            min=statistics.min_val,
            max=statistics.max_val,
            sum=statistics.total,
            avg=statistics.avg,
            count=statistics.count,
            start_timestamp=start_timestamp,
        )

    def to_message(self) -> dict:
        return {
            "min": None if self.min is None else str(self.min),
            "max": None if self.max is None else str(self.max),
            "sum": str(self.sum),
            "avg": str(self.avg),
            "count": self.count,
            "start_timestamp": self.start_timestamp,
        }
