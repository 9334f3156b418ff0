"""Rolling window statistics endpoint."""

from typing import Callable

from fastapi import APIRouter, Depends

from api.dependencies import get_aggregator, get_clock
from processor.aggregator import StatisticsAggregator
from producers.schemas import StatisticsView

router = APIRouter()


@router.get("/statistics", response_model=StatisticsView)
def get_statistics(
    aggregator: StatisticsAggregator = Depends(get_aggregator),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Min, max, sum, avg and count of the ticks from the last 60 seconds."""
    snapshot = aggregator.refresh(clock())
    return StatisticsView.from_statistics(snapshot.statistics, snapshot.start_timestamp)
