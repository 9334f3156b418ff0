"""Tick ingestion and lookup endpoints."""

from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_aggregator, get_clock, get_tick_store
from processor.aggregator import StatisticsAggregator
from producers.schemas import TickEvent

router = APIRouter()


@router.post(
    "/ticks",
    responses={
        201: {"description": "Tick counted in the current window"},
        204: {"description": "Tick stored but older than the window"},
    },
)
def post_tick(
    event: TickEvent,
    store=Depends(get_tick_store),
    aggregator: StatisticsAggregator = Depends(get_aggregator),
    clock: Callable[[], int] = Depends(get_clock),
):
    """Record a tick. 201 if it counts toward the current window, 204 if it is too old."""
    tick = event.to_tick()
    store.save(tick)
    if not aggregator.add(tick, clock()):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/ticks/{timestamp}", response_model=TickEvent)
def get_tick(timestamp: int, store=Depends(get_tick_store)):
    tick = store.find_by_timestamp(timestamp)
    if tick is None:
        raise HTTPException(status_code=404, detail=f"no tick at {timestamp}")
    return TickEvent.from_tick(tick)
