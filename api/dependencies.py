"""FastAPI dependency injection."""

from typing import Callable

from fastapi import Request

from processor.aggregator import StatisticsAggregator
from storage.redis_client import RedisClient


def get_redis(request: Request) -> RedisClient | None:
    return request.app.state.redis


def get_tick_store(request: Request):
    return request.app.state.tick_store


def get_aggregator(request: Request) -> StatisticsAggregator:
    return request.app.state.aggregator


def get_clock(request: Request) -> Callable[[], int]:
    return request.app.state.clock
