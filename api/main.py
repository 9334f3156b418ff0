"""FastAPI application factory with lifespan management."""

import time
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from config import Settings, configure_logging
from processor.aggregator import StatisticsAggregator
from storage.redis_client import RedisClient
from storage.tick_store import create_tick_store
from api.routers import health, prometheus, statistics, ticks


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def create_app(settings: Settings | None = None, clock: Callable[[], int] = wall_clock_ms) -> FastAPI:
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application startup and shutdown."""
        log = configure_logging("api", settings.log_level)

        redis_client = RedisClient(settings) if settings.tick_store == "redis" else None

        app.state.settings = settings
        app.state.redis = redis_client
        app.state.tick_store = create_tick_store(settings, redis_client)
        app.state.aggregator = StatisticsAggregator(settings.log_level)
        app.state.clock = clock
        app.state.start_time = time.time()
        log.info("api_started", tick_store=settings.tick_store)

        yield

        if redis_client is not None:
            redis_client.close()
        log.info("api_stopped")

    app = FastAPI(
        title="Tick Statistics API",
        version="1.0.0",
        description="Rolling 60 second price statistics over a live tick feed",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(ticks.router)
    app.include_router(statistics.router)
    if settings.enable_prometheus:
        app.include_router(prometheus.router)

    return app


app = create_app()
