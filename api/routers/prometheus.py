"""Prometheus-compatible metrics endpoint."""

import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter()

CIRCUIT_STATES = {"closed": 0, "open": 1, "half_open": 2}


@router.get("/metrics")
def prometheus_metrics(request: Request):
    """Expose window and process metrics in Prometheus text exposition format."""
    state = request.app.state
    window_size, window_fresh = state.aggregator.window_metrics(state.clock())
    uptime = time.time() - state.start_time

    lines = [
        "# HELP tick_window_size Ticks currently held in the 60s window",
        "# TYPE tick_window_size gauge",
        f"tick_window_size {window_size}",
        "",
        "# HELP tick_window_fresh Whether the window needs no eviction at the current time (1) or not (0)",
        "# TYPE tick_window_fresh gauge",
        f"tick_window_fresh {int(window_fresh)}",
        "",
        "# HELP api_uptime_seconds Seconds since API start",
        "# TYPE api_uptime_seconds gauge",
        f"api_uptime_seconds {uptime:.1f}",
    ]
    if state.redis is not None:
        lines += [
            "",
            "# HELP redis_circuit_breaker_state Circuit breaker state (0=closed, 1=open, 2=half_open)",
            "# TYPE redis_circuit_breaker_state gauge",
            f"redis_circuit_breaker_state {CIRCUIT_STATES.get(state.redis.circuit_state, 0)}",
        ]
    return PlainTextResponse("\n".join(lines) + "\n", media_type="text/plain; version=0.0.4")
