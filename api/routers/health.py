"""Health and readiness check endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_redis
from storage.redis_client import RedisClient

router = APIRouter()


@router.get("/health")
def health():
    """Liveness probe: 200 while the process is alive."""
    return {"status": "ok"}


@router.get("/ready")
def ready(redis: RedisClient | None = Depends(get_redis)):
    """Readiness probe. Redis is only checked when ticks are stored there."""
    if redis is None:
        return {"status": "ready", "tick_store": "memory"}
    if not redis.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "redis": "unreachable"},
        )
    return {
        "status": "ready",
        "tick_store": "redis",
        "circuit_breaker": redis.circuit_state,
    }
