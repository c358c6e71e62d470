from fastapi import APIRouter

from roomi.services.redis_service import redis_service

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness probe")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/redis", summary="Backing store connectivity")
async def redis_health() -> dict[str, str]:
    reachable = await redis_service.ping()
    return {"redis": "ok" if reachable else "unavailable"}
