from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from roomi.api.main import api_router
from roomi.services.redis_service import redis_service

from .config import settings
from .logging import configure_logging
from .version import __version__

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    logger.info(f"Roomi matching API {__version__} starting (pool size {settings.CANDIDATE_POOL_SIZE})")
    yield
    try:
        await redis_service.close()
    except Exception as exc:
        logger.warning(f"Failed to close Redis client: {exc}")


app = FastAPI(
    title="Roomi",
    description="Roommate matching engine: candidate ranking, likes, passes and matches",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
