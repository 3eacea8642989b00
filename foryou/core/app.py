from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from foryou.api.main import api_router
from foryou.services.feed import feed_registry
from foryou.services.redis_service import redis_service

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    if not redis_service.configured:
        logger.warning("REDIS_URL is not set. Feeds will start with no favorites or play records.")
    yield
    await feed_registry.close()
    logger.info("Feed sessions closed")
    await redis_service.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="Ranks a user's favorites and play history into a For You row",
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
