from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cinelog.api.main import api_router
from cinelog.core.config import settings
from cinelog.core.db import init_db
from cinelog.core.ttl_cache import TTLCache
from cinelog.exceptions.handlers import register_exception_handlers
from cinelog.logging_ import setup_logger
from cinelog.services.metadata import MetadataService
from cinelog.services.movie_resolver import MovieResolver
from cinelog.tmdb.client import get_tmdb_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger = setup_logger("api")
    init_db()

    # One cache and one resolver for the whole process, shared by all workers
    metadata_service = MetadataService(client=get_tmdb_client(), cache=TTLCache())
    app.state.metadata_service = metadata_service
    app.state.movie_resolver = MovieResolver(metadata=metadata_service)
    logger.info(f"{settings.PROJECT_NAME} started")

    yield

    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_V1_STR)
