from fastapi import APIRouter

from cinelog.api.routes import (
    lists,
    movies,
    users,
    utils,
)

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(movies.router)
api_router.include_router(lists.router)
api_router.include_router(users.router)
