from fastapi import APIRouter

from items_api.api.v1.endpoints import health
from items_api.api.v1.endpoints import items

api_router = APIRouter()
api_router.include_router(items.router, prefix="/items", tags=["items"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
