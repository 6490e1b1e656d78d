from fastapi import Request

from items_api.db.pool import ConnectionPool, ConnectionPoolManager


def get_pool_manager(request: Request) -> ConnectionPoolManager:
    return request.app.state.pool_manager


def get_pool(request: Request) -> ConnectionPool:
    """FastAPI dependency that yields the ready connection pool built at startup."""
    return request.app.state.pool
