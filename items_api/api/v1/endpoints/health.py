import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from items_api.api.deps import get_pool_manager
from items_api.db.pool import ConnectionPoolManager

LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(manager: ConnectionPoolManager = Depends(get_pool_manager)) -> JSONResponse:
    """Liveness endpoint that also probes the database pool."""
    body: dict[str, object] = {
        "status": "ok",
        "database": manager.state.value,
        "time": datetime.now(timezone.utc).isoformat(),
    }
    if manager.pool is None:
        body["status"] = "degraded"
        return JSONResponse(body, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    try:
        await manager.pool.ping()
    except Exception as exc:
        LOG.warning("health probe failed err=%s", exc)
        body["status"] = "degraded"
        return JSONResponse(body, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return JSONResponse(body)
