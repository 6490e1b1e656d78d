import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from items_api.api.v1.api import api_router
from items_api.core.config import Settings, get_settings
from items_api.core.errors import install_error_handlers
from items_api.core.logging_config import configure_logging, install_request_logging
from items_api.db.pool import ConnectionPoolManager, EngineFactory, Sleep

LOG = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    engine_factory: EngineFactory | None = None,
    sleep: Sleep | None = None,
) -> FastAPI:
    """Build the ASGI app.

    The connection pool is created in the lifespan startup. If it never becomes
    ready the startup raises and the server exits before accepting requests.
    """
    settings = settings or get_settings()

    manager_kwargs = {}
    if engine_factory is not None:
        manager_kwargs["engine_factory"] = engine_factory
    if sleep is not None:
        manager_kwargs["sleep"] = sleep
    manager = ConnectionPoolManager(settings, **manager_kwargs)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        LOG.info(
            "connecting to database host=%s port=%s db=%s attempts=%d delay=%.1fs",
            settings.DB_HOST,
            settings.DB_PORT,
            settings.DB_NAME,
            settings.DB_CONNECT_ATTEMPTS,
            settings.DB_CONNECT_DELAY,
        )
        app.state.pool = await manager.initialize()
        try:
            yield
        finally:
            await manager.close()
            LOG.info("database pool disposed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pool_manager = manager

    install_request_logging(app, enabled=settings.REQUEST_LOGS_ENABLED)
    install_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


def get_app() -> FastAPI:
    """Factory used by uvicorn: configures logging, then builds the app."""
    configure_logging()
    return create_app()
