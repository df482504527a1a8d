"""Application factory for the clipnest HTTP API."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clipnest import __version__
from clipnest.api.errors import register_exception_handlers
from clipnest.api.middleware import RequestLoggingMiddleware
from clipnest.api.routers import ALL_ROUTERS
from clipnest.core.logging import get_logger, setup_logger
from clipnest.core.settings import ClipnestSettings, get_clipnest_config
from clipnest.database.store import DataStore
from clipnest.services.container import ServiceContainer


def create_app(settings: Optional[ClipnestSettings] = None, store: Optional[DataStore] = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        settings: Frozen settings. Defaults to the cached environment config.
        store: Storage to serve from. Defaults to one built from ``settings``
            (MongoDB, or in-process memory when ``STORAGE_BACKEND=memory``).

    Example:
        .. code-block:: python

            app = create_app(ClipnestSettings(STORAGE_BACKEND="memory"))
    """
    settings = settings or get_clipnest_config()
    setup_logger(settings)
    logger = get_logger("api")
    store = store or DataStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.initialize()
        logger.info("Storage initialized", backend=settings.STORAGE_BACKEND)
        try:
            yield
        finally:
            await store.close()
            logger.info("Storage closed")

    app = FastAPI(
        title="clipnest",
        summary="Identity, session and relationship-graph API for video sharing",
        version=__version__,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.services = ServiceContainer.build(settings, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestLoggingMiddleware,
        add_request_id_header=True,
        ignored_paths={"/favicon.ico", "/docs", "/openapi.json", f"{settings.API_PREFIX}/health"},
    )
    register_exception_handlers(app)

    for router in ALL_ROUTERS:
        app.include_router(router, prefix=settings.API_PREFIX)
    return app
