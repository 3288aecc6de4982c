# File: src/chainview/api/server.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import explorer_router, network_router
from ..config.settings import Settings
from ..exceptions import DatabaseError, MonitorUnavailableError
from ..explorer.api import ExplorerAPI
from ..explorer.listing import ListingPolicy
from ..monitoring.metrics import ExplorerMetrics
from ..network.monitor import NodeMonitor, StaticMonitor
from ..network.status import Monitor
from ..storage.database import LedgerStore
from ..utils.logger import get_logger

logger = get_logger(__name__)


def build_monitor(settings: Settings) -> Monitor:
    if not settings.get('monitor.enabled', True):
        return StaticMonitor()
    return NodeMonitor(
        seed_nodes=settings.get('monitor.seed_nodes'),
        refresh_interval=settings.get('monitor.refresh_interval'),
        request_timeout=settings.get('monitor.request_timeout'),
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[LedgerStore] = None,
    monitor: Optional[Monitor] = None,
    policy: Optional[ListingPolicy] = None,
    metrics: Optional[ExplorerMetrics] = None
) -> FastAPI:
    settings = settings or Settings()
    owns_store = store is None
    store = store or LedgerStore(settings.get('database.path'))
    monitor = monitor if monitor is not None else build_monitor(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(monitor, NodeMonitor):
            monitor.start()
            logger.info(f"Network monitor started for {len(monitor.seed_nodes)} nodes")
        try:
            yield
        finally:
            if isinstance(monitor, NodeMonitor):
                await monitor.stop()
            if owns_store:
                store.close()

    app = FastAPI(title="chainview API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.explorer = ExplorerAPI(
        store,
        monitor,
        policy=policy or ListingPolicy.from_settings(settings),
        metrics=metrics,
    )

    @app.exception_handler(MonitorUnavailableError)
    async def monitor_unavailable(request: Request, exc: MonitorUnavailableError):
        return JSONResponse(status_code=503, content={"error": "unavailable", "detail": str(exc)})

    @app.exception_handler(DatabaseError)
    async def storage_unavailable(request: Request, exc: DatabaseError):
        logger.error(f"Ledger store failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"error": "storage_unavailable", "detail": str(exc)})

    prefix = settings.get('api.prefix', '')
    app.include_router(explorer_router, prefix=prefix)
    app.include_router(network_router, prefix=prefix)

    return app
