# File: src/blockscope/api/server.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import explorer_router, metrics_router, ui_router
from ..config import ExplorerConfig
from ..explorer import ExplorerSession, Web3ChainDataProvider
from ..monitoring import MetricsCollector
from ..utils.config import Config

logger = logging.getLogger(__name__)

def build_session(config: ExplorerConfig, metrics: Optional[MetricsCollector] = None) -> ExplorerSession:
    """Create a session backed by the configured JSON-RPC provider."""
    network = config.get("provider.network")
    if config.get("provider.rpc_url"):
        logger.info("Using explicit JSON-RPC endpoint from ETH_RPC_URL/config")
    elif network not in Config.KNOWN_NETWORKS:
        logger.warning(f"Unrecognized network {network}, requests may fail")
    else:
        logger.info(f"Using network {network}")

    provider = Web3ChainDataProvider.from_url(config.provider_url(), metrics=metrics)
    return ExplorerSession(provider, window_size=config.window_size, metrics=metrics)

def create_app(
    session: Optional[ExplorerSession] = None,
    config: Optional[ExplorerConfig] = None,
    metrics: Optional[MetricsCollector] = None
) -> FastAPI:
    if session is None:
        config = config or ExplorerConfig()
        metrics = metrics or MetricsCollector()
        session = build_session(config, metrics)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session.start()
        yield

    app = FastAPI(title="blockscope", lifespan=lifespan)
    app.state.session = session
    app.state.metrics = metrics

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(ui_router)
    app.include_router(explorer_router)
    app.include_router(metrics_router)

    return app
