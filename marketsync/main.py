# marketsync/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from marketsync.core.config import Settings, get_settings
from marketsync.routes import health
from marketsync.scheduler import SyncScheduler
from marketsync.services.backmarket.client import BackMarketClient
from marketsync.services.shopify.client import ShopifyClient
from marketsync.services.sync_services import SyncService

logger = logging.getLogger(__name__)


def build_sync_service(settings: Settings) -> SyncService:
    """Wire both platform clients into the sync service"""
    return SyncService(
        shopify=ShopifyClient.from_settings(settings),
        backmarket=BackMarketClient.from_settings(settings),
    )


def create_app(settings: Optional[Settings] = None, service: Optional[SyncService] = None) -> FastAPI:
    """
    Build the FastAPI app. The app only serves liveness routes; its lifespan
    owns the sync scheduler.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sync_service = service or build_sync_service(settings)
        sync_scheduler = SyncScheduler(settings, sync_service)
        app.state.scheduler = sync_scheduler
        sync_scheduler.start()
        try:
            yield  # This is where the app runs
        finally:
            sync_scheduler.shutdown()

    app = FastAPI(
        title="Shopify BackMarket Sync",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.include_router(health.router)
    return app
