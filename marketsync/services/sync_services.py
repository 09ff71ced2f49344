# marketsync/services/sync_services.py
"""
The four Shopify <-> Back Market sync routines.

Each routine is a single pass: fetch a list from one platform, then write
one update per item to the other platform, sequentially and in list order.
Every routine has exactly one error boundary around the whole pass, so the
first failing call ends that tick; the error is logged and swallowed and the
next scheduled tick simply tries again. Nothing is remembered between ticks.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from marketsync.core.exceptions import PlatformAPIError
from marketsync.schemas.base import MalformedItem
from marketsync.services.backmarket.client import BackMarketClient
from marketsync.services.shopify.client import ShopifyClient

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one tick of one routine"""
    job: str
    processed: int = 0
    skipped: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class SyncService:
    """Runs the sync routines against injected platform clients."""

    def __init__(self, shopify: ShopifyClient, backmarket: BackMarketClient):
        self.shopify = shopify
        self.backmarket = backmarket

    @property
    def jobs(self) -> Dict[str, Callable[[], Awaitable[SyncResult]]]:
        """Routine name -> bound coroutine function, in run order"""
        return {
            "import_orders": self.import_orders,
            "sync_tracking_numbers": self.sync_tracking_numbers,
            "sync_stock": self.sync_stock,
            "cancel_orders": self.cancel_orders,
        }

    def _fail(self, result: SyncResult, action: str, error: PlatformAPIError) -> SyncResult:
        logger.error(f"Error {action}: {error.detail}")
        result.error = str(error.detail)
        return result

    def _skip_malformed(self, result: SyncResult, kind: str, item: MalformedItem):
        logger.warning(f"Skipping malformed {kind} {item.item_id}: {item.error}")
        result.skipped += 1

    async def import_orders(self) -> SyncResult:
        """Create every Shopify order on Back Market (no status filter, no dedup)"""
        result = SyncResult(job="import_orders")
        try:
            orders = await self.shopify.get_orders()
            for order in orders:
                if isinstance(order, MalformedItem):
                    self._skip_malformed(result, "order", order)
                    continue
                logger.info(f"Importing Order {order.id} to BackMarket")
                await self.backmarket.create_order(order.as_payload())
                result.processed += 1
        except PlatformAPIError as e:
            return self._fail(result, "importing orders", e)
        return result

    async def sync_tracking_numbers(self) -> SyncResult:
        """Push the first tracking number of each fulfilled order to Back Market"""
        result = SyncResult(job="sync_tracking_numbers")
        try:
            orders = await self.shopify.get_orders(status="fulfilled")
            for order in orders:
                if isinstance(order, MalformedItem):
                    self._skip_malformed(result, "order", order)
                    continue
                tracking_number = order.first_tracking_number
                if tracking_number is None:
                    result.skipped += 1
                    continue
                if order.id is None:
                    self._skip_malformed(result, "order", MalformedItem(order.as_payload(), "id: missing"))
                    continue
                logger.info(f"Updating tracking for Order {order.id} in BackMarket")
                await self.backmarket.update_tracking(order.id, tracking_number)
                result.processed += 1
        except PlatformAPIError as e:
            return self._fail(result, "syncing tracking numbers", e)
        return result

    async def sync_stock(self) -> SyncResult:
        """Push the first variant's inventory quantity to Back Market, keyed by SKU"""
        result = SyncResult(job="sync_stock")
        try:
            products = await self.shopify.get_products()
            for product in products:
                if isinstance(product, MalformedItem):
                    self._skip_malformed(result, "product", product)
                    continue
                variant = product.first_variant
                if variant is None:
                    result.skipped += 1
                    continue
                if not variant.sku:
                    logger.info(f"Product {product.id} variant does not have a SKU. Skipping.")
                    result.skipped += 1
                    continue
                logger.info(f"Updating stock for SKU {variant.sku}")
                await self.backmarket.update_inventory(variant.sku, variant.inventory_quantity)
                result.processed += 1
        except PlatformAPIError as e:
            return self._fail(result, "syncing stock", e)
        return result

    async def cancel_orders(self) -> SyncResult:
        """Cancel on Shopify every order Back Market reports as canceled"""
        result = SyncResult(job="cancel_orders")
        try:
            orders = await self.backmarket.get_orders(status="canceled")
            for order in orders:
                if isinstance(order, MalformedItem):
                    self._skip_malformed(result, "order", order)
                    continue
                if order.id is None:
                    self._skip_malformed(result, "order", MalformedItem(order.as_payload(), "id: missing"))
                    continue
                # Order ids are shared between the two platforms
                logger.info(f"Canceling Order {order.id} in Shopify")
                await self.shopify.cancel_order(order.id)
                result.processed += 1
        except PlatformAPIError as e:
            return self._fail(result, "canceling orders", e)
        return result
