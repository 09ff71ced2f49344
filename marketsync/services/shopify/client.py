# marketsync.services.shopify.client

import logging
from typing import Dict, List, Optional, Union

from marketsync.core.config import Settings
from marketsync.core.exceptions import ShopifyAPIError
from marketsync.schemas.base import MalformedItem
from marketsync.schemas.platform.shopify import ShopifyOrder, ShopifyProduct
from marketsync.services.base_client import PlatformClient

logger = logging.getLogger(__name__)


class ShopifyClient(PlatformClient):
    """
    Async client for the Shopify Admin REST API (source platform).

    Authenticates with the store's Admin API access token in the
    X-Shopify-Access-Token header. Reads orders and products, and cancels
    orders that were cancelled on Back Market.

    Documentation: https://shopify.dev/docs/api/admin-rest
    """

    PLATFORM = "Shopify"
    ERROR_CLASS = ShopifyAPIError
    AUTH_HEADER = "X-Shopify-Access-Token"

    def __init__(self, store_url: str, access_token: str, api_version: str = "2025-01"):
        """
        Args:
            store_url: Store host, e.g. "example.myshopify.com"
            access_token: Admin API access token
            api_version: Admin API version segment
        """
        super().__init__(f"https://{store_url}/admin/api/{api_version}")
        self.store_url = store_url
        self.access_token = access_token
        self.api_version = api_version
        logger.info(f"Initializing ShopifyClient for {store_url} (API version {api_version})")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ShopifyClient":
        return cls(
            store_url=settings.SHOPIFY_STORE_URL,
            access_token=settings.SHOPIFY_ACCESS_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
        )

    def _auth_value(self) -> str:
        return self.access_token

    # Order operations

    async def get_orders(self, status: Optional[str] = None) -> List[Union[ShopifyOrder, MalformedItem]]:
        """
        List orders, optionally filtered server-side by status

        Args:
            status: Value for the `status` query parameter, e.g. "fulfilled"

        Raises:
            ShopifyAPIError: If the request fails or the response has no orders list
        """
        params = {"status": status} if status else None
        body = await self._make_request("GET", "/orders.json", params=params)
        return ShopifyOrder.list_from_api(self._collection(body, "orders"))

    async def cancel_order(self, order_id: Union[int, str]) -> Dict:
        """Cancel an order by id"""
        return await self._make_request("POST", f"/orders/{order_id}/cancel.json", data={})

    # Product operations

    async def get_products(self) -> List[Union[ShopifyProduct, MalformedItem]]:
        """List products with their variants"""
        body = await self._make_request("GET", "/products.json")
        return ShopifyProduct.list_from_api(self._collection(body, "products"))
