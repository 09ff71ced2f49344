import logging
from typing import Any, Dict, List, Optional, Union

from marketsync.core.config import Settings
from marketsync.core.exceptions import BackMarketAPIError
from marketsync.schemas.base import MalformedItem
from marketsync.schemas.platform.backmarket import BackMarketOrder
from marketsync.services.base_client import PlatformClient

logger = logging.getLogger(__name__)


class BackMarketClient(PlatformClient):
    """
    Async client for the Back Market REST API (destination platform).

    Orders and stock are mirrored here; cancellations are read back from here.
    Authenticates with a static bearer token.
    """

    PLATFORM = "BackMarket"
    ERROR_CLASS = BackMarketAPIError
    AUTH_HEADER = "Authorization"

    DEFAULT_BASE_URL = "https://api.backmarket.com/v1"

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL):
        """
        Args:
            api_key: Back Market API key, sent as a bearer token
            base_url: API root, without trailing slash
        """
        super().__init__(base_url)
        self.api_key = api_key
        logger.info(f"Initializing BackMarketClient for {self.BASE_URL}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackMarketClient":
        return cls(api_key=settings.BACKMARKET_API_KEY, base_url=settings.BACKMARKET_API_URL)

    def _auth_value(self) -> str:
        return f"Bearer {self.api_key}"

    # Order operations

    async def create_order(self, order_payload: Dict[str, Any]) -> Dict:
        """
        Create an order on Back Market, embedding the full source payload

        Raises:
            BackMarketAPIError: If the API request fails
        """
        return await self._make_request("POST", "/orders", data={"order": order_payload})

    async def update_tracking(self, order_id: Union[int, str], tracking_number: Union[str, int]) -> Dict:
        """Set the tracking number of an order"""
        return await self._make_request(
            "PUT", f"/orders/{order_id}", data={"tracking_number": tracking_number}
        )

    async def get_orders(self, status: Optional[str] = None) -> List[Union[BackMarketOrder, MalformedItem]]:
        """
        List orders, optionally filtered server-side by status (e.g. "canceled")

        Raises:
            BackMarketAPIError: If the request fails or the response has no orders list
        """
        params = {"status": status} if status else None
        body = await self._make_request("GET", "/orders", params=params)
        return BackMarketOrder.list_from_api(self._collection(body, "orders"))

    # Inventory operations

    async def update_inventory(self, sku: Union[str, int], stock: Any) -> Dict:
        """Set the stock level of the listing keyed by SKU"""
        return await self._make_request("PUT", f"/inventory/{sku}", data={"stock": stock})
