# File: marketsync/schemas/platform/shopify.py

from typing import Any, List, Optional, Union

from pydantic import field_validator

from marketsync.schemas.base import PlatformPayload


class ShopifyOrder(PlatformPayload):
    # Not required: import_orders forwards the raw order either way
    id: Optional[Union[int, str]] = None
    tracking_numbers: List[Union[str, int]] = []

    @field_validator("tracking_numbers", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        if value is None:
            return []
        return value

    @property
    def first_tracking_number(self) -> Optional[Union[str, int]]:
        return self.tracking_numbers[0] if self.tracking_numbers else None


class ShopifyVariant(PlatformPayload):
    id: Optional[Union[int, str]] = None
    sku: Optional[Union[str, int]] = None
    # Forwarded to Back Market exactly as received
    inventory_quantity: Any = None

    @field_validator("sku", mode="before")
    @classmethod
    def _blank_sku_is_none(cls, value):
        # Shopify sends "" for variants that never had a SKU
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


class ShopifyProduct(PlatformPayload):
    id: Optional[Union[int, str]] = None
    variants: List[ShopifyVariant] = []

    @field_validator("variants", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        if value is None:
            return []
        return value

    @property
    def first_variant(self) -> Optional[ShopifyVariant]:
        """Only the first variant takes part in stock sync"""
        return self.variants[0] if self.variants else None
