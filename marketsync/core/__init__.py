"""
Core module exports.
"""
from .config import Settings, OverlapPolicy, get_settings
from .exceptions import (
    BaseServiceError,
    PlatformServiceError,
    PlatformAPIError,
    ShopifyAPIError,
    BackMarketAPIError,
)
