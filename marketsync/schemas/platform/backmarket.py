# File: marketsync/schemas/platform/backmarket.py

from typing import Optional, Union

from marketsync.schemas.base import PlatformPayload


class BackMarketOrder(PlatformPayload):
    id: Optional[Union[int, str]] = None
