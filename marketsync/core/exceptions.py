from typing import Any, Optional


class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class PlatformServiceError(BaseServiceError):
    """Base exception for platform service errors."""
    pass

class PlatformAPIError(PlatformServiceError):
    """
    Raised when a platform API call fails.

    Carries the HTTP status code and the decoded response body when the
    platform answered; both are None for transport failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data

    @property
    def detail(self) -> Any:
        """Response body if the platform sent one, otherwise the error message."""
        if self.response_data not in (None, "", {}):
            return self.response_data
        return str(self)

class ShopifyAPIError(PlatformAPIError):
    """Raised when Shopify API calls fail."""
    pass

class BackMarketAPIError(PlatformAPIError):
    """Raised when Back Market API calls fail."""
    pass
