import json
import logging
from typing import Any, Dict, Optional, Type

import httpx

from marketsync.core.exceptions import PlatformAPIError

logger = logging.getLogger(__name__)


class PlatformClient:
    """
    Shared request logic for the marketplace REST clients.

    Subclasses set PLATFORM, ERROR_CLASS and AUTH_HEADER and implement
    _auth_value(). Each call opens its own httpx.AsyncClient with the
    transport's default timeout; there is no retry.
    """

    PLATFORM = "platform"
    ERROR_CLASS: Type[PlatformAPIError] = PlatformAPIError
    AUTH_HEADER = "Authorization"

    def __init__(self, base_url: str):
        self.BASE_URL = base_url.rstrip("/")

    def _auth_value(self) -> str:
        raise NotImplementedError

    def _get_headers(self) -> Dict[str, str]:
        """Get headers for API requests"""
        return {
            self.AUTH_HEADER: self._auth_value(),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _url(self, endpoint: str) -> str:
        return f"{self.BASE_URL}/{endpoint.lstrip('/')}"

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
    ) -> Dict:
        """
        Make a request to the platform API

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (without base URL)
            data: Request payload for POST/PUT requests
            params: Query parameters

        Returns:
            Dict: Parsed response body ({} when the platform sends none)

        Raises:
            PlatformAPIError: subclass for this platform, if the request fails
        """
        url = self._url(endpoint)
        headers = self._get_headers()

        masked_headers = headers.copy()
        masked_headers[self.AUTH_HEADER] = "[REDACTED]"
        logger.debug(f"Making {method} request to {url}")
        logger.debug(f"Headers: {masked_headers}")
        if params:
            logger.debug(f"Params: {params}")
        if data is not None:
            logger.debug(f"Data: {json.dumps(data, default=str)[:500]}")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=data,
                    params=params
                )
        except httpx.TimeoutException as e:
            logger.error(f"{self.PLATFORM} timeout error: {str(e)}")
            raise self.ERROR_CLASS(f"Request timed out: {str(e)}")
        except httpx.RequestError as e:
            logger.error(f"{self.PLATFORM} network error: {str(e)}")
            raise self.ERROR_CLASS(f"Network error: {str(e)}")

        if response.status_code not in (200, 201, 202, 204):
            body = self._decode_body(response)
            logger.debug(f"{self.PLATFORM} API error {response.status_code}: {response.text}")
            raise self.ERROR_CLASS(
                f"Request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
                response_data=body,
            )

        if response.status_code == 204:  # No content
            return {}

        body = self._decode_body(response)
        return body if body is not None else {}

    def _collection(self, body: Any, key: str) -> list:
        """Pull the list under `key` out of a list response"""
        if not isinstance(body, dict) or not isinstance(body.get(key), list):
            raise self.ERROR_CLASS(
                f"Unexpected response: missing '{key}' list",
                response_data=body,
            )
        return body[key]
