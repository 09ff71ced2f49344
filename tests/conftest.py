# tests/conftest.py
import httpx
import pytest
from fastapi.testclient import TestClient

from marketsync.core.config import Settings
from marketsync.main import create_app
from marketsync.services.backmarket.client import BackMarketClient
from marketsync.services.shopify.client import ShopifyClient
from marketsync.services.sync_services import SyncService


def make_settings(**overrides) -> Settings:
    values = dict(
        SHOPIFY_STORE_URL="test-store.myshopify.com",
        SHOPIFY_ACCESS_TOKEN="shpat_test_token",
        BACKMARKET_API_KEY="bm_test_key",
        SYNC_SCHEDULE_ENABLED=False,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    """Build Settings with test credentials; keyword arguments override"""
    return make_settings

@pytest.fixture
def settings():
    """Provide test settings with the schedule switched off"""
    return make_settings()

@pytest.fixture
def shopify_client(settings):
    return ShopifyClient.from_settings(settings)

@pytest.fixture
def backmarket_client(settings):
    return BackMarketClient.from_settings(settings)

# Mock fixtures for external services
@pytest.fixture
def mock_shopify_client(mocker):
    """Provide a mocked ShopifyClient; its async methods are AsyncMocks"""
    return mocker.MagicMock(spec=ShopifyClient)

@pytest.fixture
def mock_backmarket_client(mocker):
    """Provide a mocked BackMarketClient; its async methods are AsyncMocks"""
    return mocker.MagicMock(spec=BackMarketClient)

@pytest.fixture
def sync_service(mock_shopify_client, mock_backmarket_client):
    return SyncService(shopify=mock_shopify_client, backmarket=mock_backmarket_client)

@pytest.fixture
def mock_http(mocker):
    """
    Patch httpx.AsyncClient and return the mocked `request` coroutine.

    Set `.return_value` / `.side_effect` to httpx.Response objects or
    exceptions; inspect `.call_args` for method, url, headers and body.
    """
    mock_client = mocker.patch("httpx.AsyncClient")
    http = mocker.AsyncMock()
    mock_client.return_value.__aenter__.return_value = http
    http.request.return_value = httpx.Response(200, json={})
    return http.request

@pytest.fixture
def test_client(settings, sync_service):
    """Provide a test client wired to mocked platform clients"""
    app = create_app(settings, service=sync_service)
    with TestClient(app) as client:
        yield client
