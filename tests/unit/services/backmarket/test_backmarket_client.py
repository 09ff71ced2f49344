# tests/unit/services/backmarket/test_backmarket_client.py
import httpx
import pytest

from marketsync.core.exceptions import BackMarketAPIError
from marketsync.schemas.platform.backmarket import BackMarketOrder
from marketsync.services.backmarket.client import BackMarketClient

BASE = "https://api.backmarket.com/v1"


def test_backmarket_client_defaults():
    client = BackMarketClient(api_key="key")

    assert client.BASE_URL == BASE
    assert client._get_headers()["Authorization"] == "Bearer key"


def test_backmarket_client_custom_base_url(settings_factory):
    settings = settings_factory(BACKMARKET_API_URL="https://sandbox.example.com/v1/")
    client = BackMarketClient.from_settings(settings)

    assert client.BASE_URL == "https://sandbox.example.com/v1"


@pytest.mark.asyncio
async def test_create_order_wraps_payload(backmarket_client, mock_http):
    mock_http.return_value = httpx.Response(201, json={"id": 1})
    payload = {"id": 1, "line_items": [{"sku": "X1", "quantity": 1}]}

    result = await backmarket_client.create_order(payload)

    _, kwargs = mock_http.call_args
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == f"{BASE}/orders"
    assert kwargs["json"] == {"order": payload}
    assert kwargs["headers"]["Authorization"] == "Bearer bm_test_key"
    assert result == {"id": 1}


@pytest.mark.asyncio
async def test_update_tracking(backmarket_client, mock_http):
    await backmarket_client.update_tracking(42, "T1")

    _, kwargs = mock_http.call_args
    assert kwargs["method"] == "PUT"
    assert kwargs["url"] == f"{BASE}/orders/42"
    assert kwargs["json"] == {"tracking_number": "T1"}


@pytest.mark.asyncio
async def test_update_inventory(backmarket_client, mock_http):
    await backmarket_client.update_inventory("X1", 3)

    _, kwargs = mock_http.call_args
    assert kwargs["method"] == "PUT"
    assert kwargs["url"] == f"{BASE}/inventory/X1"
    assert kwargs["json"] == {"stock": 3}


@pytest.mark.asyncio
async def test_get_canceled_orders(backmarket_client, mock_http):
    mock_http.return_value = httpx.Response(200, json={
        "orders": [{"id": 7, "status": "canceled"}, {"id": "8", "status": "canceled"}]
    })

    orders = await backmarket_client.get_orders(status="canceled")

    _, kwargs = mock_http.call_args
    assert kwargs["url"] == f"{BASE}/orders"
    assert kwargs["params"] == {"status": "canceled"}
    assert all(isinstance(order, BackMarketOrder) for order in orders)
    assert [order.id for order in orders] == [7, "8"]


@pytest.mark.asyncio
async def test_no_content_returns_empty_dict(backmarket_client, mock_http):
    mock_http.return_value = httpx.Response(204)

    assert await backmarket_client.update_inventory("X1", 3) == {}


@pytest.mark.asyncio
async def test_error_with_plain_text_body(backmarket_client, mock_http):
    mock_http.return_value = httpx.Response(503, text="Service Unavailable")

    with pytest.raises(BackMarketAPIError) as exc_info:
        await backmarket_client.create_order({"id": 1})

    assert exc_info.value.status_code == 503
    assert exc_info.value.response_data == "Service Unavailable"
    assert exc_info.value.detail == "Service Unavailable"


@pytest.mark.asyncio
async def test_error_without_body_falls_back_to_message(backmarket_client, mock_http):
    mock_http.return_value = httpx.Response(500)

    with pytest.raises(BackMarketAPIError) as exc_info:
        await backmarket_client.update_tracking(1, "T1")

    assert exc_info.value.response_data is None
    assert exc_info.value.detail == str(exc_info.value)
    assert "500" in exc_info.value.detail
