import pytest

from scripts import run_sync_once
from marketsync.services.sync_services import SyncResult


@pytest.fixture
def wired(mocker, settings, sync_service):
    mocker.patch.object(run_sync_once, "get_settings", return_value=settings)
    mocker.patch.object(run_sync_once, "build_sync_service", return_value=sync_service)
    return sync_service


@pytest.mark.asyncio
async def test_runs_every_job_through_the_scheduler(wired, mocker, mock_shopify_client, mock_backmarket_client):
    run_job_now = mocker.spy(run_sync_once.SyncScheduler, "run_job_now")
    mock_shopify_client.get_orders.return_value = []
    mock_shopify_client.get_products.return_value = []
    mock_backmarket_client.get_orders.return_value = []

    assert await run_sync_once.main() == 0

    assert [c.args[1] for c in run_job_now.call_args_list] == [
        "import_orders", "sync_tracking_numbers", "sync_stock", "cancel_orders",
    ]


@pytest.mark.asyncio
async def test_single_job_failure_sets_exit_code(wired, mocker):
    mocker.patch.object(
        run_sync_once.SyncScheduler,
        "run_job_now",
        mocker.AsyncMock(return_value=SyncResult(job="sync_stock", error="down")),
    )

    assert await run_sync_once.main("sync_stock") == 1
    run_sync_once.SyncScheduler.run_job_now.assert_awaited_once_with("sync_stock")


@pytest.mark.asyncio
async def test_unexpected_crash_counts_as_failure(wired, mock_shopify_client):
    mock_shopify_client.get_products.side_effect = RuntimeError("boom")

    assert await run_sync_once.main("sync_stock") == 1
