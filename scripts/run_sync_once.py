"""Run the sync routines once, outside the schedule."""
import argparse
import asyncio
import logging

from marketsync.core.config import get_settings
from marketsync.core.logging_config import configure_logging
from marketsync.main import build_sync_service
from marketsync.scheduler import JOB_NAMES, SyncScheduler

logger = logging.getLogger(__name__)


async def main(job: str = None) -> int:
    settings = get_settings()
    sync_scheduler = SyncScheduler(settings, build_sync_service(settings))

    job_ids = [job] if job else list(sync_scheduler.jobs)
    failed = False
    for job_id in job_ids:
        result = await sync_scheduler.run_job_now(job_id)
        if result is None:
            logger.error("job=%s did not complete", job_id)
            failed = True
            continue
        logger.info(
            "job=%s processed=%s skipped=%s error=%s",
            result.job, result.processed, result.skipped, result.error,
        )
        failed = failed or not result.succeeded
    return 1 if failed else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Shopify -> BackMarket sync once")
    parser.add_argument("--job", choices=list(JOB_NAMES), help="Run only this routine (default: all)")
    args = parser.parse_args()

    configure_logging(get_settings().LOG_LEVEL)
    raise SystemExit(asyncio.run(main(args.job)))
