"""
Scheduled sync jobs.

Each sync routine is registered as its own APScheduler cron job on the same
schedule. The jobs are independent of each other; a per-job guard decides
what happens when a tick fires while the previous run of that same job is
still going (see OverlapPolicy).
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional

from apscheduler.events import (
    EVENT_JOB_ERROR,
    EVENT_JOB_EXECUTED,
    EVENT_JOB_MAX_INSTANCES,
    EVENT_JOB_MISSED,
)
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from marketsync.core.config import OverlapPolicy, Settings
from marketsync.services.sync_services import SyncResult, SyncService

logger = logging.getLogger(__name__)

# Upper bound APScheduler enforces per job; the overlap policy is applied by GuardedJob
JOB_MAX_INSTANCES = 5

JOB_NAMES = {
    "import_orders": "Import Orders",
    "sync_tracking_numbers": "Sync Tracking Numbers",
    "sync_stock": "Sync Stock",
    "cancel_orders": "Cancel Orders",
}


class GuardedJob:
    """A sync routine wrapped with an overlap policy and a last-resort error boundary."""

    def __init__(
        self,
        job_id: str,
        func: Callable[[], Awaitable[SyncResult]],
        policy: OverlapPolicy = OverlapPolicy.SKIP,
    ):
        self.job_id = job_id
        self.func = func
        self.policy = policy
        self._lock = asyncio.Lock()
        self._in_flight = 0
        self.last_result: Optional[SyncResult] = None

    @property
    def running(self) -> bool:
        return self._in_flight > 0

    async def run(self) -> Optional[SyncResult]:
        if self.policy == OverlapPolicy.SKIP and self.running:
            logger.warning(f"Job {self.job_id} is still running from a previous tick, skipping this run")
            return None
        if self.policy == OverlapPolicy.QUEUE:
            if self._lock.locked():
                logger.info(f"Job {self.job_id} is still running, waiting for it to finish")
            async with self._lock:
                return await self._execute()
        return await self._execute()

    async def _execute(self) -> Optional[SyncResult]:
        self._in_flight += 1
        try:
            result = await self.func()
            self.last_result = result
            return result
        except Exception as e:
            # Routines handle platform errors themselves; anything else must not kill the scheduler
            logger.exception(f"Unexpected error in job {self.job_id}: {str(e)}")
            return None
        finally:
            self._in_flight -= 1


def job_listener(event):
    """Listen to job events for logging"""
    if event.code == EVENT_JOB_ERROR:
        logger.error(f"Job {event.job_id} crashed: {event.exception}")
    elif event.code == EVENT_JOB_MISSED:
        logger.warning(f"Job {event.job_id} missed its run at {event.scheduled_run_time}")
    elif event.code == EVENT_JOB_MAX_INSTANCES:
        logger.warning(f"Job {event.job_id} skipped: too many instances already running")
    else:
        logger.debug(f"Job {event.job_id} executed at {datetime.now()}")


class SyncScheduler:
    """Owns the APScheduler instance and the four guarded sync jobs."""

    def __init__(self, settings: Settings, service: SyncService):
        self.settings = settings
        self.service = service
        # Built even when the schedule is off so jobs can still be run by hand
        self.jobs: Dict[str, GuardedJob] = {
            job_id: GuardedJob(job_id, func, settings.SYNC_OVERLAP_POLICY)
            for job_id, func in service.jobs.items()
        }
        self.scheduler = self._create_scheduler()

    def _create_scheduler(self) -> AsyncIOScheduler:
        """Create and configure the scheduler"""
        scheduler = AsyncIOScheduler()
        scheduler.add_listener(
            job_listener,
            EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED | EVENT_JOB_MAX_INSTANCES,
        )

        if not self.settings.SYNC_SCHEDULE_ENABLED:
            logger.info("Scheduled sync is disabled. Set SYNC_SCHEDULE_ENABLED=true to enable")
            return scheduler

        policy = self.settings.SYNC_OVERLAP_POLICY
        for job_id, guarded in self.jobs.items():
            scheduler.add_job(
                guarded.run,
                CronTrigger.from_crontab(self.settings.SYNC_SCHEDULE),
                id=job_id,
                name=JOB_NAMES.get(job_id, job_id),
                replace_existing=True,
                max_instances=JOB_MAX_INSTANCES,
                coalesce=True,
                misfire_grace_time=60,
            )
        logger.info(
            f"Scheduled {len(self.jobs)} sync jobs with schedule '{self.settings.SYNC_SCHEDULE}' "
            f"(overlap policy: {policy.value})"
        )
        return scheduler

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self):
        """Start the scheduler; must be called from inside a running event loop"""
        if self.scheduler.running:
            return
        self.scheduler.start()
        logger.info("Scheduler started successfully")

        jobs = self.scheduler.get_jobs()
        if jobs:
            logger.info(f"Active scheduled jobs: {len(jobs)}")
            for job in jobs:
                logger.info(f"  - {job.name}: {job.trigger}")
        else:
            logger.info("No scheduled jobs configured")

    def shutdown(self, wait: bool = True):
        """Stop the scheduler gracefully"""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Scheduler stopped successfully")

    async def run_job_now(self, job_id: str) -> Optional[SyncResult]:
        """Run one job immediately, honouring its overlap policy"""
        if job_id not in self.jobs:
            raise KeyError(f"Unknown job: {job_id}")
        logger.info(f"Manually triggering {job_id}...")
        return await self.jobs[job_id].run()

    def status(self) -> Dict[str, Any]:
        """Current scheduler status and job information"""
        jobs_info: List[Dict[str, Any]] = []
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            guarded = self.jobs.get(job.id)
            jobs_info.append({
                "id": job.id,
                "name": job.name,
                "trigger": str(job.trigger),
                "next_run": next_run.isoformat() if next_run else None,
                "in_flight": guarded.running if guarded else False,
            })

        return {
            "status": "running" if self.scheduler.running else "stopped",
            "overlap_policy": self.settings.SYNC_OVERLAP_POLICY.value,
            "jobs": jobs_info,
        }
