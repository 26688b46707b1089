"""
APScheduler-driven lifecycle sweeper.

Each tick opens its own database session and unit of work, runs one
sweep and logs the outcome. A failing tick is logged and dropped; the
next tick retries from scratch.
"""

import logging
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from session_service.app.services.sweep_scheduler import SweepScheduler
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.app.use_cases.lifecycle import SweepResult, SweepSessionsUseCase
from session_service.domain.base import utcnow

logger = logging.getLogger(__name__)

JOB_ID = "session_lifecycle_sweep"


class APSchedulerSweepScheduler(SweepScheduler):
    """Runs SweepSessionsUseCase on an interval with APScheduler"""

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        interval_seconds: int = 60,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        """
        Args:
            uow_factory: Async context manager factory yielding a fresh UnitOfWork
            interval_seconds: Seconds between ticks
            scheduler: Scheduler to register on (a new AsyncIOScheduler by default)
        """
        self.uow_factory = uow_factory
        self.interval_seconds = interval_seconds
        self.scheduler = scheduler or AsyncIOScheduler(timezone="UTC")

    def start(self) -> None:
        # One instance at a time; missed ticks collapse into one run
        self.scheduler.add_job(
            self.run_once,
            "interval",
            seconds=self.interval_seconds,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Session sweeper started, every %ss", self.interval_seconds)

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Session sweeper stopped")

    async def run_once(self) -> Optional[SweepResult]:
        try:
            async with self.uow_factory() as uow:
                return await SweepSessionsUseCase(uow).execute(now=utcnow())
        except Exception:
            logger.exception("Session sweep failed; will retry on next tick")
            return None
