"""
Sweep Sessions Use Case

Time-driven status transitions, run on a schedule.
"""

import logging
from datetime import datetime
from typing import Optional

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.lifecycle import STARTING_SOON_WINDOW

from .dtos import SweepResult

logger = logging.getLogger(__name__)


class SweepSessionsUseCase:
    """
    Use case for one lifecycle sweep.

    Business Rules:
    - SCHEDULED starting within 10 minutes -> STARTING_SOON
    - SCHEDULED/STARTING_SOON whose window contains now -> IN_PROGRESS
    - IN_PROGRESS whose end has passed -> EXPIRED
    - Each rule is one conditional bulk update that re-checks the source
      status, so repeated or overlapping sweeps with the same clock change
      nothing further
    - Sessions awaiting a reschedule answer are left alone
    - All three rules commit together; a store failure propagates and the
      transaction is rolled back
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> SweepResult:
        now = now or utcnow()

        async with self.uow:
            starting_soon = await self.uow.sessions.mark_starting_soon(
                now, now + STARTING_SOON_WINDOW
            )
            in_progress = await self.uow.sessions.mark_in_progress(now)
            expired = await self.uow.sessions.mark_expired(now)

            await self.uow.commit()

        result = SweepResult(
            starting_soon=starting_soon,
            in_progress=in_progress,
            expired=expired,
            swept_at=now,
        )
        if result.total:
            logger.info(
                "Sweep at %s: %d starting soon, %d in progress, %d expired",
                now.isoformat(),
                starting_soon,
                in_progress,
                expired,
            )
        return result
