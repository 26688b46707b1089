"""
Tutor Level Recalculator

Recomputes a tutor's level from the number of completed sessions.
"""

import logging
from typing import Optional
from uuid import UUID

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import TutorLevel, UserRole
from session_service.domain.errors import not_found
from session_service.domain.policies import calculate_tutor_level
from session_service.libs.result import Result, Return

logger = logging.getLogger(__name__)


class TutorLevelRecalculator:
    """
    Recalculates tutor level after a completion.

    Business Rules:
    - STARTER below 21 completed sessions, INTERMEDIATE from 21, EXPERT from 51
    - completed_sessions always mirrors the COMPLETED session count
    - level_updated_at changes only when the level changes
    - Non-tutors are left untouched (ok result with no level)
    - Does not commit; the caller owns the transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def recalculate(self, tutor_id: UUID) -> Result[Optional[TutorLevel]]:
        tutor = await self.uow.users.get_by_id(tutor_id)
        if tutor is None:
            return Return.err(not_found("Tutor not found"))

        if tutor.role != UserRole.tutor:
            return Return.ok(None)

        completed = await self.uow.sessions.count_completed_by_tutor(tutor_id)
        new_level = calculate_tutor_level(completed)
        old_level = tutor.level

        tutor.completed_sessions = completed
        if old_level != new_level:
            tutor.level = new_level
            tutor.level_updated_at = utcnow()
            logger.info(
                "Tutor %s level changed %s -> %s (%d completed)",
                tutor_id,
                old_level,
                new_level.value,
                completed,
            )
        await self.uow.users.update(tutor)

        return Return.ok(new_level)
