"""
Completion Finalizer

Runs the downstream effects of a completed session. Each hook gets its
own transaction; a failing hook is rolled back and logged but never
undoes the completion or blocks the other hooks.
"""

import logging
from typing import List

from session_service.app.services.feedback_scheduler import FeedbackScheduler
from session_service.app.services.level_recalculator import TutorLevelRecalculator
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.entities import TutoringSession

logger = logging.getLogger(__name__)


class CompletionFinalizer:
    """Best-effort post-completion hooks: feedback record, tutor level"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.feedback_scheduler = FeedbackScheduler(uow)
        self.level_recalculator = TutorLevelRecalculator(uow)

    async def finalize(self, session: TutoringSession) -> List[str]:
        """
        Run every hook for a committed COMPLETED session.

        Returns:
            Names of the hooks that failed (empty when all succeeded)
        """
        # Read once up front; a rollback expires the instance
        session_id = session.id
        tutor_id = session.tutor_id
        student_id = session.student_id
        completed_at = session.completed_at

        hooks = (
            (
                "feedback",
                lambda: self.feedback_scheduler.schedule(
                    session_id, tutor_id, student_id, completed_at
                ),
            ),
            ("tutor_level", lambda: self.level_recalculator.recalculate(tutor_id)),
        )

        failed = []
        for name, hook in hooks:
            try:
                result = await hook()
                if result.is_err():
                    await self.uow.rollback()
                    logger.warning(
                        "Completion hook %s for session %s failed: %s",
                        name,
                        session_id,
                        result.error.message,
                    )
                    failed.append(name)
                    continue
                await self.uow.commit()
            except Exception:
                await self.uow.rollback()
                logger.exception(
                    "Completion hook %s for session %s raised", name, session_id
                )
                failed.append(name)

        return failed
