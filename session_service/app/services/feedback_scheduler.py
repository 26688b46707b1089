"""
Feedback Scheduler

Creates the pending tutor feedback record for a completed session.
"""

import logging
from datetime import datetime
from uuid import UUID

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.entities import FeedbackStatus, SessionFeedback
from session_service.domain.errors import invalid_state, not_found
from session_service.domain.policies import calculate_feedback_due_date
from session_service.libs.result import Result, Return

logger = logging.getLogger(__name__)


class FeedbackScheduler:
    """
    Schedules post-session feedback for the tutor.

    Business Rules:
    - One feedback record per session; a second call is refused
    - Due on the 3rd of the month after completion at 23:59:59.999
    - Increments the tutor's pending_feedback_count
    - Does not commit; the caller owns the transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def schedule(
        self,
        session_id: UUID,
        tutor_id: UUID,
        student_id: UUID,
        completed_at: datetime,
    ) -> Result[SessionFeedback]:
        existing = await self.uow.feedback.get_by_session_id(session_id)
        if existing is not None:
            return Return.err(
                invalid_state("Feedback record already exists for this session")
            )

        tutor = await self.uow.users.get_by_id(tutor_id)
        if tutor is None:
            return Return.err(not_found("Tutor not found"))

        feedback = SessionFeedback(
            session_id=session_id,
            tutor_id=tutor_id,
            student_id=student_id,
            status=FeedbackStatus.PENDING,
            due_date=calculate_feedback_due_date(completed_at),
        )
        feedback = await self.uow.feedback.create(feedback)

        tutor.pending_feedback_count = (tutor.pending_feedback_count or 0) + 1
        await self.uow.users.update(tutor)

        logger.info(
            "Scheduled feedback for session %s due %s",
            session_id,
            feedback.due_date.isoformat(),
        )
        return Return.ok(feedback)
