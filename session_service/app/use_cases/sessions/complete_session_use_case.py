"""
Complete Session Use Case

Marks a session COMPLETED and then runs the completion hooks.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.completion_finalizer import CompletionFinalizer
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import AuditEvent, SessionStatus
from session_service.domain.errors import conflict, not_found
from session_service.domain.lifecycle import can_complete
from session_service.libs.result import Result, Return

from .dtos import CompleteSessionResponse, SessionResponse

logger = logging.getLogger(__name__)


class CompleteSessionUseCase:
    """
    Use case for completing a session.

    Business Rules:
    - Any non-terminal session can be completed
    - Completing twice (or completing a cancelled/expired session) is refused
    - completed_at is stamped once
    - The completion commits before any hook runs; hooks fire exactly once
      and their failures never undo the completion
    - SESSION_COMPLETED audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: UUID,
        completed_by: Optional[UUID] = None,
        now: Optional[datetime] = None,
    ) -> Result[CompleteSessionResponse]:
        """
        Execute complete session use case.

        Args:
            session_id: Session to complete
            completed_by: Acting user, None for system/admin key callers
            now: Clock override

        Returns:
            Result with CompleteSessionResponse DTO, or Error
        """
        now = now or utcnow()

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(not_found("Session not found"))

            error = can_complete(session)
            if error:
                return Return.err(error)

            session.status = SessionStatus.COMPLETED
            session.completed_at = now

            try:
                session = await self.uow.sessions.update(session)

                audit = AuditEvent(
                    user_id=completed_by,
                    action="SESSION_COMPLETED",
                    entity_type="SESSION",
                    entity_id=session.id,
                    description=f"Completed a {session.subject} session",
                    event_metadata={
                        "tutor_id": str(session.tutor_id),
                        "student_id": str(session.student_id),
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session was modified concurrently, try again")
                )

            response = SessionResponse.from_entity(session)
            logger.info("Session %s completed", session_id)

            failed_hooks = await CompletionFinalizer(self.uow).finalize(session)

            return Return.ok(
                CompleteSessionResponse(session=response, failed_hooks=failed_hooks)
            )
