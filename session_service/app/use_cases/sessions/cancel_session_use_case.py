"""
Cancel Session Use Case
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import AuditEvent, SessionStatus
from session_service.domain.errors import conflict, not_found
from session_service.domain.lifecycle import can_cancel, validate_reason
from session_service.libs.result import Result, Return

from .dtos import SessionResponse


class CancelSessionUseCase:
    """
    Use case for cancelling a scheduled session.

    Business Rules:
    - Only the student or tutor of the session may cancel
    - Only SCHEDULED sessions can be cancelled
    - Cancellation reason of at least 10 characters
    - SESSION_CANCELLED audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: UUID,
        user_id: UUID,
        cancellation_reason: str,
        now: Optional[datetime] = None,
    ) -> Result[SessionResponse]:
        """
        Execute cancel session use case.

        Args:
            session_id: Session to cancel
            user_id: Cancelling participant
            cancellation_reason: Why the session is cancelled
            now: Clock override

        Returns:
            Result with SessionResponse DTO, or Error
        """
        now = now or utcnow()

        error = validate_reason(cancellation_reason, "Cancellation reason")
        if error:
            return Return.err(error)

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(not_found("Session not found"))

            error = can_cancel(session, user_id)
            if error:
                return Return.err(error)

            session.status = SessionStatus.CANCELLED
            session.cancellation_reason = cancellation_reason
            session.cancelled_by = user_id
            session.cancelled_at = now

            try:
                session = await self.uow.sessions.update(session)

                audit = AuditEvent(
                    user_id=user_id,
                    action="SESSION_CANCELLED",
                    entity_type="SESSION",
                    entity_id=session.id,
                    description=f"Cancelled a {session.subject} session",
                    event_metadata={"reason": cancellation_reason},
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session was modified concurrently, try again")
                )

            return Return.ok(SessionResponse.from_entity(session))
