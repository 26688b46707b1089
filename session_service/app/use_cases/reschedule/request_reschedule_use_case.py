"""
Request Reschedule Use Case

A participant asks to move a session; the other participant answers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    AuditEvent,
    RescheduleRequest,
    RescheduleStatus,
    SessionStatus,
)
from session_service.domain.errors import conflict, not_found, validation_error
from session_service.domain.lifecycle import can_request_reschedule, validate_reason
from session_service.libs.result import Result, Return

from ..sessions.dtos import SessionResponse


class RequestRescheduleUseCase:
    """
    Use case for requesting a new time for a session.

    Business Rules:
    - Only the student or tutor of the session may request
    - Only from SCHEDULED or STARTING_SOON, with no pending request
    - Not within 10 minutes of the current start
    - New start must be in the future; the session keeps its length
    - Current window is snapshotted into previous_start_time/previous_end_time
    - Concurrent requests on the same session: one wins, the other conflicts
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: UUID,
        user_id: UUID,
        new_start_time: datetime,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Result[SessionResponse]:
        """
        Execute request reschedule use case.

        Args:
            session_id: Session to move
            user_id: Requesting participant
            new_start_time: Requested start (naive UTC)
            reason: Optional explanation, at least 10 characters when given
            now: Clock override

        Returns:
            Result with SessionResponse DTO, or Error
        """
        now = now or utcnow()

        error = validate_reason(reason, "Reschedule reason", required=False)
        if error:
            return Return.err(error)

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(not_found("Session not found"))

            error = can_request_reschedule(session, user_id, now)
            if error:
                return Return.err(error)

            if new_start_time <= now:
                return Return.err(
                    validation_error("New start time must be in the future")
                )

            new_end_time = new_start_time + session.window

            session.previous_start_time = session.start_time
            session.previous_end_time = session.end_time
            session.set_reschedule_request(
                RescheduleRequest(
                    requested_by=user_id,
                    requested_at=now,
                    new_start_time=new_start_time,
                    new_end_time=new_end_time,
                    status=RescheduleStatus.PENDING,
                    reason=reason,
                )
            )
            session.status = SessionStatus.RESCHEDULE_REQUESTED

            try:
                session = await self.uow.sessions.update(session)

                audit = AuditEvent(
                    user_id=user_id,
                    action="SESSION_RESCHEDULE_REQUESTED",
                    entity_type="SESSION",
                    entity_id=session.id,
                    description=f"Requested to reschedule a {session.subject} session",
                    event_metadata={
                        "new_start_time": new_start_time.isoformat(),
                        "new_end_time": new_end_time.isoformat(),
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session was modified concurrently, try again")
                )

            return Return.ok(SessionResponse.from_entity(session))
