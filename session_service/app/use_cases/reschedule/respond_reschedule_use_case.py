"""
Respond to Reschedule Use Case

Approve or reject a pending reschedule request.
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    AuditEvent,
    RescheduleStatus,
    SessionStatus,
)
from session_service.domain.errors import conflict, invalid_state, not_found
from session_service.domain.lifecycle import can_respond_to_reschedule
from session_service.libs.result import Result, Return

from ..sessions.dtos import SessionResponse


class RespondRescheduleUseCase:
    """
    Use case for answering a reschedule request.

    Business Rules:
    - Only the participant who did not request may answer
    - Request must be PENDING and the session RESCHEDULE_REQUESTED
    - Approve: requested start must still be in the future; the live window
      takes the requested times
    - Reject: the live window is left untouched
    - Either way the session returns to SCHEDULED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def approve(
        self, session_id: UUID, user_id: UUID, now: Optional[datetime] = None
    ) -> Result[SessionResponse]:
        """Approve the pending request and move the session"""
        return await self._respond(session_id, user_id, approve=True, now=now)

    async def reject(
        self, session_id: UUID, user_id: UUID, now: Optional[datetime] = None
    ) -> Result[SessionResponse]:
        """Reject the pending request; times stay as they were"""
        return await self._respond(session_id, user_id, approve=False, now=now)

    async def _respond(
        self,
        session_id: UUID,
        user_id: UUID,
        approve: bool,
        now: Optional[datetime],
    ) -> Result[SessionResponse]:
        now = now or utcnow()
        verb = "approve" if approve else "reject"

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(not_found("Session not found"))

            error = can_respond_to_reschedule(session, user_id, verb)
            if error:
                return Return.err(error)

            request = session.reschedule_request

            if approve:
                if request.new_start_time <= now:
                    return Return.err(
                        invalid_state("Requested start time has already passed")
                    )
                session.start_time = request.new_start_time
                session.end_time = request.new_end_time
                status = RescheduleStatus.APPROVED
                action = "SESSION_RESCHEDULE_APPROVED"
            else:
                status = RescheduleStatus.REJECTED
                action = "SESSION_RESCHEDULE_REJECTED"

            session.set_reschedule_request(
                replace(request, status=status, responded_by=user_id, responded_at=now)
            )
            session.status = SessionStatus.SCHEDULED

            try:
                session = await self.uow.sessions.update(session)

                audit = AuditEvent(
                    user_id=user_id,
                    action=action,
                    entity_type="SESSION",
                    entity_id=session.id,
                    description=f"{status.value.capitalize()} reschedule of a {session.subject} session",
                    event_metadata={
                        "requested_by": str(request.requested_by),
                        "new_start_time": request.new_start_time.isoformat(),
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session was modified concurrently, try again")
                )

            return Return.ok(SessionResponse.from_entity(session))
