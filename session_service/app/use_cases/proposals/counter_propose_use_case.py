"""
Counter-Propose Use Case

Student answers a tutor's proposal with an alternative time.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    Message,
    MessageType,
    ProposalStatus,
    SessionProposal,
    UserRole,
)
from session_service.domain.errors import conflict, forbidden, not_found
from session_service.domain.lifecycle import validate_reason, validate_schedule
from session_service.domain.policies import (
    compute_total_price,
    duration_minutes,
    price_per_hour_for_plan,
)
from session_service.libs.result import Result, Return

from .dtos import ProposalResponse
from .proposal_access import load_answerable_proposal


class CounterProposeUseCase:
    """
    Use case for counter-proposing a session time.

    Business Rules:
    - Only the student on the other side of the proposal may counter
    - Original must be PROPOSED and unexpired; it becomes COUNTER_PROPOSED
    - New window must start in the future and end after it starts
    - Optional reason of at least 10 characters
    - The counter-proposal is a new PROPOSED proposal sent by the student,
      priced by the student's plan and linked to the original
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        message_id: UUID,
        student_id: UUID,
        new_start_time: datetime,
        new_end_time: datetime,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Result[ProposalResponse]:
        now = now or utcnow()

        error = validate_schedule(new_start_time, new_end_time, now) or validate_reason(
            reason, "Counter-proposal reason", required=False
        )
        if error:
            return Return.err(error)

        async with self.uow:
            loaded = await load_answerable_proposal(
                self.uow, message_id, student_id, "counter", now
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            original = loaded.value.proposal

            student = await self.uow.users.get_by_id(student_id)
            if student is None:
                return Return.err(not_found("Student not found"))
            if student.role != UserRole.student:
                return Return.err(forbidden("Only students can counter-propose"))

            duration = duration_minutes(new_start_time, new_end_time)
            price = compute_total_price(
                price_per_hour_for_plan(student.current_plan), duration
            )

            try:
                original.status = ProposalStatus.COUNTER_PROPOSED
                await self.uow.proposals.update(original)

                message = Message(
                    conversation_id=original.conversation_id,
                    sender_id=student_id,
                    type=MessageType.session_proposal,
                    text=f"Counter-proposal: {original.subject}",
                )
                message = await self.uow.messages.create(message)

                counter = SessionProposal(
                    message_id=message.id,
                    conversation_id=original.conversation_id,
                    sender_id=student_id,
                    subject=original.subject,
                    description=original.description,
                    start_time=new_start_time,
                    end_time=new_end_time,
                    duration=duration,
                    price=price,
                    status=ProposalStatus.PROPOSED,
                    expires_at=new_start_time,
                    original_proposal_id=original.message_id,
                    counter_proposal_reason=reason,
                )
                counter = await self.uow.proposals.create(counter)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session proposal was answered concurrently, try again")
                )

            return Return.ok(ProposalResponse.from_entity(counter))
