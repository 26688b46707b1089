"""
Propose Session Use Case

Tutor posts a session proposal into a conversation with a student.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    Message,
    MessageType,
    ProposalStatus,
    SessionProposal,
    UserRole,
)
from session_service.domain.errors import (
    forbidden,
    invalid_state,
    not_found,
    validation_error,
)
from session_service.domain.lifecycle import validate_schedule, validate_subject
from session_service.domain.policies import (
    compute_total_price,
    duration_minutes,
    price_per_hour_for_plan,
)
from session_service.libs.result import Result, Return

from .dtos import ProposalResponse


class ProposeSessionUseCase:
    """
    Use case for proposing a session in a conversation.

    Business Rules:
    - Only verified tutors may propose
    - Tutor must be a participant; the conversation has exactly one other
      participant and that participant is a student
    - One open (PROPOSED) proposal per conversation at a time
    - No proposal while the conversation already has an active session
    - Price follows the student's pricing plan
    - The proposal expires at its own start time
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tutor_id: UUID,
        conversation_id: UUID,
        subject: str,
        start_time: datetime,
        end_time: datetime,
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Result[ProposalResponse]:
        """
        Execute propose session use case.

        Args:
            tutor_id: Proposing tutor
            conversation_id: Conversation to post the proposal in
            subject: Session subject
            start_time: Proposed start (naive UTC)
            end_time: Proposed end (naive UTC)
            description: Optional free text
            now: Clock override

        Returns:
            Result with ProposalResponse DTO, or Error
        """
        now = now or utcnow()

        error = validate_subject(subject) or validate_schedule(start_time, end_time, now)
        if error:
            return Return.err(error)

        async with self.uow:
            tutor = await self.uow.users.get_by_id(tutor_id)
            if tutor is None or tutor.role != UserRole.tutor:
                return Return.err(forbidden("Only tutors can propose sessions"))
            if not tutor.is_verified:
                return Return.err(forbidden("Only verified tutors can propose sessions"))

            conversation = await self.uow.conversations.get_by_id(conversation_id)
            if conversation is None:
                return Return.err(not_found("Conversation not found"))

            if not conversation.is_participant(tutor_id):
                return Return.err(
                    forbidden("You are not a participant in this conversation")
                )

            counterparts = conversation.counterparts_of(tutor_id)
            if len(counterparts) != 1:
                return Return.err(
                    validation_error(
                        "Conversation must have exactly one other participant"
                    )
                )
            student_id = next(iter(counterparts))

            student = await self.uow.users.get_by_id(student_id)
            if student is None:
                return Return.err(not_found("Other participant not found"))
            if student.role != UserRole.student:
                return Return.err(
                    validation_error("Session proposals can only be sent to students")
                )

            # Expiry is observed on access; a stale open proposal stops blocking
            open_proposal = await self.uow.proposals.get_open_by_conversation(
                conversation_id
            )
            if open_proposal is not None:
                if not open_proposal.is_expired(now):
                    return Return.err(
                        invalid_state(
                            "There is already a pending session proposal in this conversation"
                        )
                    )
                open_proposal.status = ProposalStatus.EXPIRED
                await self.uow.proposals.update(open_proposal)

            active_session = await self.uow.sessions.get_active_by_conversation(
                conversation_id
            )
            if active_session is not None:
                return Return.err(
                    invalid_state(
                        "There is already an active session in this conversation"
                    )
                )

            duration = duration_minutes(start_time, end_time)
            price = compute_total_price(
                price_per_hour_for_plan(student.current_plan), duration
            )

            message = Message(
                conversation_id=conversation_id,
                sender_id=tutor_id,
                type=MessageType.session_proposal,
                text=f"Session proposal: {subject}",
            )
            message = await self.uow.messages.create(message)

            proposal = SessionProposal(
                message_id=message.id,
                conversation_id=conversation_id,
                sender_id=tutor_id,
                subject=subject,
                description=description,
                start_time=start_time,
                end_time=end_time,
                duration=duration,
                price=price,
                status=ProposalStatus.PROPOSED,
                expires_at=start_time,
            )
            proposal = await self.uow.proposals.create(proposal)

            await self.uow.commit()

            return Return.ok(ProposalResponse.from_entity(proposal))
