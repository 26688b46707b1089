"""
Accept Proposal Use Case

Turns an open proposal into a scheduled tutoring session.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import (
    AuditEvent,
    ProposalStatus,
    SessionStatus,
    TutoringSession,
    UserRole,
)
from session_service.domain.errors import conflict, not_found, validation_error
from session_service.libs.result import Result, Return

from ..sessions.dtos import SessionResponse
from .dtos import AcceptProposalResponse, ProposalResponse
from .proposal_access import load_answerable_proposal


class AcceptProposalUseCase:
    """
    Use case for accepting a session proposal.

    Business Rules:
    - Only the participant who did not send the proposal may accept
    - Proposal must be PROPOSED and not past expires_at
    - Tutor proposal accepted by the student, or student counter-proposal
      accepted by the tutor
    - Creates a SCHEDULED session; trial flag follows the conversation
    - Proposal becomes ACCEPTED and links the session
    - SESSION_SCHEDULED audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, message_id: UUID, user_id: UUID, now: Optional[datetime] = None
    ) -> Result[AcceptProposalResponse]:
        """
        Execute accept proposal use case.

        Args:
            message_id: Proposal message ID
            user_id: Accepting user
            now: Clock override

        Returns:
            Result with AcceptProposalResponse DTO, or Error
        """
        now = now or utcnow()

        async with self.uow:
            loaded = await load_answerable_proposal(
                self.uow, message_id, user_id, "accept", now
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            proposal = loaded.value.proposal
            conversation = loaded.value.conversation

            sender = await self.uow.users.get_by_id(proposal.sender_id)
            accepter = await self.uow.users.get_by_id(user_id)
            if sender is None or accepter is None:
                return Return.err(not_found("User not found"))

            if sender.role == UserRole.tutor:
                tutor_id, student_id = sender.id, accepter.id
            elif sender.role == UserRole.student:
                tutor_id, student_id = accepter.id, sender.id
            else:
                return Return.err(validation_error("Invalid proposal sender role"))

            price_per_hour = (
                round(proposal.price / (proposal.duration / 60), 2)
                if proposal.duration
                else 0.0
            )

            session = TutoringSession(
                student_id=student_id,
                tutor_id=tutor_id,
                subject=proposal.subject,
                description=proposal.description,
                start_time=proposal.start_time,
                end_time=proposal.end_time,
                duration=proposal.duration,
                price_per_hour=price_per_hour,
                total_price=proposal.price,
                status=SessionStatus.SCHEDULED,
                message_id=proposal.message_id,
                conversation_id=proposal.conversation_id,
                is_trial=conversation.trial_request_id is not None,
                trial_request_id=conversation.trial_request_id,
            )

            try:
                session = await self.uow.sessions.create(session)

                proposal.status = ProposalStatus.ACCEPTED
                proposal.session_id = session.id
                proposal = await self.uow.proposals.update(proposal)

                audit = AuditEvent(
                    user_id=student_id,
                    action="SESSION_SCHEDULED",
                    entity_type="SESSION",
                    entity_id=session.id,
                    description=f"Scheduled a {session.subject} session",
                    event_metadata={
                        "message_id": str(proposal.message_id),
                        "tutor_id": str(tutor_id),
                        "accepted_by": str(user_id),
                        "is_trial": session.is_trial,
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session proposal was answered concurrently, try again")
                )

            return Return.ok(
                AcceptProposalResponse(
                    proposal=ProposalResponse.from_entity(proposal),
                    session=SessionResponse.from_entity(session),
                )
            )
