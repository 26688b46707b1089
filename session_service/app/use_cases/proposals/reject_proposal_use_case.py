"""
Reject Proposal Use Case
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.base import utcnow
from session_service.domain.entities import ProposalStatus
from session_service.domain.errors import conflict
from session_service.domain.lifecycle import validate_reason
from session_service.libs.result import Result, Return

from .dtos import ProposalResponse
from .proposal_access import load_answerable_proposal


class RejectProposalUseCase:
    """
    Use case for rejecting a session proposal.

    Business Rules:
    - Same actor, state and expiry checks as accepting
    - Rejection reason of at least 10 characters
    - No session is created
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        message_id: UUID,
        user_id: UUID,
        rejection_reason: str,
        now: Optional[datetime] = None,
    ) -> Result[ProposalResponse]:
        now = now or utcnow()

        error = validate_reason(rejection_reason, "Rejection reason")
        if error:
            return Return.err(error)

        async with self.uow:
            loaded = await load_answerable_proposal(
                self.uow, message_id, user_id, "reject", now
            )
            if loaded.is_err():
                return Return.err(loaded.error)
            proposal = loaded.value.proposal

            proposal.status = ProposalStatus.REJECTED
            proposal.rejection_reason = rejection_reason
            try:
                proposal = await self.uow.proposals.update(proposal)
                await self.uow.commit()
            except ConcurrentUpdateError:
                return Return.err(
                    conflict("Session proposal was answered concurrently, try again")
                )

            return Return.ok(ProposalResponse.from_entity(proposal))
