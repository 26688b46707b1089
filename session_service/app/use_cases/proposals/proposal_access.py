"""
Shared lookup for use cases that answer a proposal (accept, reject, counter).
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.entities import (
    Conversation,
    Message,
    MessageType,
    ProposalStatus,
    SessionProposal,
)
from session_service.domain.errors import (
    expired,
    forbidden,
    invalid_state,
    not_found,
    validation_error,
)
from session_service.libs.result import Result, Return


@dataclass
class ProposalContext:
    message: Message
    proposal: SessionProposal
    conversation: Conversation


async def load_answerable_proposal(
    uow: UnitOfWork, message_id: UUID, user_id: UUID, verb: str, now: datetime
) -> Result[ProposalContext]:
    """
    Resolve a proposal the user may answer.

    Must be called inside ``async with uow``. An expired proposal always
    answers EXPIRED; the first such attempt flips it to EXPIRED and commits.
    """
    message = await uow.messages.get_by_id(message_id)
    if message is None:
        return Return.err(not_found("Session proposal not found"))

    proposal = await uow.proposals.get_by_message_id(message_id)
    if message.type != MessageType.session_proposal or proposal is None:
        return Return.err(validation_error("This is not a session proposal"))

    conversation = await uow.conversations.get_by_id(message.conversation_id)
    if conversation is None:
        return Return.err(not_found("Conversation not found"))

    if not conversation.is_participant(user_id):
        return Return.err(forbidden("You are not a participant in this conversation"))

    if proposal.sender_id == user_id:
        return Return.err(forbidden(f"You cannot {verb} your own proposal"))

    if proposal.status == ProposalStatus.EXPIRED:
        return Return.err(expired("Session proposal has expired"))

    if proposal.status != ProposalStatus.PROPOSED:
        status = ProposalStatus(proposal.status).value
        return Return.err(
            invalid_state(f"Session proposal is already {status.lower()}")
        )

    if proposal.is_expired(now):
        proposal.status = ProposalStatus.EXPIRED
        await uow.proposals.update(proposal)
        await uow.commit()
        return Return.err(expired("Session proposal has expired"))

    return Return.ok(ProposalContext(message, proposal, conversation))
