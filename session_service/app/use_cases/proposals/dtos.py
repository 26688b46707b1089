"""
Proposal Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from session_service.app.use_cases.sessions.dtos import SessionResponse
from session_service.domain.entities import SessionProposal


# ============================================================================
# Response DTOs
# ============================================================================


class ProposalResponse(BaseModel):
    """Session proposal, addressed by its message id"""

    message_id: str
    conversation_id: str
    sender_id: str
    subject: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    duration: int
    price: float
    status: str
    expires_at: datetime
    session_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    original_proposal_id: Optional[str] = None
    counter_proposal_reason: Optional[str] = None

    @classmethod
    def from_entity(cls, proposal: SessionProposal) -> "ProposalResponse":
        return cls(
            message_id=str(proposal.message_id),
            conversation_id=str(proposal.conversation_id),
            sender_id=str(proposal.sender_id),
            subject=proposal.subject,
            description=proposal.description,
            start_time=proposal.start_time,
            end_time=proposal.end_time,
            duration=proposal.duration,
            price=proposal.price,
            status=getattr(proposal.status, "value", proposal.status),
            expires_at=proposal.expires_at,
            session_id=str(proposal.session_id) if proposal.session_id else None,
            rejection_reason=proposal.rejection_reason,
            original_proposal_id=(
                str(proposal.original_proposal_id)
                if proposal.original_proposal_id
                else None
            ),
            counter_proposal_reason=proposal.counter_proposal_reason,
        )


class AcceptProposalResponse(BaseModel):
    """Accepted proposal and the session it booked"""

    proposal: ProposalResponse
    session: SessionResponse
