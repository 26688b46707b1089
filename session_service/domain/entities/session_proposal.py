"""
SessionProposal Entity

Pre-booking offer attached to a session_proposal message.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Integer, SQLModel

from session_service.domain.base import utcnow

from .enums import ProposalStatus

# Optimistic locking column, shared with __mapper_args__ below
_version_column = Column("version", Integer, nullable=False)


class SessionProposal(SQLModel, table=True):
    """
    SessionProposal entity - time-boxed offer to hold a session.

    Business Rules:
    - expires_at equals start_time; a proposal cannot outlive its own start
    - Expiry is observed on access, never by a timer
    - Only the participant who did not send it may accept or reject it
    - session_id is set once, when the proposal is accepted
    - Every write is version-checked, so only one response can win
    """

    __tablename__ = "session_proposals"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    message_id: UUID = Field(foreign_key="messages.id", unique=True, nullable=False)
    conversation_id: UUID = Field(foreign_key="conversations.id", nullable=False)
    sender_id: UUID = Field(foreign_key="users.id", nullable=False)

    subject: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)

    start_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    end_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    duration: int  # minutes
    price: float

    status: ProposalStatus = Field(default=ProposalStatus.PROPOSED)
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    session_id: Optional[UUID] = Field(default=None)
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)

    # Counter-proposals
    original_proposal_id: Optional[UUID] = Field(default=None)
    counter_proposal_reason: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    version: Optional[int] = Field(default=None, sa_column=_version_column)

    __mapper_args__ = {"version_id_col": _version_column}

    __table_args__ = (
        Index("idx_proposal_conversation_status", "conversation_id", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
