"""
Message Entity

Conversation message; session proposals are messages of type session_proposal.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from session_service.domain.base import utcnow

from .enums import MessageType


class Message(SQLModel, table=True):
    """Message entity - a single entry in a conversation"""

    __tablename__ = "messages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    conversation_id: UUID = Field(foreign_key="conversations.id", nullable=False)
    sender_id: UUID = Field(foreign_key="users.id", nullable=False)

    type: MessageType = Field(default=MessageType.text)
    text: str = Field(default="", max_length=2000)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_message_conversation_created", "conversation_id", "created_at"),
    )
