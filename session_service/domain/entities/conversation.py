"""
Conversation Entity

Chat between a tutor and a student; proposals are posted here.
"""

from datetime import datetime
from typing import List, Optional, Set
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from session_service.domain.base import utcnow


class Conversation(SQLModel, table=True):
    """
    Conversation entity - participant set plus optional trial link.

    Business Rules:
    - A conversation linked to a trial request books free trial sessions
    """

    __tablename__ = "conversations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Stored as strings so the JSON column stays portable
    participant_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    trial_request_id: Optional[UUID] = Field(default=None, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def participants(self) -> Set[UUID]:
        return {UUID(str(p)) for p in (self.participant_ids or [])}

    def is_participant(self, user_id: UUID) -> bool:
        return user_id in self.participants

    def counterparts_of(self, user_id: UUID) -> Set[UUID]:
        """Participants other than user_id"""
        return self.participants - {user_id}
