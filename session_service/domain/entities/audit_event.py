"""
AuditEvent Entity

Immutable activity log of session lifecycle events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from session_service.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - observational record of what happened to a session.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id is the acting user; nullable for system actions
    - action is one of SESSION_SCHEDULED, SESSION_CANCELLED, SESSION_COMPLETED,
      SESSION_RESCHEDULE_REQUESTED, SESSION_RESCHEDULE_APPROVED,
      SESSION_RESCHEDULE_REJECTED
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)
    entity_type: str = Field(default="SESSION", max_length=50)
    entity_id: Optional[UUID] = Field(default=None, index=True)
    description: str = Field(default="", max_length=500)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_entity_action", "entity_id", "action"),
    )
