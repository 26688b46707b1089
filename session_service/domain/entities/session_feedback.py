"""
SessionFeedback Entity

Pending tutor feedback created when a session completes.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from session_service.domain.base import utcnow

from .enums import FeedbackStatus


class SessionFeedback(SQLModel, table=True):
    """
    SessionFeedback entity - tutor's post-session feedback about the student.

    Business Rules:
    - One record per session
    - Due on the 3rd of the month after completion, end of day
    """

    __tablename__ = "session_feedback"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    session_id: UUID = Field(foreign_key="sessions.id", unique=True, nullable=False)
    tutor_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    student_id: UUID = Field(foreign_key="users.id", nullable=False)

    status: FeedbackStatus = Field(default=FeedbackStatus.PENDING)
    due_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    submitted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_feedback_tutor_status", "tutor_id", "status"),)
