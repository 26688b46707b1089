"""
User Entity

Identity and role record consulted by the session guards.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from session_service.domain.base import utcnow

from .enums import PricingPlan, TutorLevel, UserRole


class User(SQLModel, table=True):
    """
    User entity - a student, tutor or administrator.

    Business Rules:
    - Only verified tutors may propose sessions
    - Student price per hour follows current_plan
    - Tutor counters (level, completed_sessions, pending_feedback_count)
      are maintained by the completion hooks
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)

    role: UserRole = Field(nullable=False)
    is_verified: bool = Field(default=False)

    # Student pricing tier
    current_plan: Optional[PricingPlan] = Field(default=None)

    # Tutor counters
    level: TutorLevel = Field(default=TutorLevel.STARTER)
    completed_sessions: int = Field(default=0)
    pending_feedback_count: int = Field(default=0)
    level_updated_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)
