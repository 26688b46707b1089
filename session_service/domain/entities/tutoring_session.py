"""
TutoringSession Entity

The booked session and its lifecycle state.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Integer, SQLModel

from session_service.domain.base import utcnow

from .enums import RescheduleStatus, SessionStatus

# Optimistic locking column, shared with __mapper_args__ below
_version_column = Column("version", Integer, nullable=False)


@dataclass(frozen=True)
class RescheduleRequest:
    """
    Reschedule negotiation embedded in a session.

    A session without a request exposes ``None``; a rejected request is still
    a RescheduleRequest with status REJECTED.
    """

    requested_by: UUID
    requested_at: datetime
    new_start_time: datetime
    new_end_time: datetime
    status: RescheduleStatus
    reason: Optional[str] = None
    responded_by: Optional[UUID] = None
    responded_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RescheduleStatus.PENDING


class TutoringSession(SQLModel, table=True):
    """
    TutoringSession entity - a committed booking between student and tutor.

    Business Rules:
    - Created SCHEDULED, only from an accepted proposal
    - end_time > start_time
    - started_at, completed_at, cancelled_at, expired_at are stamped once
    - At most one PENDING reschedule request; RESCHEDULE_REQUESTED implies one
    - Never deleted; terminal sessions are kept for billing and review
    - Every write is version-checked (optimistic locking)
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    student_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    tutor_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    subject: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)

    # Timing
    start_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    end_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    duration: int  # minutes

    # Pricing
    price_per_hour: float
    total_price: float

    status: SessionStatus = Field(default=SessionStatus.SCHEDULED)

    # Trial
    is_trial: bool = Field(default=False)
    trial_request_id: Optional[UUID] = Field(default=None)

    # Origin
    message_id: Optional[UUID] = Field(default=None)
    conversation_id: Optional[UUID] = Field(default=None, index=True)

    # Reschedule request, flattened; read through reschedule_request
    reschedule_requested_by: Optional[UUID] = Field(default=None)
    reschedule_requested_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    reschedule_new_start_time: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    reschedule_new_end_time: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    reschedule_reason: Optional[str] = Field(default=None, max_length=1000)
    reschedule_status: Optional[RescheduleStatus] = Field(default=None)
    reschedule_responded_by: Optional[UUID] = Field(default=None)
    reschedule_responded_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    previous_start_time: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    previous_end_time: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Cancellation
    cancellation_reason: Optional[str] = Field(default=None, max_length=1000)
    cancelled_by: Optional[UUID] = Field(default=None)

    # Lifecycle timestamps
    started_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expired_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    version: Optional[int] = Field(default=None, sa_column=_version_column)

    __mapper_args__ = {"version_id_col": _version_column}

    __table_args__ = (
        Index("idx_session_status_start", "status", "start_time"),
        Index("idx_session_status_end", "status", "end_time"),
    )

    @property
    def reschedule_request(self) -> Optional[RescheduleRequest]:
        if self.reschedule_status is None:
            return None
        return RescheduleRequest(
            requested_by=self.reschedule_requested_by,
            requested_at=self.reschedule_requested_at,
            new_start_time=self.reschedule_new_start_time,
            new_end_time=self.reschedule_new_end_time,
            status=RescheduleStatus(self.reschedule_status),
            reason=self.reschedule_reason,
            responded_by=self.reschedule_responded_by,
            responded_at=self.reschedule_responded_at,
        )

    def set_reschedule_request(self, request: RescheduleRequest) -> None:
        self.reschedule_requested_by = request.requested_by
        self.reschedule_requested_at = request.requested_at
        self.reschedule_new_start_time = request.new_start_time
        self.reschedule_new_end_time = request.new_end_time
        self.reschedule_reason = request.reason
        self.reschedule_status = request.status
        self.reschedule_responded_by = request.responded_by
        self.reschedule_responded_at = request.responded_at

    @property
    def window(self) -> timedelta:
        return self.end_time - self.start_time

    def is_participant(self, user_id: UUID) -> bool:
        return user_id in (self.student_id, self.tutor_id)
