"""
Session Use Case DTOs (Data Transfer Objects)

Response classes shared by the session, reschedule and proposal use cases.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from session_service.domain.entities import TutoringSession


# ============================================================================
# Response DTOs
# ============================================================================


class RescheduleRequestInfo(BaseModel):
    """Embedded reschedule request as exposed to callers"""

    requested_by: str
    requested_at: datetime
    new_start_time: datetime
    new_end_time: datetime
    reason: Optional[str] = None
    status: str
    responded_by: Optional[str] = None
    responded_at: Optional[datetime] = None


class SessionResponse(BaseModel):
    """Single tutoring session"""

    id: str
    student_id: str
    tutor_id: str
    subject: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    duration: int
    price_per_hour: float
    total_price: float
    status: str
    is_trial: bool
    conversation_id: Optional[str] = None
    message_id: Optional[str] = None
    reschedule_request: Optional[RescheduleRequestInfo] = None
    previous_start_time: Optional[datetime] = None
    previous_end_time: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    cancelled_by: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, session: TutoringSession) -> "SessionResponse":
        request = session.reschedule_request
        return cls(
            id=str(session.id),
            student_id=str(session.student_id),
            tutor_id=str(session.tutor_id),
            subject=session.subject,
            description=session.description,
            start_time=session.start_time,
            end_time=session.end_time,
            duration=session.duration,
            price_per_hour=session.price_per_hour,
            total_price=session.total_price,
            status=_value(session.status),
            is_trial=session.is_trial,
            conversation_id=_str_or_none(session.conversation_id),
            message_id=_str_or_none(session.message_id),
            reschedule_request=(
                RescheduleRequestInfo(
                    requested_by=str(request.requested_by),
                    requested_at=request.requested_at,
                    new_start_time=request.new_start_time,
                    new_end_time=request.new_end_time,
                    reason=request.reason,
                    status=request.status.value,
                    responded_by=_str_or_none(request.responded_by),
                    responded_at=request.responded_at,
                )
                if request is not None
                else None
            ),
            previous_start_time=session.previous_start_time,
            previous_end_time=session.previous_end_time,
            cancellation_reason=session.cancellation_reason,
            cancelled_by=_str_or_none(session.cancelled_by),
            started_at=session.started_at,
            completed_at=session.completed_at,
            cancelled_at=session.cancelled_at,
            expired_at=session.expired_at,
        )


class SessionListResponse(BaseModel):
    """Page of sessions"""

    sessions: List[SessionResponse]
    scope: str
    limit: int
    offset: int


class CompleteSessionResponse(BaseModel):
    """Completed session plus the names of hooks that did not run cleanly"""

    session: SessionResponse
    failed_hooks: List[str] = []


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def _str_or_none(value) -> Optional[str]:
    return str(value) if value is not None else None
