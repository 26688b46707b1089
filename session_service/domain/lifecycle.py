"""
Session lifecycle rules

State sets, timing constants and the guard functions shared by the
use cases. Guards are pure: they return an Error when the operation is
not allowed and None otherwise.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from session_service.domain.entities import (
    RescheduleStatus,
    SessionStatus,
    TutoringSession,
)
from session_service.domain.errors import (
    forbidden,
    invalid_state,
    validation_error,
)
from session_service.libs.result import Error

STARTING_SOON_WINDOW = timedelta(minutes=10)
RESCHEDULE_CUTOFF = timedelta(minutes=10)

MIN_REASON_LENGTH = 10
MIN_SUBJECT_LENGTH = 2

TERMINAL_STATES = frozenset(
    {
        SessionStatus.COMPLETED,
        SessionStatus.CANCELLED,
        SessionStatus.EXPIRED,
        SessionStatus.NO_SHOW,
    }
)

ACTIVE_STATES = frozenset(
    {
        SessionStatus.SCHEDULED,
        SessionStatus.STARTING_SOON,
        SessionStatus.IN_PROGRESS,
        SessionStatus.RESCHEDULE_REQUESTED,
    }
)

RESCHEDULABLE_STATES = frozenset(
    {SessionStatus.SCHEDULED, SessionStatus.STARTING_SOON}
)


def is_terminal(status: SessionStatus) -> bool:
    return SessionStatus(status) in TERMINAL_STATES


# --- Input validation ---


def validate_schedule(
    start_time: datetime, end_time: datetime, now: datetime
) -> Optional[Error]:
    """Window must be non-empty and start strictly after now"""
    if end_time <= start_time:
        return validation_error("End time must be after start time")
    if start_time <= now:
        return validation_error("Start time must be in the future")
    return None


def validate_subject(subject: Optional[str]) -> Optional[Error]:
    if subject is None or len(subject.strip()) < MIN_SUBJECT_LENGTH:
        return validation_error(
            f"Subject must be at least {MIN_SUBJECT_LENGTH} characters"
        )
    return None


def validate_reason(
    reason: Optional[str], label: str = "Reason", required: bool = True
) -> Optional[Error]:
    """Free-text reasons are optional only where the caller says so"""
    if reason is None or reason.strip() == "":
        if required:
            return validation_error(f"{label} is required")
        return None
    if len(reason.strip()) < MIN_REASON_LENGTH:
        return validation_error(
            f"{label} must be at least {MIN_REASON_LENGTH} characters"
        )
    return None


# --- Session guards ---


def ensure_participant(
    session: TutoringSession, user_id: UUID, action: str
) -> Optional[Error]:
    if not session.is_participant(user_id):
        return forbidden(f"You are not authorized to {action} this session")
    return None


def can_cancel(session: TutoringSession, user_id: UUID) -> Optional[Error]:
    error = ensure_participant(session, user_id, "cancel")
    if error:
        return error
    if session.status != SessionStatus.SCHEDULED:
        return invalid_state(
            f"Cannot cancel session with status: {SessionStatus(session.status).value}"
        )
    return None


def can_request_reschedule(
    session: TutoringSession, user_id: UUID, now: datetime
) -> Optional[Error]:
    error = ensure_participant(session, user_id, "reschedule")
    if error:
        return error

    if session.status not in RESCHEDULABLE_STATES:
        return invalid_state(
            f"Cannot reschedule session with status: {SessionStatus(session.status).value}"
        )

    request = session.reschedule_request
    if request is not None and request.is_pending:
        return invalid_state("This session already has a pending reschedule request")

    # Must be strictly more than the cutoff before start
    if now >= session.start_time - RESCHEDULE_CUTOFF:
        return invalid_state("Cannot reschedule within 10 minutes of session start")

    return None


def can_respond_to_reschedule(
    session: TutoringSession, user_id: UUID, verb: str
) -> Optional[Error]:
    """Shared precondition of approve and reject; verb is used in messages"""
    error = ensure_participant(session, user_id, f"{verb} a reschedule for")
    if error:
        return error

    request = session.reschedule_request
    if request is None:
        return invalid_state("No reschedule request found")

    if request.status != RescheduleStatus.PENDING:
        return invalid_state(
            f"Reschedule request is already {request.status.value.lower()}"
        )

    if session.status != SessionStatus.RESCHEDULE_REQUESTED:
        return invalid_state(
            f"Cannot {verb} reschedule for session with status: "
            f"{SessionStatus(session.status).value}"
        )

    if request.requested_by == user_id:
        return forbidden(f"You cannot {verb} your own reschedule request")

    return None


def can_complete(session: TutoringSession) -> Optional[Error]:
    if session.status == SessionStatus.COMPLETED:
        return invalid_state("Session is already completed")
    if is_terminal(session.status):
        return invalid_state(
            f"Cannot complete session with status: {SessionStatus(session.status).value}"
        )
    return None
