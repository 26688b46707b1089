from datetime import timedelta
from uuid import uuid4

import pytest

from session_service.app.use_cases.reschedule import RespondRescheduleUseCase
from session_service.domain.entities import RescheduleStatus, SessionStatus
from session_service.domain.errors import ErrorKind
from tests.fixtures.factories import NOW, make_session, with_pending_reschedule

NEW_START = NOW + timedelta(days=3)


@pytest.fixture
def pending(mock_uow):
    session = make_session(duration_minutes=60)
    with_pending_reschedule(session, session.student_id, NEW_START)
    mock_uow.sessions.get_by_id.return_value = session
    return session


@pytest.mark.asyncio
async def test_approve_moves_session(mock_uow, pending):
    # Act
    result = await RespondRescheduleUseCase(mock_uow).approve(
        pending.id, pending.tutor_id, now=NOW
    )

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.status == SessionStatus.SCHEDULED.value
    assert response.start_time == NEW_START
    assert response.end_time == NEW_START + timedelta(minutes=60)
    assert response.reschedule_request.status == RescheduleStatus.APPROVED.value
    assert response.reschedule_request.responded_by == str(pending.tutor_id)
    assert response.reschedule_request.responded_at == NOW

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "SESSION_RESCHEDULE_APPROVED"
    assert audit.description.startswith("Approved reschedule")


@pytest.mark.asyncio
async def test_reject_keeps_original_times(mock_uow, pending):
    original_start, original_end = pending.start_time, pending.end_time

    result = await RespondRescheduleUseCase(mock_uow).reject(
        pending.id, pending.tutor_id, now=NOW
    )

    assert result.is_ok()
    assert result.value.status == SessionStatus.SCHEDULED.value
    assert result.value.start_time == original_start
    assert result.value.end_time == original_end
    assert result.value.reschedule_request.status == RescheduleStatus.REJECTED.value

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "SESSION_RESCHEDULE_REJECTED"
    assert audit.description.startswith("Rejected reschedule")


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", ["approve", "reject"])
async def test_requester_cannot_answer_own_request(mock_uow, pending, answer):
    use_case = RespondRescheduleUseCase(mock_uow)

    result = await getattr(use_case, answer)(pending.id, pending.student_id, now=NOW)

    assert result.error.code == ErrorKind.FORBIDDEN
    assert result.error.message == f"You cannot {answer} your own reschedule request"
    assert pending.status == SessionStatus.RESCHEDULE_REQUESTED
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_outsider_cannot_answer(mock_uow, pending):
    result = await RespondRescheduleUseCase(mock_uow).approve(pending.id, uuid4(), now=NOW)

    assert result.error.code == ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_answer_without_request(mock_uow):
    session = make_session()
    mock_uow.sessions.get_by_id.return_value = session

    result = await RespondRescheduleUseCase(mock_uow).approve(
        session.id, session.tutor_id, now=NOW
    )

    assert result.error.code == ErrorKind.INVALID_STATE
    assert result.error.message == "No reschedule request found"


@pytest.mark.asyncio
async def test_answered_request_cannot_be_answered_again(mock_uow, pending):
    use_case = RespondRescheduleUseCase(mock_uow)
    await use_case.reject(pending.id, pending.tutor_id, now=NOW)

    result = await use_case.approve(pending.id, pending.tutor_id, now=NOW)

    assert result.error.code == ErrorKind.INVALID_STATE
    assert result.error.message == "Reschedule request is already rejected"


@pytest.mark.asyncio
async def test_approve_after_requested_start_passed(mock_uow, pending):
    result = await RespondRescheduleUseCase(mock_uow).approve(
        pending.id, pending.tutor_id, now=NEW_START + timedelta(minutes=1)
    )

    assert result.error.code == ErrorKind.INVALID_STATE
    assert pending.start_time != NEW_START
