from datetime import datetime
from uuid import uuid4

import pytest

from session_service.app.services.feedback_scheduler import FeedbackScheduler
from session_service.domain.entities import FeedbackStatus, SessionFeedback, UserRole
from session_service.domain.errors import ErrorKind
from tests.fixtures.factories import make_user


@pytest.mark.asyncio
async def test_schedule_creates_pending_feedback(mock_uow):
    # Arrange
    tutor = make_user(UserRole.tutor, pending_feedback_count=2)
    mock_uow.users.get_by_id.return_value = tutor
    session_id, student_id = uuid4(), uuid4()

    # Act
    result = await FeedbackScheduler(mock_uow).schedule(
        session_id, tutor.id, student_id, datetime(2026, 1, 20, 16, 0)
    )

    # Assert
    assert result.is_ok()
    feedback = result.value
    assert feedback.status == FeedbackStatus.PENDING
    assert feedback.session_id == session_id
    assert feedback.due_date == datetime(2026, 2, 3, 23, 59, 59, 999000)
    assert tutor.pending_feedback_count == 3
    mock_uow.users.update.assert_awaited_once_with(tutor)
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_schedule_refuses_duplicate(mock_uow):
    session_id = uuid4()
    mock_uow.feedback.get_by_session_id.return_value = SessionFeedback(
        session_id=session_id,
        tutor_id=uuid4(),
        student_id=uuid4(),
        due_date=datetime(2026, 2, 3),
    )

    result = await FeedbackScheduler(mock_uow).schedule(
        session_id, uuid4(), uuid4(), datetime(2026, 1, 20)
    )

    assert result.error.code == ErrorKind.INVALID_STATE
    mock_uow.feedback.create.assert_not_called()


@pytest.mark.asyncio
async def test_schedule_requires_tutor(mock_uow):
    mock_uow.users.get_by_id.return_value = None

    result = await FeedbackScheduler(mock_uow).schedule(
        uuid4(), uuid4(), uuid4(), datetime(2026, 1, 20)
    )

    assert result.error.code == ErrorKind.NOT_FOUND
