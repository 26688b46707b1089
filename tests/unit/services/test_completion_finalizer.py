from unittest.mock import AsyncMock

import pytest

from session_service.app.services.completion_finalizer import CompletionFinalizer
from session_service.domain.entities import SessionStatus
from session_service.domain.errors import not_found
from session_service.libs.result import Return
from tests.fixtures.factories import NOW, make_session


@pytest.fixture
def completed_session():
    return make_session(status=SessionStatus.COMPLETED, completed_at=NOW)


@pytest.mark.asyncio
async def test_each_hook_commits_on_success(mock_uow, completed_session):
    finalizer = CompletionFinalizer(mock_uow)
    finalizer.feedback_scheduler.schedule = AsyncMock(return_value=Return.ok(None))
    finalizer.level_recalculator.recalculate = AsyncMock(return_value=Return.ok(None))

    failed = await finalizer.finalize(completed_session)

    assert failed == []
    assert mock_uow.commit.await_count == 2
    mock_uow.rollback.assert_not_called()
    finalizer.feedback_scheduler.schedule.assert_awaited_once_with(
        completed_session.id,
        completed_session.tutor_id,
        completed_session.student_id,
        NOW,
    )


@pytest.mark.asyncio
async def test_failing_hook_does_not_block_the_next(mock_uow, completed_session):
    # Arrange
    finalizer = CompletionFinalizer(mock_uow)
    finalizer.feedback_scheduler.schedule = AsyncMock(side_effect=RuntimeError("boom"))
    finalizer.level_recalculator.recalculate = AsyncMock(return_value=Return.ok(None))

    # Act
    failed = await finalizer.finalize(completed_session)

    # Assert
    assert failed == ["feedback"]
    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()
    finalizer.level_recalculator.recalculate.assert_awaited_once_with(
        completed_session.tutor_id
    )


@pytest.mark.asyncio
async def test_error_result_is_rolled_back(mock_uow, completed_session):
    finalizer = CompletionFinalizer(mock_uow)
    finalizer.feedback_scheduler.schedule = AsyncMock(return_value=Return.ok(None))
    finalizer.level_recalculator.recalculate = AsyncMock(
        return_value=Return.err(not_found("Tutor not found"))
    )

    failed = await finalizer.finalize(completed_session)

    assert failed == ["tutor_level"]
    mock_uow.rollback.assert_awaited_once()
