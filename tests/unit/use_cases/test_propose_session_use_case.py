from datetime import timedelta
from uuid import uuid4

import pytest

from session_service.app.use_cases.proposals import ProposeSessionUseCase
from session_service.domain.entities import (
    MessageType,
    PricingPlan,
    ProposalStatus,
    SessionStatus,
    UserRole,
)
from session_service.domain.errors import ErrorKind
from tests.fixtures.factories import (
    NOW,
    make_conversation,
    make_proposal,
    make_session,
    make_user,
)


@pytest.fixture
def parties(mock_uow):
    tutor = make_user(UserRole.tutor)
    student = make_user(UserRole.student, current_plan=PricingPlan.REGULAR)
    conversation = make_conversation(tutor.id, student.id)

    users = {tutor.id: tutor, student.id: student}
    mock_uow.users.get_by_id.side_effect = lambda user_id: users.get(user_id)
    mock_uow.conversations.get_by_id.return_value = conversation
    return tutor, student, conversation


async def _propose(mock_uow, tutor, conversation, **overrides):
    start = overrides.pop("start_time", NOW + timedelta(days=1))
    end = overrides.pop("end_time", start + timedelta(minutes=90))
    return await ProposeSessionUseCase(mock_uow).execute(
        tutor_id=tutor.id,
        conversation_id=conversation.id,
        subject=overrides.pop("subject", "Algebra II"),
        start_time=start,
        end_time=end,
        description="Quadratics",
        now=NOW,
    )


@pytest.mark.asyncio
async def test_propose_creates_message_and_proposal(mock_uow, parties):
    # Arrange
    tutor, student, conversation = parties

    # Act
    result = await _propose(mock_uow, tutor, conversation)

    # Assert
    assert result.is_ok()
    proposal = result.value
    assert proposal.status == ProposalStatus.PROPOSED.value
    assert proposal.duration == 90
    assert proposal.price == 42.0  # REGULAR: 28/h * 1.5h
    assert proposal.expires_at == proposal.start_time
    assert proposal.sender_id == str(tutor.id)

    message = mock_uow.messages.create.call_args.args[0]
    assert message.type == MessageType.session_proposal
    assert message.text == "Session proposal: Algebra II"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_propose_requires_verified_tutor(mock_uow, parties):
    tutor, student, conversation = parties
    tutor.is_verified = False

    result = await _propose(mock_uow, tutor, conversation)

    assert result.is_err()
    assert result.error.code == ErrorKind.FORBIDDEN
    assert result.error.message == "Only verified tutors can propose sessions"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_propose_refused_for_students(mock_uow, parties):
    tutor, student, conversation = parties

    result = await ProposeSessionUseCase(mock_uow).execute(
        tutor_id=student.id,
        conversation_id=conversation.id,
        subject="Algebra II",
        start_time=NOW + timedelta(days=1),
        end_time=NOW + timedelta(days=1, hours=1),
        now=NOW,
    )

    assert result.error.code == ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_propose_requires_future_start(mock_uow, parties):
    tutor, student, conversation = parties

    result = await _propose(
        mock_uow, tutor, conversation, start_time=NOW - timedelta(minutes=5)
    )

    assert result.error.code == ErrorKind.VALIDATION_ERROR
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_propose_requires_end_after_start(mock_uow, parties):
    tutor, student, conversation = parties
    start = NOW + timedelta(days=1)

    result = await _propose(mock_uow, tutor, conversation, start_time=start, end_time=start)

    assert result.error.code == ErrorKind.VALIDATION_ERROR
    assert result.error.message == "End time must be after start time"


@pytest.mark.asyncio
async def test_propose_rejects_short_subject(mock_uow, parties):
    tutor, student, conversation = parties

    result = await _propose(mock_uow, tutor, conversation, subject="A")

    assert result.error.code == ErrorKind.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_propose_tutor_must_be_participant(mock_uow, parties):
    tutor, student, _ = parties
    mock_uow.conversations.get_by_id.return_value = make_conversation(student.id, uuid4())

    result = await _propose(mock_uow, tutor, make_conversation(student.id))

    assert result.error.code == ErrorKind.FORBIDDEN


@pytest.mark.asyncio
async def test_propose_conversation_not_found(mock_uow, parties):
    tutor, student, conversation = parties
    mock_uow.conversations.get_by_id.return_value = None

    result = await _propose(mock_uow, tutor, conversation)

    assert result.error.code == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_propose_needs_exactly_one_counterpart(mock_uow, parties):
    tutor, student, _ = parties
    group = make_conversation(tutor.id, student.id, uuid4())
    mock_uow.conversations.get_by_id.return_value = group

    result = await _propose(mock_uow, tutor, group)

    assert result.error.code == ErrorKind.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_propose_counterpart_must_be_student(mock_uow, parties):
    tutor, student, conversation = parties
    student.role = UserRole.admin

    result = await _propose(mock_uow, tutor, conversation)

    assert result.error.code == ErrorKind.VALIDATION_ERROR
    assert result.error.message == "Session proposals can only be sent to students"


@pytest.mark.asyncio
async def test_propose_blocked_by_open_proposal(mock_uow, parties):
    tutor, student, conversation = parties
    _, open_proposal = make_proposal(conversation, tutor.id, start_time=NOW + timedelta(hours=5))
    mock_uow.proposals.get_open_by_conversation.return_value = open_proposal

    result = await _propose(mock_uow, tutor, conversation)

    assert result.error.code == ErrorKind.INVALID_STATE
    mock_uow.proposals.create.assert_not_called()


@pytest.mark.asyncio
async def test_stale_open_proposal_is_expired_instead_of_blocking(mock_uow, parties):
    tutor, student, conversation = parties
    _, stale = make_proposal(conversation, tutor.id, start_time=NOW - timedelta(hours=1))
    mock_uow.proposals.get_open_by_conversation.return_value = stale

    result = await _propose(mock_uow, tutor, conversation)

    assert result.is_ok()
    assert stale.status == ProposalStatus.EXPIRED
    mock_uow.proposals.update.assert_awaited_once_with(stale)


@pytest.mark.asyncio
async def test_propose_blocked_by_active_session(mock_uow, parties):
    tutor, student, conversation = parties
    mock_uow.sessions.get_active_by_conversation.return_value = make_session(
        student.id, tutor.id, status=SessionStatus.SCHEDULED
    )

    result = await _propose(mock_uow, tutor, conversation)

    assert result.error.code == ErrorKind.INVALID_STATE
    assert result.error.message == "There is already an active session in this conversation"
