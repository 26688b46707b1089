from datetime import timedelta

import pytest

from session_service.app.use_cases.proposals import RejectProposalUseCase
from session_service.domain.entities import ProposalStatus, UserRole
from session_service.domain.errors import ErrorKind
from tests.fixtures.factories import NOW, make_conversation, make_proposal, make_user

REASON = "That slot clashes with football practice"


@pytest.fixture
def setup(mock_uow):
    tutor = make_user(UserRole.tutor)
    student = make_user(UserRole.student)
    conversation = make_conversation(tutor.id, student.id)
    message, proposal = make_proposal(conversation, tutor.id)

    mock_uow.messages.get_by_id.return_value = message
    mock_uow.proposals.get_by_message_id.return_value = proposal
    mock_uow.conversations.get_by_id.return_value = conversation
    return tutor, student, message, proposal


@pytest.mark.asyncio
async def test_student_rejects_proposal(mock_uow, setup):
    _, student, message, proposal = setup

    result = await RejectProposalUseCase(mock_uow).execute(
        message.id, student.id, REASON, now=NOW
    )

    assert result.is_ok()
    assert result.value.status == ProposalStatus.REJECTED.value
    assert result.value.rejection_reason == REASON
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_reject_requires_reason(mock_uow, setup):
    _, student, message, proposal = setup

    result = await RejectProposalUseCase(mock_uow).execute(
        message.id, student.id, "no", now=NOW
    )

    assert result.error.code == ErrorKind.VALIDATION_ERROR
    assert proposal.status == ProposalStatus.PROPOSED


@pytest.mark.asyncio
async def test_cannot_reject_own_proposal(mock_uow, setup):
    tutor, _, message, _ = setup

    result = await RejectProposalUseCase(mock_uow).execute(message.id, tutor.id, REASON, now=NOW)

    assert result.error.code == ErrorKind.FORBIDDEN
    assert result.error.message == "You cannot reject your own proposal"


@pytest.mark.asyncio
async def test_reject_expired_proposal(mock_uow, setup):
    _, student, message, proposal = setup

    result = await RejectProposalUseCase(mock_uow).execute(
        message.id, student.id, REASON, now=proposal.expires_at + timedelta(minutes=1)
    )

    assert result.error.code == ErrorKind.EXPIRED
    assert proposal.status == ProposalStatus.EXPIRED
