from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from session_service.api.error import raise_for_error
from session_service.api.utils.datetimes import as_naive_utc
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.app.use_cases.proposals import (
    AcceptProposalResponse,
    AcceptProposalUseCase,
    CounterProposeUseCase,
    ProposalResponse,
    ProposeSessionUseCase,
    RejectProposalUseCase,
)
from session_service.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Proposals"])


class ProposeSessionRequest(BaseModel):
    """Request to propose a session in a conversation"""

    conversation_id: UUID
    subject: str = Field(..., description="Session subject, at least 2 characters")
    start_time: datetime
    end_time: datetime
    description: Optional[str] = None


class RejectProposalRequest(BaseModel):
    """Request to reject a proposal"""

    rejection_reason: str = Field(..., description="At least 10 characters")


class CounterProposeRequest(BaseModel):
    """Request to answer a proposal with another time"""

    new_start_time: datetime
    new_end_time: datetime
    reason: Optional[str] = None


@router.post(
    "/propose",
    status_code=status.HTTP_201_CREATED,
    response_model=ProposalResponse,
)
async def propose_session(
    request: ProposeSessionRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Propose Session

    Verified tutor posts a session proposal to the student in a conversation.
    The proposal expires at its start time.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: not a verified tutor / not a participant
        - 404 Not Found: conversation or student missing
        - 409 Conflict: open proposal or active session in the conversation
    """
    use_case = ProposeSessionUseCase(uow)
    result = await use_case.execute(
        tutor_id=UUID(current_user["user_id"]),
        conversation_id=request.conversation_id,
        subject=request.subject,
        start_time=as_naive_utc(request.start_time),
        end_time=as_naive_utc(request.end_time),
        description=request.description,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/proposals/{message_id}/accept",
    status_code=status.HTTP_201_CREATED,
    response_model=AcceptProposalResponse,
)
async def accept_proposal(
    message_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Proposal

    The other participant accepts and a SCHEDULED session is booked.

    Raises:
        - 400 Bad Request: not a session proposal
        - 403 Forbidden: own proposal / not a participant
        - 404 Not Found: proposal missing
        - 409 Conflict: proposal no longer open
        - 410 Gone: proposal expired
    """
    use_case = AcceptProposalUseCase(uow)
    result = await use_case.execute(message_id, UUID(current_user["user_id"]))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/proposals/{message_id}/reject",
    status_code=status.HTTP_200_OK,
    response_model=ProposalResponse,
)
async def reject_proposal(
    message_id: UUID,
    request: RejectProposalRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reject Proposal

    Raises:
        - 400 Bad Request: reason too short / not a session proposal
        - 403 Forbidden: own proposal / not a participant
        - 404 Not Found: proposal missing
        - 409 Conflict: proposal no longer open
        - 410 Gone: proposal expired
    """
    use_case = RejectProposalUseCase(uow)
    result = await use_case.execute(
        message_id, UUID(current_user["user_id"]), request.rejection_reason
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/proposals/{message_id}/counter",
    status_code=status.HTTP_201_CREATED,
    response_model=ProposalResponse,
)
async def counter_propose(
    message_id: UUID,
    request: CounterProposeRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Counter-Propose

    Student answers a tutor's proposal with another time. The original
    becomes COUNTER_PROPOSED and a new proposal from the student is posted.
    """
    use_case = CounterProposeUseCase(uow)
    result = await use_case.execute(
        message_id,
        UUID(current_user["user_id"]),
        new_start_time=as_naive_utc(request.new_start_time),
        new_end_time=as_naive_utc(request.new_end_time),
        reason=request.reason,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
