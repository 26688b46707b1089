from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from session_service.api.error import raise_for_error
from session_service.api.utils.datetimes import as_naive_utc
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.app.use_cases.reschedule import (
    RequestRescheduleUseCase,
    RespondRescheduleUseCase,
)
from session_service.app.use_cases.sessions import (
    CancelSessionUseCase,
    GetSessionUseCase,
    ListSessionsUseCase,
    SessionListResponse,
    SessionResponse,
)
from session_service.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class CancelSessionRequest(BaseModel):
    """Request to cancel a scheduled session"""

    cancellation_reason: str = Field(..., description="At least 10 characters")


class RescheduleRequestBody(BaseModel):
    """Request to move a session; the session keeps its length"""

    new_start_time: datetime
    reason: Optional[str] = None


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=SessionListResponse,
)
async def list_sessions(
    scope: str = Query("upcoming", description="upcoming or history"),
    limit: int = Query(20),
    offset: int = Query(0),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Sessions

    upcoming: non-terminal sessions, soonest first.
    history: completed, cancelled and expired sessions, most recent first.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(
        UUID(current_user["user_id"]),
        current_user["role"],
        scope=scope,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def get_session(
    session_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Get Session - participants and admins only"""
    use_case = GetSessionUseCase(uow)
    result = await use_case.execute(
        session_id, UUID(current_user["user_id"]), current_user["role"]
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/{session_id}/cancel",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def cancel_session(
    session_id: UUID,
    request: CancelSessionRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Session

    Raises:
        - 400 Bad Request: reason too short
        - 403 Forbidden: not a participant
        - 404 Not Found: session missing
        - 409 Conflict: session not SCHEDULED / concurrent update
    """
    use_case = CancelSessionUseCase(uow)
    result = await use_case.execute(
        session_id, UUID(current_user["user_id"]), request.cancellation_reason
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{session_id}/reschedule",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def request_reschedule(
    session_id: UUID,
    request: RescheduleRequestBody,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Request Reschedule

    Raises:
        - 400 Bad Request: new start not in the future / reason too short
        - 403 Forbidden: not a participant
        - 404 Not Found: session missing
        - 409 Conflict: wrong status, pending request, within 10 minutes of
          start, or concurrent update
    """
    use_case = RequestRescheduleUseCase(uow)
    result = await use_case.execute(
        session_id,
        UUID(current_user["user_id"]),
        new_start_time=as_naive_utc(request.new_start_time),
        reason=request.reason,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{session_id}/reschedule/approve",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def approve_reschedule(
    session_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Approve Reschedule - the other participant only"""
    use_case = RespondRescheduleUseCase(uow)
    result = await use_case.approve(session_id, UUID(current_user["user_id"]))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{session_id}/reschedule/reject",
    status_code=status.HTTP_200_OK,
    response_model=SessionResponse,
)
async def reject_reschedule(
    session_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Reject Reschedule - the other participant only; times stay unchanged"""
    use_case = RespondRescheduleUseCase(uow)
    result = await use_case.reject(session_id, UUID(current_user["user_id"]))

    if result.is_err():
        raise_for_error(result.error)

    return result.value
