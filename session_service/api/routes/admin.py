"""
Admin API Routes - Operational Endpoints

Authentication is via Admin API Key, not user JWTs.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, status

from session_service.api.error import raise_for_error
from session_service.api.utils.admin_auth import verify_admin_api_key
from session_service.app.services.unit_of_work import UnitOfWork
from session_service.app.use_cases.lifecycle import SweepResult, SweepSessionsUseCase
from session_service.app.use_cases.sessions import (
    CompleteSessionResponse,
    CompleteSessionUseCase,
)
from session_service.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.patch(
    "/sessions/{session_id}/complete",
    status_code=status.HTTP_200_OK,
    response_model=CompleteSessionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def complete_session(
    session_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Complete Session

    Marks the session COMPLETED, then schedules tutor feedback and
    recalculates the tutor's level. Hook failures are reported in
    failed_hooks and never undo the completion.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: session missing
        - 409 Conflict: session already completed or otherwise terminal
    """
    use_case = CompleteSessionUseCase(uow)
    result = await use_case.execute(session_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/sessions/sweep",
    status_code=status.HTTP_200_OK,
    response_model=SweepResult,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sweep_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Run one lifecycle sweep now.

    Requires: X-Admin-API-Key header
    """
    use_case = SweepSessionsUseCase(uow)
    return await use_case.execute()
