"""
Session Query Use Cases

Read access to a single session and to upcoming / past session lists.
"""

from typing import Optional
from uuid import UUID

from session_service.app.services.unit_of_work import UnitOfWork
from session_service.domain.entities import UserRole
from session_service.domain.errors import forbidden, not_found, validation_error
from session_service.domain.lifecycle import ACTIVE_STATES, TERMINAL_STATES
from session_service.libs.result import Result, Return

from .dtos import SessionListResponse, SessionResponse

SCOPES = ("upcoming", "history")
MAX_LIMIT = 100


class GetSessionUseCase:
    """
    Use case for viewing a single session.

    Business Rules:
    - Participants and admins may view; anyone else is refused
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, session_id: UUID, user_id: UUID, role: str
    ) -> Result[SessionResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(not_found("Session not found"))

            if role != UserRole.admin.value and not session.is_participant(user_id):
                return Return.err(
                    forbidden("You are not authorized to view this session")
                )

            return Return.ok(SessionResponse.from_entity(session))


class ListSessionsUseCase:
    """
    Use case for listing a user's sessions.

    Business Rules:
    - upcoming: non-terminal sessions, soonest first
    - history: terminal sessions, most recent first
    - Students and tutors see their own sessions; admins see all
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        role: str,
        scope: str = "upcoming",
        limit: int = 20,
        offset: int = 0,
    ) -> Result[SessionListResponse]:
        if scope not in SCOPES:
            return Return.err(
                validation_error(f"scope must be one of: {', '.join(SCOPES)}")
            )
        if limit < 1 or limit > MAX_LIMIT or offset < 0:
            return Return.err(
                validation_error(f"limit must be 1-{MAX_LIMIT} and offset >= 0")
            )

        owner: Optional[UUID] = None if role == UserRole.admin.value else user_id
        upcoming = scope == "upcoming"

        async with self.uow:
            sessions = await self.uow.sessions.list_for_user(
                owner,
                ACTIVE_STATES if upcoming else TERMINAL_STATES,
                newest_first=not upcoming,
                limit=limit,
                offset=offset,
            )

            return Return.ok(
                SessionListResponse(
                    sessions=[SessionResponse.from_entity(s) for s in sessions],
                    scope=scope,
                    limit=limit,
                    offset=offset,
                )
            )
