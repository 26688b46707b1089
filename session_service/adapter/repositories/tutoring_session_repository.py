from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.repositories.tutoring_session_repository import (
    ITutoringSessionRepository,
)
from session_service.domain.entities import SessionStatus, TutoringSession
from session_service.domain.lifecycle import ACTIVE_STATES


class TutoringSessionRepository(ITutoringSessionRepository):
    """TutoringSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[TutoringSession]:
        """Get session by ID"""
        stmt = select(TutoringSession).where(TutoringSession.id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, session_obj: TutoringSession) -> TutoringSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update(self, session_obj: TutoringSession) -> TutoringSession:
        """Update existing session (version-checked)"""
        session_id = session_obj.id
        self.session.add(session_obj)
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise ConcurrentUpdateError("TutoringSession", session_id) from exc
        await self.session.refresh(session_obj)
        return session_obj

    async def get_active_by_conversation(
        self, conversation_id: UUID
    ) -> Optional[TutoringSession]:
        """Get a non-terminal session booked in the conversation, if any"""
        stmt = (
            select(TutoringSession)
            .where(
                TutoringSession.conversation_id == conversation_id,
                TutoringSession.status.in_(list(ACTIVE_STATES)),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: Optional[UUID],
        statuses: Iterable[SessionStatus],
        newest_first: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[TutoringSession]:
        """List sessions in the given statuses ordered by start_time"""
        stmt = select(TutoringSession).where(
            TutoringSession.status.in_(list(statuses))
        )
        if user_id is not None:
            stmt = stmt.where(
                or_(
                    TutoringSession.student_id == user_id,
                    TutoringSession.tutor_id == user_id,
                )
            )

        order = (
            TutoringSession.start_time.desc()
            if newest_first
            else TutoringSession.start_time.asc()
        )
        stmt = stmt.order_by(order).offset(offset).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_completed_by_tutor(self, tutor_id: UUID) -> int:
        """Count COMPLETED sessions taught by a tutor"""
        stmt = select(func.count()).select_from(TutoringSession).where(
            TutoringSession.tutor_id == tutor_id,
            TutoringSession.status == SessionStatus.COMPLETED,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_starting_soon(self, now: datetime, window_end: datetime) -> int:
        """SCHEDULED with now < start_time <= window_end -> STARTING_SOON"""
        stmt = (
            update(TutoringSession)
            .where(
                TutoringSession.status == SessionStatus.SCHEDULED,
                TutoringSession.start_time > now,
                TutoringSession.start_time <= window_end,
            )
            .values(
                status=SessionStatus.STARTING_SOON,
                version=TutoringSession.version + 1,
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_in_progress(self, now: datetime) -> int:
        """SCHEDULED/STARTING_SOON with start_time <= now < end_time -> IN_PROGRESS"""
        stmt = (
            update(TutoringSession)
            .where(
                TutoringSession.status.in_(
                    [SessionStatus.SCHEDULED, SessionStatus.STARTING_SOON]
                ),
                TutoringSession.start_time <= now,
                TutoringSession.end_time > now,
            )
            .values(
                status=SessionStatus.IN_PROGRESS,
                started_at=now,
                version=TutoringSession.version + 1,
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_expired(self, now: datetime) -> int:
        """IN_PROGRESS with end_time <= now -> EXPIRED"""
        stmt = (
            update(TutoringSession)
            .where(
                TutoringSession.status == SessionStatus.IN_PROGRESS,
                TutoringSession.end_time <= now,
            )
            .values(
                status=SessionStatus.EXPIRED,
                expired_at=now,
                version=TutoringSession.version + 1,
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount
