from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.session_feedback_repository import (
    ISessionFeedbackRepository,
)
from session_service.domain.entities import SessionFeedback


class SessionFeedbackRepository(ISessionFeedbackRepository):
    """SessionFeedback repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_session_id(self, session_id: UUID) -> Optional[SessionFeedback]:
        """Get feedback record for a session"""
        stmt = select(SessionFeedback).where(SessionFeedback.session_id == session_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, feedback: SessionFeedback) -> SessionFeedback:
        """Create a new feedback record"""
        self.session.add(feedback)
        await self.session.flush()
        await self.session.refresh(feedback)
        return feedback
