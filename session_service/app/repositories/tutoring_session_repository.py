from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from session_service.domain.entities import SessionStatus, TutoringSession


class ITutoringSessionRepository(ABC):
    """TutoringSession repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[TutoringSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session_obj: TutoringSession) -> TutoringSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session_obj: TutoringSession) -> TutoringSession:
        """
        Update existing session.

        The write is version-checked; raises ConcurrentUpdateError when the
        row changed since it was read.
        """
        pass

    @abstractmethod
    async def get_active_by_conversation(
        self, conversation_id: UUID
    ) -> Optional[TutoringSession]:
        """Get a non-terminal session booked in the conversation, if any"""
        pass

    @abstractmethod
    async def list_for_user(
        self,
        user_id: Optional[UUID],
        statuses: Iterable[SessionStatus],
        newest_first: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[TutoringSession]:
        """
        List sessions in the given statuses ordered by start_time.

        user_id=None lists sessions of every user (admin view).
        """
        pass

    @abstractmethod
    async def count_completed_by_tutor(self, tutor_id: UUID) -> int:
        """Count COMPLETED sessions taught by a tutor"""
        pass

    # Sweeper bulk transitions. Each is a single conditional UPDATE that
    # re-checks the source status, and returns the number of rows changed.

    @abstractmethod
    async def mark_starting_soon(self, now: datetime, window_end: datetime) -> int:
        """SCHEDULED with now < start_time <= window_end -> STARTING_SOON"""
        pass

    @abstractmethod
    async def mark_in_progress(self, now: datetime) -> int:
        """SCHEDULED/STARTING_SOON with start_time <= now < end_time -> IN_PROGRESS"""
        pass

    @abstractmethod
    async def mark_expired(self, now: datetime) -> int:
        """IN_PROGRESS with end_time <= now -> EXPIRED"""
        pass
