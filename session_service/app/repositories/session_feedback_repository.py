from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_service.domain.entities import SessionFeedback


class ISessionFeedbackRepository(ABC):
    """SessionFeedback repository interface - application layer"""

    @abstractmethod
    async def get_by_session_id(self, session_id: UUID) -> Optional[SessionFeedback]:
        """Get feedback record for a session"""
        pass

    @abstractmethod
    async def create(self, feedback: SessionFeedback) -> SessionFeedback:
        """Create a new feedback record"""
        pass
