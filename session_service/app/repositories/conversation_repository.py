from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_service.domain.entities import Conversation


class IConversationRepository(ABC):
    """Conversation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, conversation_id: UUID) -> Optional[Conversation]:
        """Get conversation by ID"""
        pass

    @abstractmethod
    async def create(self, conversation: Conversation) -> Conversation:
        """Create a new conversation"""
        pass
