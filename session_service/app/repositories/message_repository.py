from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_service.domain.entities import Message


class IMessageRepository(ABC):
    """Message repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, message_id: UUID) -> Optional[Message]:
        """Get message by ID"""
        pass

    @abstractmethod
    async def create(self, message: Message) -> Message:
        """Create a new message"""
        pass
