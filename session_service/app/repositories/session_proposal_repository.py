from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from session_service.domain.entities import SessionProposal


class ISessionProposalRepository(ABC):
    """SessionProposal repository interface - application layer"""

    @abstractmethod
    async def get_by_message_id(self, message_id: UUID) -> Optional[SessionProposal]:
        """Get the proposal attached to a message"""
        pass

    @abstractmethod
    async def get_open_by_conversation(
        self, conversation_id: UUID
    ) -> Optional[SessionProposal]:
        """Get a PROPOSED proposal in the conversation, if any"""
        pass

    @abstractmethod
    async def create(self, proposal: SessionProposal) -> SessionProposal:
        """Create a new proposal"""
        pass

    @abstractmethod
    async def update(self, proposal: SessionProposal) -> SessionProposal:
        """Update existing proposal"""
        pass
