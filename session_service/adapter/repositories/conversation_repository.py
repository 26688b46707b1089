from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.conversation_repository import (
    IConversationRepository,
)
from session_service.domain.entities import Conversation


class ConversationRepository(IConversationRepository):
    """Conversation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, conversation_id: UUID) -> Optional[Conversation]:
        """Get conversation by ID"""
        stmt = select(Conversation).where(Conversation.id == conversation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, conversation: Conversation) -> Conversation:
        """Create a new conversation"""
        self.session.add(conversation)
        await self.session.flush()
        await self.session.refresh(conversation)
        return conversation
