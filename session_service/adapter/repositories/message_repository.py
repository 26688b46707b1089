from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.message_repository import IMessageRepository
from session_service.domain.entities import Message


class MessageRepository(IMessageRepository):
    """Message repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, message_id: UUID) -> Optional[Message]:
        """Get message by ID"""
        stmt = select(Message).where(Message.id == message_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, message: Message) -> Message:
        """Create a new message"""
        self.session.add(message)
        await self.session.flush()
        await self.session.refresh(message)
        return message
