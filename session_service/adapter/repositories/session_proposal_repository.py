from typing import Optional
from uuid import UUID

from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.app.repositories.errors import ConcurrentUpdateError
from session_service.app.repositories.session_proposal_repository import (
    ISessionProposalRepository,
)
from session_service.domain.entities import ProposalStatus, SessionProposal


class SessionProposalRepository(ISessionProposalRepository):
    """SessionProposal repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_message_id(self, message_id: UUID) -> Optional[SessionProposal]:
        """Get the proposal attached to a message"""
        stmt = select(SessionProposal).where(SessionProposal.message_id == message_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_open_by_conversation(
        self, conversation_id: UUID
    ) -> Optional[SessionProposal]:
        """Get a PROPOSED proposal in the conversation, if any"""
        stmt = (
            select(SessionProposal)
            .where(
                SessionProposal.conversation_id == conversation_id,
                SessionProposal.status == ProposalStatus.PROPOSED,
            )
            .order_by(SessionProposal.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, proposal: SessionProposal) -> SessionProposal:
        """Create a new proposal"""
        self.session.add(proposal)
        await self.session.flush()
        await self.session.refresh(proposal)
        return proposal

    async def update(self, proposal: SessionProposal) -> SessionProposal:
        """Update existing proposal (version-checked)"""
        proposal_id = proposal.id
        self.session.add(proposal)
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise ConcurrentUpdateError("SessionProposal", proposal_id) from exc
        await self.session.refresh(proposal)
        return proposal
