from sqlmodel.ext.asyncio.session import AsyncSession

from session_service.adapter.repositories.audit_event_repository import AuditEventRepository
from session_service.adapter.repositories.conversation_repository import (
    ConversationRepository,
)
from session_service.adapter.repositories.message_repository import MessageRepository
from session_service.adapter.repositories.session_feedback_repository import (
    SessionFeedbackRepository,
)
from session_service.adapter.repositories.session_proposal_repository import (
    SessionProposalRepository,
)
from session_service.adapter.repositories.tutoring_session_repository import (
    TutoringSessionRepository,
)
from session_service.adapter.repositories.user_repository import UserRepository
from session_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.conversations = ConversationRepository(self.session)
        self.messages = MessageRepository(self.session)
        self.proposals = SessionProposalRepository(self.session)
        self.sessions = TutoringSessionRepository(self.session)
        self.feedback = SessionFeedbackRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
