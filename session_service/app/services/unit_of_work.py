from abc import ABC, abstractmethod

from session_service.app.repositories.audit_event_repository import IAuditEventRepository
from session_service.app.repositories.conversation_repository import IConversationRepository
from session_service.app.repositories.message_repository import IMessageRepository
from session_service.app.repositories.session_feedback_repository import (
    ISessionFeedbackRepository,
)
from session_service.app.repositories.session_proposal_repository import (
    ISessionProposalRepository,
)
from session_service.app.repositories.tutoring_session_repository import (
    ITutoringSessionRepository,
)
from session_service.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    conversations: IConversationRepository
    messages: IMessageRepository
    proposals: ISessionProposalRepository
    sessions: ITutoringSessionRepository
    feedback: ISessionFeedbackRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
