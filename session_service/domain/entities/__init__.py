"""
Session Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    FeedbackStatus,
    MessageType,
    PricingPlan,
    ProposalStatus,
    RescheduleStatus,
    SessionStatus,
    TutorLevel,
    UserRole,
)

# Export all entities
from .user import User
from .conversation import Conversation
from .message import Message
from .session_proposal import SessionProposal
from .tutoring_session import RescheduleRequest, TutoringSession
from .session_feedback import SessionFeedback
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "FeedbackStatus",
    "MessageType",
    "PricingPlan",
    "ProposalStatus",
    "RescheduleStatus",
    "SessionStatus",
    "TutorLevel",
    "UserRole",
    # Entities
    "User",
    "Conversation",
    "Message",
    "SessionProposal",
    "RescheduleRequest",
    "TutoringSession",
    "SessionFeedback",
    "AuditEvent",
]
