"""
Session Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform role of a user"""

    student = "student"
    tutor = "tutor"
    admin = "admin"


class PricingPlan(str, Enum):
    """Student subscription tier, drives the hourly price"""

    FLEXIBLE = "FLEXIBLE"
    REGULAR = "REGULAR"
    LONG_TERM = "LONG_TERM"


class TutorLevel(str, Enum):
    """Tutor level derived from completed session count"""

    STARTER = "STARTER"
    INTERMEDIATE = "INTERMEDIATE"
    EXPERT = "EXPERT"


class SessionStatus(str, Enum):
    """Lifecycle status of a tutoring session"""

    SCHEDULED = "SCHEDULED"
    STARTING_SOON = "STARTING_SOON"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    NO_SHOW = "NO_SHOW"  # reserved for attendance-based finalization
    RESCHEDULE_REQUESTED = "RESCHEDULE_REQUESTED"


class RescheduleStatus(str, Enum):
    """Status of a reschedule request"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ProposalStatus(str, Enum):
    """Status of a session proposal"""

    PROPOSED = "PROPOSED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    COUNTER_PROPOSED = "COUNTER_PROPOSED"


class MessageType(str, Enum):
    """Conversation message type"""

    text = "text"
    session_proposal = "session_proposal"


class FeedbackStatus(str, Enum):
    """Post-session tutor feedback status"""

    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
