"""
Session Use Cases

Cancellation, completion and read access for booked sessions.
"""

from .cancel_session_use_case import CancelSessionUseCase
from .complete_session_use_case import CompleteSessionUseCase
from .dtos import (
    CompleteSessionResponse,
    RescheduleRequestInfo,
    SessionListResponse,
    SessionResponse,
)
from .get_sessions_use_case import GetSessionUseCase, ListSessionsUseCase

__all__ = [
    "CancelSessionUseCase",
    "CompleteSessionUseCase",
    "GetSessionUseCase",
    "ListSessionsUseCase",
    "SessionResponse",
    "SessionListResponse",
    "CompleteSessionResponse",
    "RescheduleRequestInfo",
]
