"""
Reschedule Use Cases

Two-party negotiation of a new session time.
"""

from .request_reschedule_use_case import RequestRescheduleUseCase
from .respond_reschedule_use_case import RespondRescheduleUseCase

__all__ = [
    "RequestRescheduleUseCase",
    "RespondRescheduleUseCase",
]
