"""
Lifecycle Use Cases

Autonomous, time-driven session transitions.
"""

from .dtos import SweepResult
from .sweep_sessions_use_case import SweepSessionsUseCase

__all__ = [
    "SweepSessionsUseCase",
    "SweepResult",
]
