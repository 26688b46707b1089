"""
Use Cases

Organized by area:
- proposals/: Proposing and answering session proposals
- sessions/: Cancellation, completion and queries
- reschedule/: Reschedule negotiation
- lifecycle/: Time-driven sweeps
"""

from .lifecycle import SweepResult, SweepSessionsUseCase
from .proposals import (
    AcceptProposalUseCase,
    CounterProposeUseCase,
    ProposeSessionUseCase,
    RejectProposalUseCase,
)
from .reschedule import RequestRescheduleUseCase, RespondRescheduleUseCase
from .sessions import (
    CancelSessionUseCase,
    CompleteSessionUseCase,
    GetSessionUseCase,
    ListSessionsUseCase,
)

__all__ = [
    # Proposals
    "ProposeSessionUseCase",
    "AcceptProposalUseCase",
    "RejectProposalUseCase",
    "CounterProposeUseCase",
    # Sessions
    "CancelSessionUseCase",
    "CompleteSessionUseCase",
    "GetSessionUseCase",
    "ListSessionsUseCase",
    # Reschedule
    "RequestRescheduleUseCase",
    "RespondRescheduleUseCase",
    # Lifecycle
    "SweepSessionsUseCase",
    "SweepResult",
]
