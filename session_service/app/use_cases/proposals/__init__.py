"""
Proposal Use Cases

Proposing, answering and counter-proposing sessions in a conversation.
"""

from .accept_proposal_use_case import AcceptProposalUseCase
from .counter_propose_use_case import CounterProposeUseCase
from .dtos import AcceptProposalResponse, ProposalResponse
from .propose_session_use_case import ProposeSessionUseCase
from .reject_proposal_use_case import RejectProposalUseCase

__all__ = [
    "ProposeSessionUseCase",
    "AcceptProposalUseCase",
    "RejectProposalUseCase",
    "CounterProposeUseCase",
    "ProposalResponse",
    "AcceptProposalResponse",
]
