# src/voteboard/services/__init__.py
"""Business logic services for the Voteboard application."""

from .auth import TokenAuthorizationGate
from .vote_service import Transition, VoteCoordinator, VoteResult

__all__ = [
    "TokenAuthorizationGate",
    "Transition",
    "VoteCoordinator",
    "VoteResult",
]
