"""Infinite-deck blackjack environment for Monte Carlo ES experiments."""

from .display import REFERENCE_POLICY, format_policy, policy_agreement
from .env import HIT, STICK, BlackjackEnvironment, State

__all__ = [
    "BlackjackEnvironment",
    "HIT",
    "REFERENCE_POLICY",
    "STICK",
    "State",
    "format_policy",
    "policy_agreement",
]
