"""Text rendering of hit/stick policies and comparison with the optimum."""

from __future__ import annotations

from typing import Dict, List, Mapping

from .env import HIT, MIN_SUM, STICK, State
from .utils import BLACKJACK, CARD_CODES, format_card

SYMBOLS = {STICK: "S", HIT: "H"}

# Optimal policy for this game, one row per player sum from 12 to 20.
# Columns are dealer cards X A 2..9, first without then with a usable ace.
_REFERENCE_ROWS = [
    ("HHHHSSSHHH", "HHHHHHHHHH"),
    ("HHSSSSSHHH", "HHHHHHHHHH"),
    ("HHSSSSSHHH", "HHHHHHHHHH"),
    ("HHSSSSSHHH", "HHHHHHHHHH"),
    ("HHSSSSSHHH", "HHHHHHHHHH"),
    ("SSSSSSSSSS", "HHHHHHHHHH"),
    ("SSSSSSSSSS", "HHSSSSSSSH"),
    ("SSSSSSSSSS", "SSSSSSSSSS"),
    ("SSSSSSSSSS", "SSSSSSSSSS"),
]


def all_states() -> List[State]:
    return [
        State(total, dealer_card, usable_ace)
        for total in range(MIN_SUM, BLACKJACK)
        for usable_ace in (False, True)
        for dealer_card in CARD_CODES
    ]


def _reference_policy() -> Dict[State, bool]:
    policy = {}
    for offset, rows in enumerate(_REFERENCE_ROWS):
        for usable_ace, row in zip((False, True), rows):
            for dealer_card, symbol in zip(CARD_CODES, row):
                policy[State(MIN_SUM + offset, dealer_card, usable_ace)] = symbol == "H"
    return policy


REFERENCE_POLICY: Dict[State, bool] = _reference_policy()


def format_policy(policy: Mapping[State, bool]) -> str:
    """Render a policy as an S/H table; states missing from it show ``?``."""
    cards = " ".join(format_card(card) for card in CARD_CODES)
    lines = [
        "Policy (S for Stick, H for Hit):",
        "Usable ace?     No                    Yes",
        f"Dealer Card     {cards}   {cards}",
    ]
    for total in range(MIN_SUM, BLACKJACK):
        line = f"Player Sum {total}"
        for usable_ace in (False, True):
            line += "  "
            for dealer_card in CARD_CODES:
                action = policy.get(State(total, dealer_card, usable_ace))
                line += " " + SYMBOLS.get(action, "?")
        lines.append(line)
    return "\n".join(lines)


def policy_agreement(policy: Mapping[State, bool], reference: Mapping[State, bool] = REFERENCE_POLICY) -> float:
    """Share of reference states where ``policy`` picks the same action."""
    if not reference:
        return 0.0
    matches = sum(1 for state, action in reference.items() if policy.get(state) == action)
    return matches / len(reference)


__all__ = ["REFERENCE_POLICY", "all_states", "format_policy", "policy_agreement"]
