"""Infinite-deck blackjack as an exploring-starts environment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from mces.rl.environment import Environment

from .utils import BLACKJACK, card_value, draw_card, play_dealer

STICK = False
HIT = True
MIN_SUM = 12
NUM_STATES = (BLACKJACK - MIN_SUM) * 10 * 2


@dataclass(frozen=True)
class State:
    """A non-terminal player decision point."""

    # Player total, 12..20 for non-terminal states.
    sum: int
    # Dealer up card code, 0..9.
    dealer_card: int
    # Whether an ace is currently counted as 11.
    usable_ace: bool

    @property
    def index(self) -> int:
        """Unique index in ``0..NUM_STATES``."""
        return ((self.sum - MIN_SUM) * 10 + self.dealer_card) * 2 + int(self.usable_ace)


class BlackjackEnvironment(Environment[State, bool]):
    """Player decides to hit or stick against a dealer who stands on 17.

    Rewards are +1 for a win, 0 for a push and -1 for a loss, all paid on the
    final step. Reaching exactly 21 after a hit stands automatically.
    """

    default_action = STICK

    def sample_start(self, rng: np.random.Generator) -> Tuple[State, bool]:
        state = State(
            sum=int(rng.integers(MIN_SUM, BLACKJACK)),
            dealer_card=int(rng.integers(0, 10)),
            usable_ace=bool(rng.random() < 0.5),
        )
        return state, bool(rng.random() < 0.5)

    def step(self, state_action: Tuple[State, bool], rng: np.random.Generator) -> Tuple[Optional[State], int]:
        state, hit = state_action
        total = state.sum
        if hit:
            total += card_value(draw_card(rng))
            if total < BLACKJACK:
                return State(total, state.dealer_card, state.usable_ace), 0
            if total > BLACKJACK:
                if not state.usable_ace:
                    return None, -1
                return State(total - 10, state.dealer_card, False), 0

        dealer_sum = play_dealer(state.dealer_card, rng)
        if dealer_sum > BLACKJACK:
            return None, 1
        return None, (total > dealer_sum) - (total < dealer_sum)


__all__ = ["BlackjackEnvironment", "HIT", "NUM_STATES", "STICK", "State"]
