"""Card helpers for an infinite-deck blackjack game."""

from __future__ import annotations

import numpy as np

# Card codes: 0 is any ten-valued card, 1 is an ace, n is the pip card n.
TEN = 0
ACE = 1
CARD_CODES = tuple(range(10))
DEALER_STANDS_ON = 17
BLACKJACK = 21


def card_value(card: int) -> int:
    """Return the blackjack value of a card code, counting aces as 1."""
    return 10 if card == TEN else card


def draw_card(rng: np.random.Generator) -> int:
    """Draw a card from an infinite deck.

    Values -3..9 are drawn uniformly and clamped at zero, so ten-valued cards
    come up four times as often as any other code.
    """
    return max(int(rng.integers(-3, 10)), TEN)


def play_dealer(dealer_card: int, rng: np.random.Generator) -> int:
    """Play out the dealer's hand from its up card and return the final sum."""
    total = 0
    usable_ace = False
    while True:
        total += card_value(dealer_card)
        if dealer_card == ACE and total <= 11:
            total += 10
            usable_ace = True
        elif total > BLACKJACK and usable_ace:
            total -= 10
            usable_ace = False

        if total >= DEALER_STANDS_ON:
            return total
        dealer_card = draw_card(rng)


def format_card(card: int) -> str:
    if card == TEN:
        return "X"
    if card == ACE:
        return "A"
    return str(card)
