"""
Hand scoring for the card game.

Aces count 11 until the total would exceed 21, then each ace is softened to
1, one at a time and at most once per ace.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from highroller.common.card import Card

BLACKJACK = 21


def score(cards: Iterable[Card]) -> int:
    """
    Score a set of cards under soft-ace rules.

    Returns the highest total not above 21 if one exists, otherwise the
    lowest achievable (bust) total.
    """
    total = 0
    soft_aces = 0
    for card in cards:
        total += card.value
        if card.rank.is_ace:
            soft_aces += 1
    while total > BLACKJACK and soft_aces:
        total -= 10
        soft_aces -= 1
    return total


@dataclass(frozen=True)
class BlackjackHand:
    """An immutable hand; adding a card returns a new hand."""

    cards: Tuple[Card, ...] = ()

    def add(self, card: Card) -> "BlackjackHand":
        return BlackjackHand(self.cards + (card,))

    @property
    def value(self) -> int:
        return score(self.cards)

    @property
    def is_soft(self) -> bool:
        """True when an ace is still counted as 11."""
        hard_total = sum(1 if card.rank.is_ace else card.value for card in self.cards)
        return self.value != hard_total

    @property
    def is_bust(self) -> bool:
        return self.value > BLACKJACK

    @property
    def is_natural(self) -> bool:
        """A two-card 21."""
        return len(self.cards) == 2 and self.value == BLACKJACK

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self.cards)
