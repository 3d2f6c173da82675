"""
The dealer's drawing policy.

The dealer has no choices to make: it draws while its score is below the stand
score and stops otherwise. Given the deck order the outcome is fully
determined. The machine always halts because every draw adds at least one
point and the deck is finite.
"""

import logging
from enum import Enum, auto
from typing import Callable

from highroller.blackjack.hand import BLACKJACK, BlackjackHand
from highroller.common.card import Card

logger = logging.getLogger("highroller.blackjack.dealer")

DEFAULT_STAND_SCORE = 17


class DealerStage(Enum):
    AWAITING_HOLE_CARD = auto()
    DRAWING = auto()
    STANDING = auto()
    BUSTED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (DealerStage.STANDING, DealerStage.BUSTED)


def dealer_stage(hand: BlackjackHand, stand_score: int = DEFAULT_STAND_SCORE) -> DealerStage:
    """Classify a dealer hand."""
    if len(hand) < 2:
        return DealerStage.AWAITING_HOLE_CARD
    value = hand.value
    if value > BLACKJACK:
        return DealerStage.BUSTED
    if value < stand_score:
        return DealerStage.DRAWING
    return DealerStage.STANDING


def play_dealer(
    hand: BlackjackHand,
    draw: Callable[[], Card],
    stand_score: int = DEFAULT_STAND_SCORE,
) -> BlackjackHand:
    """
    Run the dealer policy to a terminal stage.

    Args:
        hand: The dealer's hand after the initial deal
        draw: Callable returning the next card from the deck
        stand_score: Score at which the dealer stops drawing

    Returns:
        The dealer's final hand
    """
    stage = dealer_stage(hand, stand_score)
    while not stage.is_terminal:
        card = draw()
        hand = hand.add(card)
        stage = dealer_stage(hand, stand_score)
        logger.debug("Dealer draws %s, score %d (%s)", card, hand.value, stage.name)
    return hand
