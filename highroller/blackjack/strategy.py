"""
Simple play advice for the card game.
"""

from dataclasses import dataclass
from typing import Optional

from highroller.blackjack.hand import BlackjackHand
from highroller.common.card import Card


@dataclass(frozen=True)
class Advice:
    action: str
    reason: str

    def __str__(self) -> str:
        return f"{self.action} - {self.reason}"


def advise(player: BlackjackHand, dealer_upcard: Optional[Card]) -> Advice:
    """
    Suggest hitting or standing from the player's total and the dealer's upcard.
    """
    total = player.value
    upcard = dealer_upcard.value if dealer_upcard else 0

    if total <= 11:
        return Advice("HIT", "Cannot bust")
    if total >= 17:
        return Advice("STAND", "High risk of busting")
    if upcard <= 6:
        return Advice("STAND", "Dealer likely to bust")
    return Advice("HIT", "Dealer likely has strong hand")
