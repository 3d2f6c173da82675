"""
Immutable state models for a card game round.

These classes are designed to be used with the pure transition functions in
`highroller.blackjack.transitions`, which create new state instances rather
than modifying existing ones.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
import uuid

from highroller.blackjack.hand import BlackjackHand
from highroller.common.card import Card
from highroller.common.result import OutcomeKind


class RoundStage(Enum):
    """Possible stages of a card game round."""

    BETTING = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    SETTLED = auto()


@dataclass(frozen=True)
class RoundState:
    """
    Immutable representation of a round.

    Attributes:
        id: Unique identifier for this round
        stake: Chips staked on the round
        player: The player's hand
        dealer: The dealer's hand; only the first card is visible until settlement
        stage: Current stage of the round
        outcome: Result once settled
        payout: Chips returned to the player once settled
        natural: Whether the round was settled at the natural rate
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    stake: int = 0
    player: BlackjackHand = field(default_factory=BlackjackHand)
    dealer: BlackjackHand = field(default_factory=BlackjackHand)
    stage: RoundStage = RoundStage.BETTING
    outcome: Optional[OutcomeKind] = None
    payout: int = 0
    natural: bool = False

    @property
    def is_settled(self) -> bool:
        return self.stage is RoundStage.SETTLED

    @property
    def dealer_visible_cards(self) -> List[Card]:
        """The dealer cards a player is allowed to see."""
        if self.is_settled or self.stage is RoundStage.DEALER_TURN:
            return list(self.dealer.cards)
        return list(self.dealer.cards[:1])

    @property
    def dealer_upcard(self) -> Optional[Card]:
        return self.dealer.cards[0] if self.dealer.cards else None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the round to a dictionary suitable for a presentation layer.

        The dealer's hole card and total are withheld until the dealer's turn.
        """
        visible = self.dealer_visible_cards
        hidden = len(self.dealer.cards) - len(visible)
        return {
            "id": self.id,
            "stage": self.stage.name,
            "stake": self.stake,
            "player": {
                "cards": [str(card) for card in self.player.cards],
                "value": self.player.value,
                "is_soft": self.player.is_soft,
                "is_bust": self.player.is_bust,
                "is_natural": self.player.is_natural,
            },
            "dealer": {
                "cards": [str(card) for card in visible],
                "hidden_cards": hidden,
                "value": BlackjackHand(tuple(visible)).value,
            },
            "outcome": self.outcome.value if self.outcome else None,
            "payout": self.payout,
            "natural": self.natural,
        }
