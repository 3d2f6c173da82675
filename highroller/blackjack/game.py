"""
Card game engine.

Composes the deck service, the hand evaluator, the dealer policy and the
ledger into the round lifecycle:

    BETTING -> DEALING -> PLAYER_TURN -> DEALER_TURN -> SETTLED

A round ends only through its own exits (a natural, a bust, or a stand);
there is no way to abandon a round once the stake is charged.
"""

import logging
from typing import Callable, List, Optional, Union

from highroller.blackjack.dealer import play_dealer
from highroller.blackjack.state import RoundStage, RoundState
from highroller.blackjack.strategy import Advice, advise
from highroller.blackjack.transitions import StateTransitionEngine
from highroller.common.card import Card
from highroller.common.deck import DeckService
from highroller.common.result import GameResult
from highroller.common.rng import RandomSource
from highroller.config import BlackjackConfig
from highroller.engine.base import WagerEngine
from highroller.events import CasinoEventType, EventEmitter
from highroller.exceptions import InvalidActionError
from highroller.ledger import Ledger

logger = logging.getLogger("highroller.blackjack")


class BlackjackGame(WagerEngine):
    """
    One player against an automated dealer.
    """

    game_id = "blackjack"

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[BlackjackConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
        deck_factory: Optional[Callable[[], List[Card]]] = None,
    ):
        """
        Args:
            ledger: The shared player ledger
            config: Card game configuration
            rng: Entropy source used for shuffling
            event_bus: Emitter for engine events
            deck_factory: Optional callable returning the cards of one deck
        """
        self.config = config or BlackjackConfig()
        super().__init__(ledger, self.config.limits, rng, event_bus)
        self.deck_service = DeckService(
            self.rng,
            policy=self.config.deck_policy,
            num_decks=self.config.num_decks,
            penetration=self.config.penetration,
            deck_factory=deck_factory,
        )
        self.state = RoundState()
        self.last_result: Optional[GameResult] = None

    def _draw(self, recipient: str, visible: bool = True) -> Card:
        card = self.deck_service.draw()
        self._emit(
            CasinoEventType.CARD_DEALT,
            {
                "round_id": self.state.id,
                "recipient": recipient,
                "card": str(card) if visible else None,
                "cards_remaining": self.deck_service.cards_remaining,
            },
        )
        return card

    def _finish(self, state: RoundState) -> GameResult:
        rewards = self.config.experience
        result = self._settle(
            stake=state.stake,
            payout=state.payout,
            outcome=state.outcome,
            experience=rewards.for_outcome(state.outcome),
            state=state,
            details={
                "player_score": state.player.value,
                "dealer_score": state.dealer.value,
                "natural": state.natural,
            },
        )
        self.last_result = result
        return result

    def start(self, stake: int) -> Union[RoundState, GameResult]:
        """
        Charge the stake and deal a new round.

        Returns:
            The round state on the player's turn, or the result if a natural
            decided the round immediately.

        Raises:
            InvalidActionError: if a round is already in progress
            StakeLimitError: if the stake is outside table limits
            InsufficientFundsError: if the stake exceeds the balance
        """
        with self._lock:
            if self.state.stage not in (RoundStage.BETTING, RoundStage.SETTLED):
                raise InvalidActionError("A round is already in progress")

            self._charge(stake)
            self.deck_service.begin_round()
            state = StateTransitionEngine.open_round(stake)
            self.state = state
            self._emit(CasinoEventType.ROUND_STARTED, {"round_id": state.id, "stake": stake})

            # Player, dealer, player, dealer; the dealer's second card is the hole card
            for to_dealer, visible in ((False, True), (True, True), (False, True), (True, False)):
                recipient = "dealer" if to_dealer else "player"
                card = self._draw(recipient, visible)
                state = StateTransitionEngine.deal_card(state, card, to_dealer=to_dealer)
                self.state = state

            state = StateTransitionEngine.check_naturals(
                state, self.config.natural_payout, self.config.dealer_peek
            )
            self.state = state
            if state.is_settled:
                logger.debug("Round %s decided by a natural", state.id)
                return self._finish(state)
            return state

    def hit(self) -> Union[RoundState, GameResult]:
        """
        Draw one card for the player.

        Raises:
            InvalidActionError: if it is not the player's turn
        """
        with self._lock:
            if self.state.stage is not RoundStage.PLAYER_TURN:
                raise InvalidActionError(f"Cannot hit during {self.state.stage.name}")
            self.deck_service.begin_action()
            card = self._draw("player")
            self.state = StateTransitionEngine.player_hit(self.state, card)
            self._emit(
                CasinoEventType.PLAYER_ACTION,
                {"round_id": self.state.id, "action": "hit", "score": self.state.player.value},
            )
            if self.state.is_settled:
                return self._finish(self.state)
            return self.state

    def stand(self) -> GameResult:
        """
        End the player's turn, play out the dealer and settle the round.

        Raises:
            InvalidActionError: if it is not the player's turn
        """
        with self._lock:
            self.state = StateTransitionEngine.player_stand(self.state)
            self._emit(
                CasinoEventType.PLAYER_ACTION,
                {"round_id": self.state.id, "action": "stand", "score": self.state.player.value},
            )
            self.deck_service.begin_action()
            dealer = play_dealer(
                self.state.dealer,
                lambda: self._draw("dealer"),
                self.config.dealer_stand_score,
            )
            self._emit(
                CasinoEventType.DEALER_ACTION,
                {
                    "round_id": self.state.id,
                    "cards": [str(card) for card in dealer.cards],
                    "score": dealer.value,
                    "busted": dealer.is_bust,
                },
            )
            self.state = StateTransitionEngine.dealer_finished(self.state, dealer)
            return self._finish(self.state)

    def hint(self) -> Advice:
        """
        Suggest the next action for the current hand.

        Raises:
            InvalidActionError: if it is not the player's turn
        """
        if self.state.stage is not RoundStage.PLAYER_TURN:
            raise InvalidActionError("Advice is only available during the player's turn")
        return advise(self.state.player, self.state.dealer_upcard)
