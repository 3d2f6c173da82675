"""
State transition functions for the card game.

Each function takes a `RoundState` and returns a new one without modifying
the original. Nothing here draws cards, touches the ledger or emits events;
the engine feeds cards in and acts on the states that come back.
"""

from dataclasses import replace

from highroller.blackjack.hand import BlackjackHand
from highroller.blackjack.state import RoundStage, RoundState
from highroller.common.card import Card
from highroller.common.result import OutcomeKind, scaled_payout
from highroller.exceptions import InvalidActionError


class StateTransitionEngine:
    """
    Pure functions for card game transitions.
    """

    @staticmethod
    def open_round(stake: int) -> RoundState:
        """Create a round that has taken its stake and is ready to deal."""
        return RoundState(stake=stake, stage=RoundStage.DEALING)

    @staticmethod
    def deal_card(state: RoundState, card: Card, to_dealer: bool = False) -> RoundState:
        """
        Deal an initial card to the player or the dealer.

        Raises:
            InvalidActionError: if the round is not in the dealing stage
        """
        if state.stage is not RoundStage.DEALING:
            raise InvalidActionError(f"Cannot deal initial cards during {state.stage.name}")
        if to_dealer:
            return replace(state, dealer=state.dealer.add(card))
        return replace(state, player=state.player.add(card))

    @staticmethod
    def check_naturals(
        state: RoundState, natural_payout: float, dealer_peek: bool = True
    ) -> RoundState:
        """
        Settle the round at deal time if a natural decides it, otherwise hand
        the turn to the player.
        """
        if state.player.is_natural:
            if state.dealer.is_natural:
                return StateTransitionEngine._settled(state, OutcomeKind.PUSH, state.stake)
            payout = state.stake + scaled_payout(state.stake, natural_payout)
            return StateTransitionEngine._settled(state, OutcomeKind.WIN, payout, natural=True)
        if dealer_peek and state.dealer.is_natural:
            return StateTransitionEngine._settled(state, OutcomeKind.LOSS, 0)
        return replace(state, stage=RoundStage.PLAYER_TURN)

    @staticmethod
    def player_hit(state: RoundState, card: Card) -> RoundState:
        """
        Add a card to the player's hand; a bust settles the round as a loss.

        Raises:
            InvalidActionError: if it is not the player's turn
        """
        if state.stage is not RoundStage.PLAYER_TURN:
            raise InvalidActionError(f"Cannot hit during {state.stage.name}")
        new_state = replace(state, player=state.player.add(card))
        if new_state.player.is_bust:
            return StateTransitionEngine._settled(new_state, OutcomeKind.LOSS, 0)
        return new_state

    @staticmethod
    def player_stand(state: RoundState) -> RoundState:
        """
        Raises:
            InvalidActionError: if it is not the player's turn
        """
        if state.stage is not RoundStage.PLAYER_TURN:
            raise InvalidActionError(f"Cannot stand during {state.stage.name}")
        return replace(state, stage=RoundStage.DEALER_TURN)

    @staticmethod
    def dealer_finished(state: RoundState, dealer: BlackjackHand) -> RoundState:
        """
        Record the dealer's final hand and settle by comparing scores.

        Raises:
            InvalidActionError: if it is not the dealer's turn
        """
        if state.stage is not RoundStage.DEALER_TURN:
            raise InvalidActionError(f"Dealer cannot play during {state.stage.name}")
        state = replace(state, dealer=dealer)
        player_score = state.player.value
        dealer_score = state.dealer.value

        if state.dealer.is_bust or player_score > dealer_score:
            return StateTransitionEngine._settled(state, OutcomeKind.WIN, state.stake * 2)
        if player_score < dealer_score:
            return StateTransitionEngine._settled(state, OutcomeKind.LOSS, 0)
        return StateTransitionEngine._settled(state, OutcomeKind.PUSH, state.stake)

    @staticmethod
    def _settled(
        state: RoundState, outcome: OutcomeKind, payout: int, natural: bool = False
    ) -> RoundState:
        return replace(
            state,
            stage=RoundStage.SETTLED,
            outcome=outcome,
            payout=payout,
            natural=natural,
        )
