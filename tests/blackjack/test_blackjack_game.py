"""
Tests for the card game engine.

Cards are stacked so that the deal order is player, dealer, player, dealer,
followed by hits and the dealer's draws.
"""

import pytest

from highroller.blackjack.game import BlackjackGame
from highroller.blackjack.state import RoundStage
from highroller.common.deck import DeckPolicy
from highroller.common.result import GameResult, OutcomeKind
from highroller.common.rng import SeededRandomSource
from highroller.config import BlackjackConfig, StakeLimits
from highroller.events import CasinoEventType
from highroller.exceptions import InsufficientFundsError, InvalidActionError, StakeLimitError


def test_all_in_dealer_bust_doubles_balance(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "10", "10", "6", "K"])
    state = game.start(1000)
    assert state.stage is RoundStage.PLAYER_TURN
    assert ledger.balance == 0

    result = game.stand()
    assert result.outcome is OutcomeKind.WIN
    assert result.payout == 2000
    assert result.state.dealer.is_bust
    assert ledger.balance == 2000
    assert ledger.snapshot.games_won == 1
    assert ledger.snapshot.games_played == 1
    assert ledger.snapshot.experience == 25


def test_hit_after_settlement_is_rejected(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "10", "10", "6", "K"])
    game.start(1000)
    game.stand()
    with pytest.raises(InvalidActionError):
        game.hit()
    with pytest.raises(InvalidActionError):
        game.stand()
    assert ledger.balance == 2000
    assert ledger.snapshot.games_played == 1


def test_player_natural_pays_three_to_two(stacked_blackjack, ledger):
    game = stacked_blackjack(["A", "9", "K", "7"])
    result = game.start(100)
    assert isinstance(result, GameResult)
    assert result.outcome is OutcomeKind.WIN
    assert result.payout == 250
    assert result.state.natural
    assert ledger.balance == 1150


def test_natural_payout_floors_odd_stakes(stacked_blackjack, ledger):
    game = stacked_blackjack(["A", "9", "K", "7"])
    result = game.start(15)
    # 15 + floor(22.5)
    assert result.payout == 37


def test_both_naturals_push(stacked_blackjack, ledger):
    game = stacked_blackjack(["A", "A", "K", "Q"])
    result = game.start(100)
    assert result.outcome is OutcomeKind.PUSH
    assert result.payout == 100
    assert ledger.balance == 1000
    assert ledger.snapshot.games_won == 0
    assert ledger.snapshot.experience == 10


def test_dealer_natural_with_peek_loses_immediately(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "A", "9", "K"])
    result = game.start(100)
    assert result.outcome is OutcomeKind.LOSS
    assert ledger.balance == 900


def test_dealer_natural_without_peek_plays_on(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "A", "9", "K"], config=BlackjackConfig(dealer_peek=False))
    state = game.start(100)
    assert state.stage is RoundStage.PLAYER_TURN
    result = game.stand()
    assert result.outcome is OutcomeKind.LOSS
    assert result.details["dealer_score"] == 21


def test_player_bust_loses(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "9", "6", "8", "K"])
    game.start(100)
    result = game.hit()
    assert result.outcome is OutcomeKind.LOSS
    assert result.payout == 0
    assert result.state.player.value == 26
    assert ledger.balance == 900
    assert ledger.snapshot.experience == 10


def test_hit_then_stand_win(stacked_blackjack, ledger):
    game = stacked_blackjack(["5", "10", "6", "8", "9"])
    game.start(100)
    state = game.hit()
    assert state.player.value == 20
    result = game.stand()
    assert result.outcome is OutcomeKind.WIN
    assert result.details == {"player_score": 20, "dealer_score": 18, "natural": False}
    assert ledger.balance == 1100


def test_equal_scores_push(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "10", "8", "8"])
    game.start(100)
    result = game.stand()
    assert result.outcome is OutcomeKind.PUSH
    assert ledger.balance == 1000


def test_lower_score_loses(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "10", "7", "9"])
    game.start(100)
    result = game.stand()
    assert result.outcome is OutcomeKind.LOSS
    assert ledger.balance == 900


def test_hole_card_hidden_until_dealer_turn(stacked_blackjack, recorded_events):
    game = stacked_blackjack(["10", "9", "8", "K"])
    state = game.start(10)
    view = state.to_dict()
    assert view["dealer"]["cards"] == ["9 of ♠"]
    assert view["dealer"]["hidden_cards"] == 1
    assert view["dealer"]["value"] == 9

    dealt = [data for name, data in recorded_events if name == "CARD_DEALT"]
    assert [d["recipient"] for d in dealt] == ["player", "dealer", "player", "dealer"]
    assert dealt[3]["card"] is None

    result = game.stand()
    assert result.to_dict()["state"]["dealer"]["hidden_cards"] == 0


def test_start_during_round_is_rejected(stacked_blackjack, ledger):
    game = stacked_blackjack(["10", "9", "8", "K"])
    game.start(10)
    with pytest.raises(InvalidActionError):
        game.start(10)
    assert ledger.balance == 990


def test_stake_validation_leaves_balance(ledger):
    game = BlackjackGame(ledger, BlackjackConfig(limits=StakeLimits(10, 500)), rng=SeededRandomSource(1))
    with pytest.raises(StakeLimitError):
        game.start(5)
    with pytest.raises(StakeLimitError):
        game.start(501)
    assert ledger.balance == 1000
    assert game.state.stage is RoundStage.BETTING


def test_insufficient_funds(ledger):
    game = BlackjackGame(ledger, rng=SeededRandomSource(1))
    with pytest.raises(InsufficientFundsError):
        game.start(1001)
    assert ledger.balance == 1000
    assert game.state.stage is RoundStage.BETTING


def test_actions_before_start_are_rejected(ledger):
    game = BlackjackGame(ledger, rng=SeededRandomSource(1))
    with pytest.raises(InvalidActionError):
        game.hit()
    with pytest.raises(InvalidActionError):
        game.stand()
    with pytest.raises(InvalidActionError):
        game.hint()


def test_hint_during_player_turn(stacked_blackjack):
    game = stacked_blackjack(["10", "9", "3", "K"])
    game.start(10)
    assert game.hint().action == "HIT"


def test_round_settled_event(stacked_blackjack, recorded_events):
    game = stacked_blackjack(["10", "10", "10", "6", "K"])
    game.start(100)
    game.stand()
    settled = [data for name, data in recorded_events if name == CasinoEventType.ROUND_SETTLED.name]
    assert len(settled) == 1
    assert settled[0]["game"] == "blackjack"
    assert settled[0]["result"]["outcome"] == "win"


def test_seeded_rounds_keep_ledger_consistent(ledger):
    game = BlackjackGame(
        ledger, BlackjackConfig(deck_policy=DeckPolicy.SHOE), rng=SeededRandomSource(99)
    )
    for _ in range(50):
        outcome = game.start(10)
        while not isinstance(outcome, GameResult):
            outcome = game.hit() if game.hint().action == "HIT" else game.stand()
    account = ledger.snapshot
    assert account.games_played == 50
    assert 0 <= account.games_won <= 50
    assert account.balance >= 0
