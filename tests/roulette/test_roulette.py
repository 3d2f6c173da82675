"""
Tests for the wheel game engine and its bet selectors.
"""

import pytest

from highroller.common.result import OutcomeKind
from highroller.common.rng import FixedSequenceSource
from highroller.config import RouletteConfig
from highroller.events import CasinoEventType
from highroller.exceptions import (
    InsufficientFundsError,
    InvalidActionError,
    InvalidBetError,
    NoStakesPlacedError,
)
from highroller.ledger import Ledger
from highroller.roulette.bets import BetKind, parse_selector
from highroller.roulette.game import RouletteGame
from highroller.roulette.wheel import PocketColor, build_wheel


def make_game(ledger, pockets, config=None):
    return RouletteGame(ledger, config, rng=FixedSequenceSource(pockets))


def test_wheel_layout():
    wheel = build_wheel()
    assert len(wheel) == 37
    assert wheel[0].color is PocketColor.GREEN
    assert wheel[1].color is PocketColor.RED
    assert wheel[2].color is PocketColor.BLACK
    assert sum(1 for p in wheel if p.color is PocketColor.RED) == 18
    double = build_wheel(38)
    assert double[37].label == "00"
    assert double[37].is_zero


@pytest.mark.parametrize(
    "selector,kind,key",
    [
        ("number-17", BetKind.STRAIGHT, "number-17"),
        (17, BetKind.STRAIGHT, "number-17"),
        ("number-07", BetKind.STRAIGHT, "number-7"),
        ("RED", BetKind.COLOR, "red"),
        ("odd", BetKind.PARITY, "odd"),
        ("high", BetKind.RANGE, "high"),
    ],
)
def test_parse_selector(selector, kind, key):
    bet = parse_selector(selector)
    assert bet.kind is kind
    assert bet.key == key


@pytest.mark.parametrize("selector", ["number-37", "number-00", "green", "number-", 40, None, True])
def test_parse_selector_rejects(selector):
    with pytest.raises(InvalidBetError):
        parse_selector(selector)


def test_invalid_bet_is_an_invalid_action():
    assert issubclass(InvalidBetError, InvalidActionError)


def test_straight_miss_on_small_balance():
    ledger = Ledger(starting_balance=100)
    game = make_game(ledger, [3])
    game.place_stake("number-17", 50)
    assert ledger.balance == 50
    result = game.spin()
    assert result.outcome is OutcomeKind.LOSS
    assert result.payout == 0
    assert ledger.balance == 50
    assert ledger.snapshot.games_played == 1


def test_straight_hit_pays_thirty_five_to_one(ledger):
    game = make_game(ledger, [17])
    game.place_stake(17, 10)
    result = game.spin()
    assert result.payout == 360
    assert ledger.balance == 1350


def test_colour_and_number_both_pay(ledger):
    game = make_game(ledger, [3])
    game.place_stake("red", 10)
    game.place_stake("number-3", 10)
    result = game.spin()
    assert result.outcome is OutcomeKind.WIN
    assert result.payout == 20 + 360
    assert result.details["bets"]["red"] == {"amount": 10, "payout": 20}
    assert result.details["bets"]["number-3"] == {"amount": 10, "payout": 360}
    assert ledger.balance == 1000 - 20 + 380
    assert ledger.snapshot.games_won == 1


def test_zero_loses_outside_bets(ledger):
    game = make_game(ledger, [0])
    for selector in ("red", "black", "even", "odd", "low", "high"):
        game.place_stake(selector, 10)
    result = game.spin()
    assert result.payout == 0
    assert ledger.balance == 940


def test_even_money_bets_cover_their_half(ledger):
    game = make_game(ledger, [18])
    game.place_stake("red", 10)
    game.place_stake("even", 10)
    game.place_stake("low", 10)
    game.place_stake("high", 10)
    result = game.spin()
    # 18 is red, even and low
    assert result.payout == 60
    assert result.outcome is OutcomeKind.WIN


def test_stakes_on_one_selector_accumulate(ledger):
    game = make_game(ledger, [1])
    game.place_stake("odd", 10)
    game.place_stake("ODD", 15)
    assert game.stakes == {"odd": 25}
    assert game.total_staked == 25


def test_clear_stakes_refunds_and_is_idempotent(ledger, recorded_events):
    game = make_game(ledger, [1])
    game.place_stake("red", 100)
    game.place_stake("number-5", 50)
    assert ledger.balance == 850

    assert game.clear_stakes().balance == 1000
    assert game.clear_stakes().balance == 1000
    assert game.stakes == {}
    assert ledger.snapshot.games_played == 0

    cleared = [name for name, _ in recorded_events if name == CasinoEventType.STAKES_CLEARED.name]
    assert len(cleared) == 1


def test_spin_without_stakes(ledger):
    game = make_game(ledger, [1])
    with pytest.raises(NoStakesPlacedError):
        game.spin()


def test_stakes_are_cleared_after_spin(ledger):
    game = make_game(ledger, [1, 2])
    game.place_stake("red", 10)
    game.spin()
    assert game.stakes == {}
    with pytest.raises(NoStakesPlacedError):
        game.spin()


def test_invalid_selector_charges_nothing(ledger):
    game = make_game(ledger, [1])
    with pytest.raises(InvalidBetError):
        game.place_stake("purple", 10)
    assert ledger.balance == 1000


def test_insufficient_funds_on_place(ledger):
    game = make_game(ledger, [1])
    game.place_stake("red", 900)
    with pytest.raises(InsufficientFundsError):
        game.place_stake("black", 200)
    assert game.stakes == {"red": 900}
    assert ledger.balance == 100


def test_double_zero_wheel(ledger):
    game = make_game(ledger, [37], RouletteConfig(wheel_positions=38))
    game.place_stake("number-00", 10)
    game.place_stake("red", 10)
    result = game.spin()
    assert result.state.label == "00"
    assert result.payout == 360


def test_history_keeps_last_ten(ledger):
    game = make_game(ledger, list(range(12)))
    for _ in range(12):
        game.place_stake("red", 1)
        game.spin()
    assert len(game.history) == 10
    assert [p.number for p in game.history] == list(range(2, 12))


def test_covering_bets_push_but_earn_win_experience(ledger):
    game = make_game(ledger, [1])
    game.place_stake("red", 10)
    game.place_stake("black", 10)
    result = game.spin()
    assert result.outcome is OutcomeKind.PUSH
    assert ledger.balance == 1000
    assert ledger.snapshot.games_won == 0
    assert ledger.snapshot.experience == 30
