"""
Tests for the exact and simulated return-to-player figures.
"""

import pytest

from highroller.analysis.rtp import (
    ConfidenceInterval,
    mines_rtp,
    monte_carlo,
    plinko_rtp,
    roulette_rtp,
    rtp_table,
    slots_rtp,
)
from highroller.blackjack.game import BlackjackGame
from highroller.common.rng import FixedSequenceSource, SeededRandomSource
from highroller.config import MinesConfig, PlinkoConfig, RouletteConfig
from highroller.exceptions import InvalidBetError
from highroller.ledger import Ledger
from highroller.mines.game import MinesGame
from highroller.plinko.game import PlinkoGame
from highroller.roulette.game import RouletteGame


def test_plinko_rtp_default_layout():
    assert plinko_rtp() == pytest.approx(4054.2 / 4096)
    assert plinko_rtp() < 1


def test_plinko_rtp_custom_layout():
    assert plinko_rtp(PlinkoConfig(rows=2, multipliers=(2, 0.5, 2))) == pytest.approx(1.25)


def test_roulette_rtp():
    assert roulette_rtp("red") == pytest.approx(36 / 37)
    assert roulette_rtp("number-17") == pytest.approx(36 / 37)
    assert roulette_rtp("odd", RouletteConfig(wheel_positions=38)) == pytest.approx(36 / 38)
    with pytest.raises(InvalidBetError):
        roulette_rtp("number-00")


def test_fair_odds_mines_rtp_is_edge_factor():
    for hazards, reveals in [(1, 1), (3, 5), (10, 10), (24, 1)]:
        assert mines_rtp(hazards, reveals) == pytest.approx(0.97)
    assert mines_rtp(3, 2, MinesConfig(min_hazards=3, edge_factor=0.9)) == pytest.approx(0.9)


def test_slots_rtp_below_one_and_jackpot_adds():
    base = slots_rtp()
    assert 0.5 < base < 1
    assert slots_rtp(stake=100) > base


def test_rtp_table_rows():
    rows = rtp_table()
    assert {row["game"] for row in rows} == {"plinko", "slots", "roulette", "mines"}
    assert all(0 < row["rtp"] < 1.5 for row in rows)


def test_confidence_interval():
    interval = ConfidenceInterval(0.9, 1.1, 0.95)
    assert interval.contains(1.0)
    assert not interval.contains(1.2)
    assert interval.to_dict() == {"lower": 0.9, "upper": 1.1, "confidence": 0.95}


def test_monte_carlo_summary():
    summary = monte_carlo(
        lambda: PlinkoGame(Ledger(starting_balance=10**6), rng=SeededRandomSource(3)),
        rounds=500,
        stake=10,
    )
    assert summary.game == "plinko"
    assert summary.rounds == 500
    assert sum(summary.outcomes.values()) == 500
    assert summary.interval.contains(summary.mean_return)
    assert summary.std_error > 0
    assert summary.to_dict()["interval"]["confidence"] == 0.95


def test_monte_carlo_rebuilds_exhausted_engines():
    built = []

    def factory():
        game = PlinkoGame(Ledger(starting_balance=10), rng=FixedSequenceSource([1, 0]))
        built.append(game)
        return game

    summary = monte_carlo(factory, rounds=5, stake=10)
    # Every drop lands in the centre bucket and returns half the stake
    assert len(built) == 5
    assert summary.mean_return == pytest.approx(0.5)
    assert summary.std_error == 0
    assert summary.interval.lower == pytest.approx(0.5)
    assert summary.outcomes == {"loss": 5}


def test_monte_carlo_plays_every_game():
    factories = [
        lambda: BlackjackGame(Ledger(starting_balance=10**5), rng=SeededRandomSource(1)),
        lambda: RouletteGame(Ledger(starting_balance=10**5), rng=SeededRandomSource(2)),
        lambda: MinesGame(Ledger(starting_balance=10**5), rng=SeededRandomSource(3)),
    ]
    for factory in factories:
        summary = monte_carlo(factory, rounds=30, stake=10)
        assert summary.rounds == 30
        assert summary.mean_return >= 0


def test_monte_carlo_needs_two_rounds():
    with pytest.raises(ValueError):
        monte_carlo(lambda: PlinkoGame(Ledger()), rounds=1, stake=10)
