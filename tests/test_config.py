import json

import pytest

from highroller.common.deck import DeckPolicy
from highroller.config import (
    BlackjackConfig,
    CasinoConfig,
    MinesConfig,
    PlinkoConfig,
    RouletteConfig,
    SlotsConfig,
    StakeLimits,
    load_config,
)
from highroller.exceptions import StakeLimitError


def test_defaults():
    config = CasinoConfig()
    assert config.starting_balance == 1000
    assert config.blackjack.natural_payout == 1.5
    assert config.blackjack.deck_policy is DeckPolicy.PER_ROUND
    assert config.roulette.wheel_positions == 37
    assert config.mines.cells == 25
    assert config.mines.multiplier_curve == "fair_odds"
    assert config.slots.jackpot_base == 50000
    assert len(config.plinko.multipliers) == config.plinko.rows + 1


def test_stake_limits():
    limits = StakeLimits(min_stake=5, max_stake=100)
    limits.check(5)
    limits.check(100)
    with pytest.raises(StakeLimitError):
        limits.check(4)
    with pytest.raises(StakeLimitError):
        limits.check(101)
    with pytest.raises(ValueError):
        limits.check(10.5)
    with pytest.raises(ValueError):
        StakeLimits(min_stake=10, max_stake=5)


def test_from_dict_nested_sections():
    config = CasinoConfig.from_dict(
        {
            "starting_balance": 500,
            "blackjack": {"deck_policy": "shoe", "limits": {"min_stake": 10, "max_stake": 200}},
            "mines": {"rows": 4, "cols": 4, "max_hazards": 15},
            "slots": {"experience": {"win": 1, "loss": 2, "push": 3}},
        }
    )
    assert config.starting_balance == 500
    assert config.blackjack.deck_policy is DeckPolicy.SHOE
    assert config.blackjack.limits.min_stake == 10
    assert config.mines.cells == 16
    assert config.slots.experience.loss == 2


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        CasinoConfig.from_dict({"startng_balance": 10})
    with pytest.raises(ValueError):
        CasinoConfig.from_dict({"plinko": {"rowz": 8}})


def test_to_dict_round_trip():
    config = CasinoConfig(roulette=RouletteConfig(wheel_positions=38))
    data = config.to_dict()
    json.dumps(data)
    assert data["blackjack"]["deck_policy"] == "per_round"
    assert CasinoConfig.from_dict(data) == config


def test_load_config(tmp_path):
    path = tmp_path / "casino.json"
    path.write_text(json.dumps({"experience_per_level": 250, "plinko": {"rows": 2, "multipliers": [2, 0.5, 2]}}))
    config = load_config(path)
    assert config.experience_per_level == 250
    assert config.plinko.multipliers == (2, 0.5, 2)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: BlackjackConfig(penetration=0),
        lambda: BlackjackConfig(deck_policy="sometimes"),
        lambda: RouletteConfig(wheel_positions=36),
        lambda: MinesConfig(max_hazards=25),
        lambda: MinesConfig(multiplier_curve="linear"),
        lambda: MinesConfig(edge_factor=0.9),
        lambda: MinesConfig(edge_factor=0.95),
        lambda: SlotsConfig(jackpot_symbol="seven"),
        lambda: PlinkoConfig(rows=2, multipliers=[1, 2, 1]),
        lambda: PlinkoConfig(rows=2, multipliers=[2, 1]),
        lambda: CasinoConfig(experience_per_level=0),
    ],
)
def test_invalid_configs(factory):
    with pytest.raises(ValueError):
        factory()


def test_edge_factor_must_lift_first_reveal():
    # 0.9 is accepted once the smallest hazard count makes a single reveal risky enough
    config = MinesConfig(min_hazards=3, edge_factor=0.9)
    assert config.edge_factor == 0.9
    assert MinesConfig(multiplier_curve="progressive", edge_factor=0.5).edge_factor == 0.5
