"""
Configuration objects consumed at engine construction.

Every tunable number the engines use lives here rather than inside the
resolution logic. Configurations are frozen dataclasses validated on
creation; `CasinoConfig.from_dict` and `load_config` build them from plain
data such as a JSON file.

>>> config = CasinoConfig.from_dict({"starting_balance": 500, "mines": {"rows": 4, "cols": 4}})
>>> config.starting_balance, config.mines.cells
(500, 16)
"""

import json
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from highroller.common.deck import DeckPolicy
from highroller.common.result import OutcomeKind
from highroller.exceptions import StakeLimitError
from highroller.mines.multiplier import CURVES
from highroller.plinko.buckets import DEFAULT_MULTIPLIERS, DEFAULT_ROWS, validate_multipliers
from highroller.slots.symbols import (
    DEFAULT_JACKPOT_SYMBOL,
    DEFAULT_SYMBOLS,
    SlotSymbol,
    symbols_by_name,
)


@dataclass(frozen=True)
class StakeLimits:
    """Minimum and maximum stake accepted by a game."""

    min_stake: int = 1
    max_stake: int = 5000

    def __post_init__(self):
        if self.min_stake < 1:
            raise ValueError("Minimum stake must be at least 1")
        if self.max_stake < self.min_stake:
            raise ValueError("Maximum stake must not be below the minimum stake")

    def check(self, amount: int) -> None:
        """
        Raises:
            ValueError: if the amount is not an integer
            StakeLimitError: if the amount is outside the limits
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValueError(f"Stake must be an integer, got {amount!r}")
        if not self.min_stake <= amount <= self.max_stake:
            raise StakeLimitError(amount, self.min_stake, self.max_stake)


@dataclass(frozen=True)
class ExperienceRewards:
    """Experience granted for each outcome of a round."""

    win: int = 0
    loss: int = 0
    push: int = 0

    def for_outcome(self, outcome: OutcomeKind) -> int:
        return {
            OutcomeKind.WIN: self.win,
            OutcomeKind.LOSS: self.loss,
            OutcomeKind.PUSH: self.push,
        }[outcome]

    def for_payout(self, payout: int) -> int:
        """Win reward for any chips returned, loss reward otherwise."""
        return self.win if payout > 0 else self.loss


@dataclass(frozen=True)
class BlackjackConfig:
    limits: StakeLimits = field(default_factory=StakeLimits)
    natural_payout: float = 1.5
    dealer_stand_score: int = 17
    dealer_peek: bool = True
    deck_policy: DeckPolicy = DeckPolicy.PER_ROUND
    num_decks: int = 6
    penetration: float = 0.75
    experience: ExperienceRewards = field(
        default_factory=lambda: ExperienceRewards(win=25, loss=10, push=10)
    )

    def __post_init__(self):
        object.__setattr__(self, "deck_policy", DeckPolicy(self.deck_policy))
        if self.natural_payout <= 0:
            raise ValueError("Natural payout ratio must be positive")
        if not 2 <= self.dealer_stand_score <= 21:
            raise ValueError("Dealer stand score must be between 2 and 21")
        if self.num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 < self.penetration <= 1:
            raise ValueError("Penetration must be between 0 and 1")


@dataclass(frozen=True)
class RouletteConfig:
    limits: StakeLimits = field(default_factory=StakeLimits)
    wheel_positions: int = 37
    experience: ExperienceRewards = field(
        default_factory=lambda: ExperienceRewards(win=30, loss=10, push=10)
    )

    def __post_init__(self):
        if self.wheel_positions not in (37, 38):
            raise ValueError("Wheel must have 37 (single zero) or 38 (double zero) positions")


@dataclass(frozen=True)
class MinesConfig:
    limits: StakeLimits = field(default_factory=StakeLimits)
    rows: int = 5
    cols: int = 5
    min_hazards: int = 1
    max_hazards: int = 24
    multiplier_curve: str = "fair_odds"
    edge_factor: float = 0.97
    experience_profit_divisor: int = 10
    experience_on_loss: int = 0

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1 or self.cells < 2:
            raise ValueError("Board needs at least two cells")
        if not 1 <= self.min_hazards <= self.max_hazards < self.cells:
            raise ValueError(
                f"Hazard range [{self.min_hazards}, {self.max_hazards}] "
                f"does not fit a board of {self.cells} cells"
            )
        if self.multiplier_curve not in CURVES:
            raise ValueError(f"Unknown multiplier curve {self.multiplier_curve!r}")
        if not 0 < self.edge_factor <= 1:
            raise ValueError("Edge factor must be in (0, 1]")
        first_reveal = CURVES[self.multiplier_curve](1, self.min_hazards, self.cells, self.edge_factor)
        if first_reveal <= 1.0:
            raise ValueError(
                f"Edge factor {self.edge_factor} leaves the first reveal at {first_reveal:.4f}x "
                f"with {self.min_hazards} hazards; it must pay above 1x"
            )
        if self.experience_profit_divisor < 1:
            raise ValueError("Experience profit divisor must be at least 1")

    @property
    def cells(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True)
class SlotsConfig:
    limits: StakeLimits = field(default_factory=StakeLimits)
    reels: int = 3
    symbols: Tuple[SlotSymbol, ...] = DEFAULT_SYMBOLS
    jackpot_symbol: str = DEFAULT_JACKPOT_SYMBOL
    jackpot_base: int = 50000
    jackpot_contribution: float = 0.1
    experience: ExperienceRewards = field(
        default_factory=lambda: ExperienceRewards(win=20, loss=5, push=5)
    )

    def __post_init__(self):
        object.__setattr__(self, "symbols", tuple(self.symbols))
        if self.reels < 2:
            raise ValueError("Reel game needs at least two reels")
        if self.jackpot_symbol not in symbols_by_name(self.symbols):
            raise ValueError(f"Jackpot symbol {self.jackpot_symbol!r} is not on the reels")
        if self.jackpot_base < 0:
            raise ValueError("Jackpot base must be non-negative")
        if not 0 < self.jackpot_contribution < 1:
            raise ValueError("Jackpot contribution must be a fraction between 0 and 1")


@dataclass(frozen=True)
class PlinkoConfig:
    limits: StakeLimits = field(default_factory=StakeLimits)
    rows: int = DEFAULT_ROWS
    multipliers: Tuple[float, ...] = DEFAULT_MULTIPLIERS
    experience: ExperienceRewards = field(
        default_factory=lambda: ExperienceRewards(win=10, loss=5, push=5)
    )

    def __post_init__(self):
        object.__setattr__(self, "multipliers", tuple(self.multipliers))
        validate_multipliers(self.rows, self.multipliers)


@dataclass(frozen=True)
class CasinoConfig:
    """
    Top level configuration.

    Attributes:
        starting_balance: Chips granted to a new account
        experience_per_level: Experience needed for each level
        blackjack, roulette, mines, slots, plinko: Per-game sections
    """

    starting_balance: int = 1000
    experience_per_level: int = 1000
    blackjack: BlackjackConfig = field(default_factory=BlackjackConfig)
    roulette: RouletteConfig = field(default_factory=RouletteConfig)
    mines: MinesConfig = field(default_factory=MinesConfig)
    slots: SlotsConfig = field(default_factory=SlotsConfig)
    plinko: PlinkoConfig = field(default_factory=PlinkoConfig)

    def __post_init__(self):
        if self.starting_balance < 0:
            raise ValueError("Starting balance must be non-negative")
        if self.experience_per_level < 1:
            raise ValueError("Experience per level must be at least 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CasinoConfig":
        return _build(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


# Nested types that a plain mapping can be converted into
_NESTED = {
    "limits": StakeLimits,
    "experience": ExperienceRewards,
    "blackjack": BlackjackConfig,
    "roulette": RouletteConfig,
    "mines": MinesConfig,
    "slots": SlotsConfig,
    "plinko": PlinkoConfig,
}


def _build(cls, data: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} options: {sorted(unknown)}")

    kwargs = {}
    for name, value in data.items():
        if name in _NESTED and isinstance(value, dict):
            value = _build(_NESTED[name], value)
        elif name == "symbols":
            value = tuple(
                item if isinstance(item, SlotSymbol) else SlotSymbol(**item)
                for item in value
            )
        kwargs[name] = value
    return cls(**kwargs)


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if is_dataclass(value):
        return _plain(asdict(value))
    return value


def load_config(path: Union[str, Path]) -> CasinoConfig:
    """Load a CasinoConfig from a JSON file."""
    with open(path, "r", encoding="utf-8") as handle:
        return CasinoConfig.from_dict(json.load(handle))
