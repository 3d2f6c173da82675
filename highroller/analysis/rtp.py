"""
Return-to-player analysis for the highroller games.

This module provides exact expected returns for the games whose outcome
distribution is known in closed form (drop, reels, wheel and board games),
plus a Monte Carlo estimator that plays real rounds through an engine and
reports the observed mean return with a confidence interval.

All returns are expressed per chip staked: an RTP of 0.97 means the game
hands back 97 chips for every 100 wagered in the long run.
"""

import itertools
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import scipy.stats as stats

from highroller.common.result import GameResult
from highroller.config import MinesConfig, PlinkoConfig, RouletteConfig, SlotsConfig
from highroller.mines.multiplier import get_curve, survival_probability
from highroller.plinko.buckets import bucket_probabilities
from highroller.roulette.bets import parse_selector
from highroller.roulette.wheel import build_wheel
from highroller.slots.game import ReelResult, evaluate

logger = logging.getLogger("highroller.analysis")


@dataclass
class ConfidenceInterval:
    """
    Represents a confidence interval with lower and upper bounds.

    Attributes:
        lower: The lower bound of the confidence interval
        upper: The upper bound of the confidence interval
        confidence: The confidence level (e.g., 0.95 for 95% confidence)
    """

    lower: float
    upper: float
    confidence: float

    def contains(self, value: float) -> bool:
        """Check if the interval contains a value."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        return {"lower": self.lower, "upper": self.upper, "confidence": self.confidence}


@dataclass
class SimulationSummary:
    """
    Observed returns over a batch of simulated rounds.

    Attributes:
        game: Identifier of the simulated game
        rounds: Number of rounds played
        stake: Stake used on every round
        mean_return: Average payout per chip staked
        std_error: Standard error of the mean return
        interval: Confidence interval around the mean return
        outcomes: Count of each outcome kind
    """

    game: str
    rounds: int
    stake: int
    mean_return: float
    std_error: float
    interval: ConfidenceInterval
    outcomes: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game": self.game,
            "rounds": self.rounds,
            "stake": self.stake,
            "mean_return": self.mean_return,
            "std_error": self.std_error,
            "interval": self.interval.to_dict(),
            "outcomes": dict(self.outcomes),
        }


def plinko_rtp(config: Optional[PlinkoConfig] = None) -> float:
    """Exact RTP of the drop game: sum of bucket probability x bucket multiplier."""
    config = config or PlinkoConfig()
    probabilities = bucket_probabilities(config.rows)
    return sum(p * m for p, m in zip(probabilities, config.multipliers))


def roulette_rtp(selector: str, config: Optional[RouletteConfig] = None) -> float:
    """
    Exact RTP of one selector on the wheel.

    Raises:
        InvalidBetError: if the selector is not recognised on this wheel
    """
    config = config or RouletteConfig()
    bet = parse_selector(selector, config.wheel_positions)
    wheel = build_wheel(config.wheel_positions)
    winning = sum(1 for outcome in wheel if bet.wins(outcome))
    return winning * (bet.ratio + 1) / len(wheel)


def slots_rtp(config: Optional[SlotsConfig] = None, stake: Optional[int] = None) -> float:
    """
    Exact RTP of the reel game by enumerating every combination of stops.

    Payouts are floored per chip, so the RTP depends on the stake. Without a
    stake the jackpot combination is counted as paying nothing; with one, it
    is counted at the configured base pool.
    """
    config = config or SlotsConfig()
    unit = stake or 1
    pool = config.jackpot_base if stake else 0
    weights = [symbol.weight for symbol in config.symbols]
    total_weight = sum(weights)

    expected = 0.0
    for stops in itertools.product(range(len(config.symbols)), repeat=config.reels):
        probability = 1.0
        for index in stops:
            probability *= weights[index] / total_weight
        reels = ReelResult(tuple(config.symbols[index] for index in stops))
        _, payout, _ = evaluate(reels, unit, config.jackpot_symbol, pool)
        expected += probability * payout
    return expected / unit


def mines_rtp(
    hazards: int, reveals: int, config: Optional[MinesConfig] = None
) -> float:
    """
    Exact RTP of the board game for a player who always cashes out after
    ``reveals`` safe cells (ignoring the floor applied to payouts).
    """
    config = config or MinesConfig()
    curve = get_curve(config.multiplier_curve)
    survive = survival_probability(reveals, hazards, config.cells)
    return survive * curve(reveals, hazards, config.cells, config.edge_factor)


def _confidence_interval(values: np.ndarray, confidence: float = 0.95) -> ConfidenceInterval:
    mean = float(np.mean(values))
    std_err = float(stats.sem(values))

    # Calculate confidence interval
    margin = std_err * stats.t.ppf((1 + confidence) / 2, len(values) - 1)
    return ConfidenceInterval(mean - margin, mean + margin, confidence)


def monte_carlo(
    engine_factory: Callable[[], Any],
    rounds: int,
    stake: int,
    play_round: Optional[Callable[[Any, int], GameResult]] = None,
    confidence: float = 0.95,
) -> SimulationSummary:
    """
    Estimate an engine's RTP by playing real rounds.

    Args:
        engine_factory: Builds a fresh engine; called again whenever the
            current engine's ledger can no longer cover the stake
        rounds: Number of rounds to play
        stake: Stake for every round
        play_round: Plays one round and returns its result; defaults to the
            standard round for the engine's game
        confidence: Confidence level of the reported interval

    Returns:
        A SimulationSummary for the batch
    """
    if rounds < 2:
        raise ValueError("At least two rounds are needed to estimate a spread")

    engine = engine_factory()
    play = play_round or ROUND_PLAYERS[engine.game_id]
    returns = np.empty(rounds, dtype=float)
    outcomes: Counter = Counter()

    for i in range(rounds):
        if not engine.ledger.can_afford(stake):
            logger.debug("Ledger exhausted after %d rounds, building a new engine", i)
            engine = engine_factory()
        result = play(engine, stake)
        returns[i] = result.payout / result.stake
        outcomes[result.outcome.value] += 1

    interval = _confidence_interval(returns, confidence)
    summary = SimulationSummary(
        game=engine.game_id,
        rounds=rounds,
        stake=stake,
        mean_return=float(np.mean(returns)),
        std_error=float(stats.sem(returns)),
        interval=interval,
        outcomes=dict(outcomes),
    )
    logger.info(
        "%s: %d rounds, mean return %.4f [%.4f, %.4f]",
        summary.game,
        rounds,
        summary.mean_return,
        interval.lower,
        interval.upper,
    )
    return summary


def _play_blackjack(engine, stake: int) -> GameResult:
    outcome = engine.start(stake)
    while not isinstance(outcome, GameResult):
        if engine.hint().action == "HIT":
            outcome = engine.hit()
        else:
            outcome = engine.stand()
    return outcome


def _play_roulette(engine, stake: int) -> GameResult:
    engine.place_stake("red", stake)
    return engine.spin()


def _play_mines(engine, stake: int) -> GameResult:
    # Reveal cells in order, cash out after the first safe one
    engine.start(stake, engine.config.min_hazards)
    outcome = engine.reveal(0, 0)
    if isinstance(outcome, GameResult):
        return outcome
    return engine.cash_out()


ROUND_PLAYERS: Dict[str, Callable[[Any, int], GameResult]] = {
    "blackjack": _play_blackjack,
    "roulette": _play_roulette,
    "mines": _play_mines,
    "slots": lambda engine, stake: engine.spin(stake),
    "plinko": lambda engine, stake: engine.drop(stake),
}


def rtp_table(stake: int = 100) -> List[Dict[str, Any]]:
    """Exact RTP of each game's reference bet under the default configuration."""
    mines = MinesConfig()
    return [
        {"game": "plinko", "bet": "single drop", "rtp": plinko_rtp()},
        {"game": "slots", "bet": f"stake {stake}, jackpot at base", "rtp": slots_rtp(stake=stake)},
        {"game": "roulette", "bet": "red", "rtp": roulette_rtp("red")},
        {"game": "roulette", "bet": "number-17", "rtp": roulette_rtp("number-17")},
        {
            "game": "mines",
            "bet": f"{mines.min_hazards} hazard, cash out after 1",
            "rtp": mines_rtp(mines.min_hazards, 1, mines),
        },
    ]
