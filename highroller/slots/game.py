"""
Reel game engine.

Every reel stops on a symbol drawn independently from the same weighted
table. Matches are evaluated in priority order:

1. every reel shows the jackpot symbol: the whole jackpot pool
2. every reel shows the same symbol: stake x symbol multiplier
3. at least two reels match: floor(stake x symbol multiplier x 0.5)
4. otherwise nothing

Each spin feeds a share of its stake into the jackpot pool before the reels
are evaluated, so a jackpot pays out that share too and leaves the pool at its
base value.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from highroller.common.result import GameResult, classify, scaled_payout
from highroller.common.rng import RandomSource
from highroller.config import SlotsConfig
from highroller.engine.base import WagerEngine
from highroller.events import CasinoEventType, EventEmitter
from highroller.ledger import Ledger
from highroller.slots.symbols import SlotSymbol, symbols_by_name

logger = logging.getLogger("highroller.slots")

PAIR_FACTOR = 0.5


class MatchTier(Enum):
    JACKPOT = "jackpot"
    THREE_OF_A_KIND = "all_match"
    PAIR = "pair"
    NONE = "none"


@dataclass(frozen=True)
class ReelResult:
    """The symbols showing on each reel, left to right."""

    symbols: Tuple[SlotSymbol, ...]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(symbol.name for symbol in self.symbols)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbols": list(self.names),
            "glyphs": [symbol.glyph for symbol in self.symbols],
        }


def evaluate(
    reels: ReelResult, stake: int, jackpot_symbol: str, jackpot_pool: int
) -> Tuple[MatchTier, int, Optional[SlotSymbol]]:
    """
    Evaluate a reel result.

    Returns:
        The match tier, the payout and the symbol that produced it
    """
    first = reels.symbols[0]
    if all(symbol == first for symbol in reels.symbols):
        if first.name == jackpot_symbol:
            return MatchTier.JACKPOT, jackpot_pool, first
        return MatchTier.THREE_OF_A_KIND, stake * first.multiplier, first

    counts = Counter(reels.symbols)
    paired = [symbol for symbol, count in counts.items() if count >= 2]
    if paired:
        best = max(paired, key=lambda symbol: symbol.multiplier)
        return MatchTier.PAIR, scaled_payout(stake, best.multiplier * PAIR_FACTOR), best

    return MatchTier.NONE, 0, None


class SlotMachine(WagerEngine):
    """
    Reel game that owns its progressive jackpot pool.
    """

    game_id = "slots"

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[SlotsConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
        jackpot_pool: Optional[int] = None,
    ):
        """
        Args:
            ledger: The shared player ledger
            config: Reel game configuration
            rng: Entropy source for reel stops
            event_bus: Emitter for engine events
            jackpot_pool: Pool to resume from; defaults to the configured base
        """
        self.config = config or SlotsConfig()
        super().__init__(ledger, self.config.limits, rng, event_bus)
        self.symbols = self.config.symbols
        self.symbol_table = symbols_by_name(self.symbols)
        self._weights = [symbol.weight for symbol in self.symbols]
        self.jackpot_pool = self.config.jackpot_base if jackpot_pool is None else jackpot_pool
        if self.jackpot_pool < self.config.jackpot_base:
            raise ValueError("Jackpot pool cannot start below its base value")

    def contribution(self, stake: int) -> int:
        """Share of a stake that goes into the jackpot pool; at least one chip."""
        return max(1, math.floor(stake * self.config.jackpot_contribution))

    def draw_reels(self) -> ReelResult:
        return ReelResult(
            tuple(
                self.symbols[self.rng.weighted_index(self._weights)]
                for _ in range(self.config.reels)
            )
        )

    def spin(self, stake: int) -> GameResult:
        """
        Charge the stake, spin the reels and settle.

        Raises:
            StakeLimitError: if the stake is outside table limits
            InsufficientFundsError: if the stake exceeds the balance
        """
        with self._lock:
            self._charge(stake)
            reels = self.draw_reels()
            self.jackpot_pool += self.contribution(stake)
            self._emit(
                CasinoEventType.REELS_SPUN,
                {"reels": reels.to_dict(), "jackpot_pool": self.jackpot_pool},
            )

            tier, payout, symbol = evaluate(
                reels, stake, self.config.jackpot_symbol, self.jackpot_pool
            )
            if tier is MatchTier.JACKPOT:
                logger.info("Jackpot of %d won", payout)
                self._emit(CasinoEventType.JACKPOT_WON, {"amount": payout})
                self.jackpot_pool = self.config.jackpot_base

            outcome = classify(stake, payout)
            return self._settle(
                stake=stake,
                payout=payout,
                outcome=outcome,
                experience=self.config.experience.for_payout(payout),
                state=reels,
                details={
                    "tier": tier.value,
                    "symbol": symbol.name if symbol else None,
                    "jackpot_pool": self.jackpot_pool,
                },
            )
