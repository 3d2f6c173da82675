"""
Drop game engine.

A single atomic action: charge the stake, bounce the ball left or right once
per row, and pay the multiplier of the bucket it lands in. No physics is
simulated; the bounces only realise the binomial bucket distribution.
"""

import logging
from collections import deque
from typing import Optional

from highroller.common.result import GameResult, classify, scaled_payout
from highroller.common.rng import RandomSource
from highroller.config import PlinkoConfig
from highroller.engine.base import WagerEngine
from highroller.events import CasinoEventType, EventEmitter
from highroller.ledger import Ledger
from highroller.plinko.buckets import bucket_probabilities

logger = logging.getLogger("highroller.plinko")


class PlinkoGame(WagerEngine):
    """Drop engine over a fixed, symmetric bucket layout."""

    game_id = "plinko"

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[PlinkoConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.config = config or PlinkoConfig()
        super().__init__(ledger, self.config.limits, rng, event_bus)
        self.multipliers = self.config.multipliers
        self.probabilities = bucket_probabilities(self.config.rows)
        self.history = deque(maxlen=10)

    def drop(self, stake: int) -> GameResult:
        """
        Charge the stake, drop one ball and settle.

        Raises:
            StakeLimitError: if the stake is outside table limits
            InsufficientFundsError: if the stake exceeds the balance
        """
        with self._lock:
            self._charge(stake)
            # 0 = left, 1 = right
            path = [self.rng.coin() for _ in range(self.config.rows)]
            bucket = sum(path)
            multiplier = self.multipliers[bucket]
            payout = scaled_payout(stake, multiplier)
            self.history.append(multiplier)
            self._emit(
                CasinoEventType.BALL_DROPPED,
                {"path": path, "bucket": bucket, "multiplier": multiplier},
            )

            outcome = classify(stake, payout)
            return self._settle(
                stake=stake,
                payout=payout,
                outcome=outcome,
                experience=self.config.experience.for_outcome(outcome),
                state=bucket,
                details={"path": path, "bucket": bucket, "multiplier": multiplier},
            )
