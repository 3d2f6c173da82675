"""
Wheel game engine.

Stakes are charged as they are placed and accumulate per selector until the
wheel is spun. Before the spin they may be cleared, which refunds them.
"""

import logging
from collections import deque
from typing import Dict, Optional, Union

from highroller.common.result import GameResult, classify
from highroller.common.rng import RandomSource
from highroller.config import RouletteConfig
from highroller.engine.base import WagerEngine
from highroller.events import CasinoEventType, EventEmitter
from highroller.exceptions import NoStakesPlacedError
from highroller.ledger import Ledger, LedgerDelta, WagerAccount
from highroller.roulette.bets import BetSelector, parse_selector
from highroller.roulette.wheel import WheelOutcome, build_wheel

logger = logging.getLogger("highroller.roulette")


class RouletteGame(WagerEngine):
    """
    Wheel game with any number of concurrent stakes per spin.
    """

    game_id = "roulette"

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[RouletteConfig] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.config = config or RouletteConfig()
        super().__init__(ledger, self.config.limits, rng, event_bus)
        self.wheel = build_wheel(self.config.wheel_positions)
        self._stakes: Dict[BetSelector, int] = {}
        self.history = deque(maxlen=10)

    @property
    def stakes(self) -> Dict[str, int]:
        """Placed-but-unresolved stakes keyed by selector."""
        return {selector.key: amount for selector, amount in self._stakes.items()}

    @property
    def total_staked(self) -> int:
        return sum(self._stakes.values())

    def place_stake(self, selector: Union[str, int, BetSelector], amount: int) -> WagerAccount:
        """
        Charge a stake and add it to the table.

        Raises:
            InvalidBetError: if the selector is not recognised
            StakeLimitError: if the amount is outside table limits
            InsufficientFundsError: if the amount exceeds the balance
        """
        with self._lock:
            bet = parse_selector(selector, self.config.wheel_positions)
            account = self._charge(amount)
            self._stakes[bet] = self._stakes.get(bet, 0) + amount
            self._emit(
                CasinoEventType.STAKE_PLACED,
                {"selector": bet.key, "amount": amount, "total_on_selector": self._stakes[bet]},
            )
            return account

    def clear_stakes(self) -> WagerAccount:
        """
        Refund every unresolved stake. A no-op when the table is empty.
        """
        with self._lock:
            if not self._stakes:
                return self.ledger.snapshot
            refund = self.total_staked
            self._stakes.clear()
            account = self.ledger.apply(LedgerDelta(balance_change=refund))
            logger.debug("Refunded %d in cleared stakes", refund)
            self._emit(CasinoEventType.STAKES_CLEARED, {"refund": refund})
            return account

    def spin(self) -> GameResult:
        """
        Draw a pocket and resolve every stake against it.

        Raises:
            NoStakesPlacedError: if nothing is on the table
        """
        with self._lock:
            if not self._stakes:
                raise NoStakesPlacedError("Place a stake before spinning")

            outcome: WheelOutcome = self.wheel[self.rng.randbelow(len(self.wheel))]
            self.history.append(outcome)
            self._emit(CasinoEventType.WHEEL_SPUN, {"outcome": outcome.to_dict()})

            breakdown = {}
            total_payout = 0
            for bet, amount in self._stakes.items():
                payout = bet.payout(amount, outcome)
                breakdown[bet.key] = {"amount": amount, "payout": payout}
                total_payout += payout

            total_staked = self.total_staked
            self._stakes.clear()

            outcome_kind = classify(total_staked, total_payout)
            return self._settle(
                stake=total_staked,
                payout=total_payout,
                outcome=outcome_kind,
                experience=self.config.experience.for_payout(total_payout),
                state=outcome,
                details={"outcome": outcome.to_dict(), "bets": breakdown},
            )
