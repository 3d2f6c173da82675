"""
Base engine class for the highroller games.

This module provides the abstract base class shared by every wager engine.
It owns the two ledger interactions every game has in common: charging a
stake up front and applying the settlement delta once the round resolves.
"""

import logging
import threading
from abc import ABC
from typing import Any, Dict, Optional

from highroller.common.result import GameResult, OutcomeKind
from highroller.common.rng import RandomSource, default_source
from highroller.config import StakeLimits
from highroller.events import CasinoEventType, EventBus, EventEmitter
from highroller.ledger import Ledger, LedgerDelta, WagerAccount

logger = logging.getLogger("highroller.engine")


class WagerEngine(ABC):
    """
    Abstract base class for all game engines.

    Subclasses implement the game's own state machine and call `_charge`
    before committing to a round and `_settle` exactly once when it ends.
    Public actions should run under `self._lock` so that overlapping calls
    (a double click, two threads) are serialised instead of interleaved.
    """

    game_id = "abstract"

    def __init__(
        self,
        ledger: Ledger,
        limits: StakeLimits,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Initialize the engine.

        Args:
            ledger: The shared player ledger
            limits: Stake limits for this game
            rng: Entropy source (defaults to the system source)
            event_bus: Emitter for engine events (defaults to the EventBus)
        """
        self.ledger = ledger
        self.limits = limits
        self.rng = rng or default_source()
        self.event_bus = event_bus or EventBus.get_instance()
        self._lock = threading.RLock()

    def _charge(self, amount: int) -> WagerAccount:
        """Check table limits, then atomically take the stake from the ledger."""
        self.limits.check(amount)
        account = self.ledger.charge(amount)
        logger.debug("%s charged stake %d, balance now %d", self.game_id, amount, account.balance)
        return account

    def _emit(self, event_type: CasinoEventType, data: Dict[str, Any]) -> None:
        payload = {"game": self.game_id}
        payload.update(data)
        self.event_bus.emit(event_type, payload)

    def _settle(
        self,
        stake: int,
        payout: int,
        outcome: OutcomeKind,
        experience: int,
        state: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> GameResult:
        """
        Apply the settlement delta for a finished round and build its result.

        The stake has already been charged, so the delta only returns the
        payout and records the game.
        """
        if payout < 0:
            raise ValueError(f"Payout must be non-negative, got {payout}")

        delta = LedgerDelta(
            balance_change=payout,
            won_increment=1 if outcome is OutcomeKind.WIN else 0,
            played_increment=1,
            experience_change=experience,
        )
        account = self.ledger.apply(delta)
        result = GameResult(
            game=self.game_id,
            outcome=outcome,
            stake=stake,
            payout=payout,
            ledger_delta=delta,
            account=account,
            state=state,
            details=details or {},
        )

        logger.info(
            "%s round settled: %s, stake %d, payout %d",
            self.game_id,
            outcome.value,
            stake,
            payout,
        )
        self._emit(CasinoEventType.ROUND_SETTLED, {"result": result.to_dict()})
        return result
