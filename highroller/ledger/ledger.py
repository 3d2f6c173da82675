"""
The player ledger.

All engines mutate the account exclusively through `Ledger.apply`, which
validates the would-be snapshot and swaps it in under a lock. Validation and
application are a single indivisible step, so two overlapping stakes can never
both pass the balance check against the same stale balance.
"""

import logging
import threading
from dataclasses import replace
from typing import Optional

from highroller.events import CasinoEventType, EventBus, EventEmitter
from highroller.exceptions import InsufficientFundsError, LedgerIntegrityError
from highroller.ledger.account import LedgerDelta, WagerAccount, level_for_experience

logger = logging.getLogger("highroller.ledger")


class Ledger:
    """
    Owner of the player's `WagerAccount`.
    """

    def __init__(
        self,
        starting_balance: int = 1000,
        experience_per_level: int = 1000,
        account: Optional[WagerAccount] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        """
        Args:
            starting_balance: Chips granted to a new account
            experience_per_level: Experience needed for each level
            account: Existing snapshot to resume from, overrides starting_balance
            event_bus: Emitter for LEDGER_UPDATED events (defaults to the EventBus)
        """
        if starting_balance < 0:
            raise ValueError("Starting balance must be non-negative")
        if experience_per_level < 1:
            raise ValueError("Experience per level must be at least 1")

        self.experience_per_level = experience_per_level
        self.event_bus = event_bus or EventBus.get_instance()
        self._lock = threading.RLock()
        self._account = account or WagerAccount(balance=starting_balance)

    @property
    def snapshot(self) -> WagerAccount:
        """The current account snapshot."""
        return self._account

    @property
    def balance(self) -> int:
        return self._account.balance

    def can_afford(self, amount: int) -> bool:
        return amount <= self._account.balance

    def _next_account(self, delta: LedgerDelta) -> WagerAccount:
        account = self._account
        balance = account.balance + delta.balance_change
        if balance < 0:
            raise InsufficientFundsError(-delta.balance_change, account.balance)

        experience = account.experience + delta.experience_change
        games_played = account.games_played + delta.played_increment
        games_won = account.games_won + delta.won_increment
        if experience < 0 or games_played < 0 or games_won < 0:
            raise LedgerIntegrityError(f"Delta {delta} drives a counter negative")
        if games_won > games_played:
            raise LedgerIntegrityError(
                f"Delta {delta} records more wins ({games_won}) than games ({games_played})"
            )

        return replace(
            account,
            balance=balance,
            experience=experience,
            games_played=games_played,
            games_won=games_won,
            level=level_for_experience(experience, self.experience_per_level),
        )

    def apply(self, delta: LedgerDelta) -> WagerAccount:
        """
        Atomically apply a delta and return the new snapshot.

        Raises:
            InsufficientFundsError: if the delta would take the balance below zero
            LedgerIntegrityError: if the delta breaks a counter invariant
        """
        with self._lock:
            previous = self._account
            self._account = self._next_account(delta)
            account = self._account

        if account.level > previous.level:
            logger.info("Level up: %d -> %d", previous.level, account.level)
        logger.debug("Applied %s, balance %d -> %d", delta, previous.balance, account.balance)

        self.event_bus.emit(
            CasinoEventType.LEDGER_UPDATED,
            {"delta": delta.to_dict(), "account": account.to_dict()},
        )
        return account

    def charge(self, amount: int) -> WagerAccount:
        """
        Validate and remove a stake from the balance in one step.

        Raises:
            ValueError: if the amount is not a positive integer
            InsufficientFundsError: if the stake exceeds the balance
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError(f"Stake must be a positive integer, got {amount!r}")
        return self.apply(LedgerDelta.charge(amount))
