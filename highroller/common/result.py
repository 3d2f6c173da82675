"""
The canonical output of every engine's resolution step.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from highroller.ledger.account import LedgerDelta, WagerAccount


class OutcomeKind(Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


def classify(stake: int, payout: int) -> OutcomeKind:
    """Classify a settled round by comparing what came back with what was staked."""
    if payout > stake:
        return OutcomeKind.WIN
    if payout == stake:
        return OutcomeKind.PUSH
    return OutcomeKind.LOSS


@dataclass(frozen=True)
class GameResult:
    """
    Immutable record of a settled round.

    Attributes:
        game: Identifier of the game that produced the result
        outcome: Win, loss or push
        stake: Total chips staked on the round
        payout: Chips returned to the player (stake included), never negative
        ledger_delta: The settlement delta applied to the ledger
        account: Account snapshot right after the delta was applied
        state: Final engine state for display
        details: Game specific extras (drawn pocket, reel symbols, path...)
    """

    game: str
    outcome: OutcomeKind
    stake: int
    payout: int
    ledger_delta: LedgerDelta
    account: Optional[WagerAccount] = None
    state: Any = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def net(self) -> int:
        """Chips gained (positive) or lost (negative) over the round."""
        return self.payout - self.stake

    def to_dict(self) -> Dict[str, Any]:
        state = self.state.to_dict() if hasattr(self.state, "to_dict") else self.state
        return {
            "game": self.game,
            "outcome": self.outcome.value,
            "stake": self.stake,
            "payout": self.payout,
            "net": self.net,
            "ledger_delta": self.ledger_delta.to_dict(),
            "account": self.account.to_dict() if self.account else None,
            "state": state,
            "details": dict(self.details),
        }


def scaled_payout(stake: int, multiplier: float) -> int:
    """``floor(stake * multiplier)``, robust to binary float error (1.4 * 5 is 7)."""
    return math.floor(round(stake * multiplier, 9))
