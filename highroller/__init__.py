"""
highroller: wager-resolution engines for five casino games sharing one ledger.

>>> from highroller import Casino
>>> casino = Casino()
>>> casino.account.balance
1000
"""

from highroller.casino import Casino
from highroller.common.result import GameResult, OutcomeKind
from highroller.common.rng import FixedSequenceSource, SeededRandomSource, SystemRandomSource
from highroller.config import CasinoConfig, load_config
from highroller.events import CasinoEventType, EventBus
from highroller.exceptions import (
    CasinoError,
    InsufficientFundsError,
    InvalidActionError,
    InvalidBetError,
    InvalidCellError,
    InvalidHazardCountError,
    NoStakesPlacedError,
    NothingToCashOutError,
    StakeLimitError,
)
from highroller.ledger import Ledger, LedgerDelta, WagerAccount

__version__ = "0.1.0"

__all__ = [
    "Casino",
    "CasinoConfig",
    "CasinoError",
    "CasinoEventType",
    "EventBus",
    "FixedSequenceSource",
    "GameResult",
    "InsufficientFundsError",
    "InvalidActionError",
    "InvalidBetError",
    "InvalidCellError",
    "InvalidHazardCountError",
    "Ledger",
    "LedgerDelta",
    "NoStakesPlacedError",
    "NothingToCashOutError",
    "OutcomeKind",
    "SeededRandomSource",
    "StakeLimitError",
    "SystemRandomSource",
    "WagerAccount",
    "load_config",
]
