"""
Player economy shared by every game.
"""

from highroller.ledger.account import LedgerDelta, WagerAccount, level_for_experience
from highroller.ledger.ledger import Ledger

__all__ = ["Ledger", "LedgerDelta", "WagerAccount", "level_for_experience"]
