"""
Immutable account models for the player ledger.

A `WagerAccount` is a snapshot; it is never modified. Every change is
expressed as a `LedgerDelta` and applied by the `Ledger`, which produces the
next snapshot.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class LedgerDelta:
    """
    A change to apply to an account.

    Attributes:
        balance_change: Chips added (positive) or removed (negative)
        won_increment: Number of games won to add
        played_increment: Number of games played to add
        experience_change: Experience points to add
    """

    balance_change: int = 0
    won_increment: int = 0
    played_increment: int = 0
    experience_change: int = 0

    @classmethod
    def charge(cls, amount: int) -> "LedgerDelta":
        """A delta that removes a stake from the balance."""
        return cls(balance_change=-amount)

    def combine(self, other: "LedgerDelta") -> "LedgerDelta":
        return LedgerDelta(
            balance_change=self.balance_change + other.balance_change,
            won_increment=self.won_increment + other.won_increment,
            played_increment=self.played_increment + other.played_increment,
            experience_change=self.experience_change + other.experience_change,
        )

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class WagerAccount:
    """
    Immutable snapshot of the player's account.

    Attributes:
        balance: Current chip balance, never negative
        level: Player level derived from experience, at least 1
        experience: Accumulated experience points
        games_played: Number of settled rounds
        games_won: Number of settled rounds classified as wins
    """

    balance: int = 1000
    level: int = 1
    experience: int = 0
    games_played: int = 0
    games_won: int = 0

    @property
    def win_rate(self) -> float:
        """Fraction of played games that were won."""
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["win_rate"] = self.win_rate
        return result


def level_for_experience(experience: int, experience_per_level: int) -> int:
    """Player level reached with the given experience."""
    return 1 + experience // experience_per_level
