"""Reel symbols and the default paytable."""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple


@dataclass(frozen=True)
class SlotSymbol:
    """
    A reel symbol.

    Attributes:
        name: Identifier used in results and configuration
        glyph: Display glyph for the presentation layer
        multiplier: Stake multiplier for three of a kind (half for a pair)
        weight: Relative draw weight on every reel
    """

    name: str
    glyph: str
    multiplier: int
    weight: int

    def __post_init__(self):
        if self.multiplier <= 0:
            raise ValueError(f"Symbol {self.name} needs a positive multiplier")
        if self.weight <= 0:
            raise ValueError(f"Symbol {self.name} needs a positive weight")


# Rarer symbols pay more
DEFAULT_SYMBOLS: Tuple[SlotSymbol, ...] = (
    SlotSymbol("apple", "🍎", 2, 30),
    SlotSymbol("banana", "🍌", 3, 25),
    SlotSymbol("grape", "🍇", 4, 20),
    SlotSymbol("orange", "🍊", 5, 16),
    SlotSymbol("cherry", "🍒", 8, 12),
    SlotSymbol("star", "⭐", 15, 8),
    SlotSymbol("diamond", "💎", 25, 5),
    SlotSymbol("crown", "👑", 50, 2),
)

DEFAULT_JACKPOT_SYMBOL = "crown"


def symbols_by_name(symbols: Sequence[SlotSymbol]) -> Dict[str, SlotSymbol]:
    table = {symbol.name: symbol for symbol in symbols}
    if len(table) != len(symbols):
        raise ValueError("Symbol names must be unique")
    return table
