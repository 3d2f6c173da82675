"""
Bet selectors and the wheel payout matrix.

Every selector is evaluated independently against the single drawn pocket,
so one spin can satisfy several stakes at once (a stake on "red" and a stake
on "number-3" both pay when 3 comes up).

| Selector            | Wins on                      | Pays |
|---------------------|------------------------------|------|
| number-N / number-00| that pocket                  | 35:1 |
| red / black         | pocket colour                | 1:1  |
| even / odd          | non-zero parity              | 1:1  |
| low / high          | 1-18 / 19-36                 | 1:1  |
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from highroller.exceptions import InvalidBetError
from highroller.roulette.wheel import PocketColor, WheelOutcome


class BetKind(Enum):
    STRAIGHT = "straight"
    COLOR = "color"
    PARITY = "parity"
    RANGE = "range"


PAYOUT_RATIOS = {
    BetKind.STRAIGHT: 35,
    BetKind.COLOR: 1,
    BetKind.PARITY: 1,
    BetKind.RANGE: 1,
}

_OUTSIDE_BETS = {
    "red": BetKind.COLOR,
    "black": BetKind.COLOR,
    "even": BetKind.PARITY,
    "odd": BetKind.PARITY,
    "low": BetKind.RANGE,
    "high": BetKind.RANGE,
}


@dataclass(frozen=True)
class BetSelector:
    """
    Identifies what a stake is riding on.

    Attributes:
        kind: Bet category
        target: Pocket label for straight bets, otherwise the outside bet name
    """

    kind: BetKind
    target: str

    @property
    def key(self) -> str:
        if self.kind is BetKind.STRAIGHT:
            return f"number-{self.target}"
        return self.target

    @property
    def ratio(self) -> int:
        return PAYOUT_RATIOS[self.kind]

    def wins(self, outcome: WheelOutcome) -> bool:
        if self.kind is BetKind.STRAIGHT:
            return outcome.label == self.target
        # Zero pockets lose every outside bet
        if outcome.is_zero:
            return False
        if self.kind is BetKind.COLOR:
            return outcome.color is PocketColor(self.target)
        if self.kind is BetKind.PARITY:
            return (outcome.number % 2 == 0) == (self.target == "even")
        if self.target == "low":
            return 1 <= outcome.number <= 18
        return 19 <= outcome.number <= 36

    def payout(self, amount: int, outcome: WheelOutcome) -> int:
        """Chips returned for a stake: the stake plus winnings, or nothing."""
        if self.wins(outcome):
            return amount * (self.ratio + 1)
        return 0

    def __str__(self) -> str:
        return self.key


def parse_selector(selector: Union[str, int, BetSelector], wheel_positions: int = 37) -> BetSelector:
    """
    Parse a selector such as ``"number-17"``, ``17``, ``"red"`` or ``"high"``.

    Raises:
        InvalidBetError: if the selector is not recognised on this wheel
    """
    if isinstance(selector, BetSelector):
        if selector.kind is BetKind.STRAIGHT:
            return parse_selector(selector.key, wheel_positions)
        return selector
    if isinstance(selector, bool):
        raise InvalidBetError(f"Unknown bet selector {selector!r}")
    if isinstance(selector, int):
        selector = f"number-{selector}"
    if not isinstance(selector, str):
        raise InvalidBetError(f"Unknown bet selector {selector!r}")

    text = selector.strip().lower()
    if text in _OUTSIDE_BETS:
        return BetSelector(_OUTSIDE_BETS[text], text)

    if text.startswith("number-"):
        label = text[len("number-"):]
        if label == "00":
            if wheel_positions == 38:
                return BetSelector(BetKind.STRAIGHT, "00")
            raise InvalidBetError("00 is only available on a double-zero wheel")
        if label.isdigit() and 0 <= int(label) <= 36:
            return BetSelector(BetKind.STRAIGHT, str(int(label)))

    raise InvalidBetError(f"Unknown bet selector {selector!r}")
