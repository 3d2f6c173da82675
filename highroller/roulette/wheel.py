"""
Wheel layout for the wheel game.

A single-zero wheel has 37 pockets (0-36); a double-zero wheel adds a 38th
pocket labelled "00". Zero pockets are green, every other number is red or
black following the standard layout.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

RED_NUMBERS = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)


class PocketColor(Enum):
    RED = "red"
    BLACK = "black"
    GREEN = "green"


@dataclass(frozen=True)
class WheelOutcome:
    """
    A pocket on the wheel.

    Attributes:
        label: Printed label ("0".."36" or "00")
        number: Numeric value 0-36 ("00" counts as 0)
        color: Pocket colour
    """

    label: str
    number: int
    color: PocketColor

    @property
    def is_zero(self) -> bool:
        return self.color is PocketColor.GREEN

    def to_dict(self):
        return {"label": self.label, "number": self.number, "color": self.color.value}


def pocket_color(number: int) -> PocketColor:
    if number == 0:
        return PocketColor.GREEN
    return PocketColor.RED if number in RED_NUMBERS else PocketColor.BLACK


def build_wheel(positions: int = 37) -> Tuple[WheelOutcome, ...]:
    """
    Build the wheel; pocket ``i`` holds number ``i`` and "00" (if any) is last.
    """
    if positions not in (37, 38):
        raise ValueError("Wheel must have 37 or 38 positions")
    pockets = [WheelOutcome(str(n), n, pocket_color(n)) for n in range(37)]
    if positions == 38:
        pockets.append(WheelOutcome("00", 0, PocketColor.GREEN))
    return tuple(pockets)
