"""
Bucket layout for the drop game.

A ball bounces left or right once per row, so the landing bucket index is the
number of right bounces and follows a binomial distribution.
"""

import math
from typing import List, Sequence, Tuple

DEFAULT_ROWS = 12

DEFAULT_MULTIPLIERS: Tuple[float, ...] = (
    10, 3, 1.6, 1.4, 1.1, 1, 0.5, 1, 1.1, 1.4, 1.6, 3, 10,
)


def bucket_probabilities(rows: int) -> List[float]:
    """Probability of landing in each of the ``rows + 1`` buckets."""
    total = 2**rows
    return [math.comb(rows, k) / total for k in range(rows + 1)]


def validate_multipliers(rows: int, multipliers: Sequence[float]) -> None:
    """
    Check that a multiplier layout fits the board.

    Raises:
        ValueError: if the layout has the wrong length, is asymmetric, has a
            negative entry, or does not keep its lowest value in the centre
            and its highest at the edges.
    """
    if rows < 1:
        raise ValueError("Drop board needs at least one row")
    if len(multipliers) != rows + 1:
        raise ValueError(f"Expected {rows + 1} multipliers, got {len(multipliers)}")
    if any(m < 0 for m in multipliers):
        raise ValueError("Multipliers must be non-negative")
    if list(multipliers) != list(reversed(multipliers)):
        raise ValueError("Multipliers must be symmetric around the centre bucket")
    centre = multipliers[rows // 2]
    if centre != min(multipliers):
        raise ValueError("The centre bucket must carry the lowest multiplier")
    if multipliers[0] != max(multipliers):
        raise ValueError("The edge buckets must carry the highest multiplier")
