"""
Payout multiplier curves for the tile-reveal game.

Each curve maps (safe reveals, hazard count, board size) to a cash-out
multiplier. Any curve must grow strictly with every safe reveal and grow
faster when more hazards are on the board.

fair_odds
    ``edge_factor / P(k safe reveals)`` where
    ``P = prod((safe - i) / (cells - i) for i in range(k))``. The expected
    return of cashing out after any fixed number of reveals is exactly
    ``edge_factor``.

progressive
    The legacy curve: ``prod((safe - i + 1) / (safe - i + 0.9))`` for
    ``i`` in ``1..k``, never below 1.
"""

from typing import Callable, Dict


def survival_probability(revealed: int, hazards: int, cells: int) -> float:
    """Probability of revealing ``revealed`` safe cells in a row."""
    safe = cells - hazards
    probability = 1.0
    for i in range(revealed):
        probability *= (safe - i) / (cells - i)
    return probability


def fair_odds_multiplier(
    revealed: int, hazards: int, cells: int, edge_factor: float = 0.97
) -> float:
    if revealed == 0:
        return 1.0
    return edge_factor / survival_probability(revealed, hazards, cells)


def progressive_multiplier(
    revealed: int, hazards: int, cells: int, edge_factor: float = 0.97
) -> float:
    safe = cells - hazards
    multiplier = 1.0
    for i in range(1, revealed + 1):
        multiplier *= (safe - i + 1) / (safe - i + 1 - 0.1)
    return max(1.0, multiplier)


MultiplierCurve = Callable[[int, int, int, float], float]

CURVES: Dict[str, MultiplierCurve] = {
    "fair_odds": fair_odds_multiplier,
    "progressive": progressive_multiplier,
}


def get_curve(name: str) -> MultiplierCurve:
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError(
            f"Unknown multiplier curve {name!r}, expected one of {sorted(CURVES)}"
        ) from None
