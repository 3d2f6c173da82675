"""
Goodness-of-fit checks for entropy sources and outcome distributions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import scipy.stats as stats

from highroller.common.rng import RandomSource
from highroller.plinko.buckets import bucket_probabilities

logger = logging.getLogger("highroller.analysis")


@dataclass
class FitReport:
    """
    Result of a chi-square goodness-of-fit test.

    Attributes:
        samples: Number of observations
        statistic: Chi-square statistic
        p_value: Probability of a deviation at least this large by chance
        alpha: Significance level the test was judged at
        observed: Observed count per category
    """

    samples: int
    statistic: float
    p_value: float
    alpha: float
    observed: Sequence[int]

    @property
    def passed(self) -> bool:
        return self.p_value >= self.alpha

    def to_dict(self) -> Dict[str, Any]:
        return {
            "samples": self.samples,
            "statistic": self.statistic,
            "p_value": self.p_value,
            "alpha": self.alpha,
            "passed": self.passed,
            "observed": list(self.observed),
        }


def _fit(observed: np.ndarray, expected: Optional[np.ndarray], alpha: float) -> FitReport:
    statistic, p_value = stats.chisquare(observed, f_exp=expected)
    report = FitReport(
        samples=int(observed.sum()),
        statistic=float(statistic),
        p_value=float(p_value),
        alpha=alpha,
        observed=[int(count) for count in observed],
    )
    if not report.passed:
        logger.warning(
            "Distribution check failed: chi2=%.2f p=%.4f over %d samples",
            report.statistic,
            report.p_value,
            report.samples,
        )
    return report


def wheel_uniformity(
    rng: RandomSource, spins: int, positions: int = 37, alpha: float = 0.01
) -> FitReport:
    """
    Test that an entropy source lands on every wheel pocket equally often.

    Args:
        rng: The entropy source under test
        spins: Number of draws to take
        positions: Pockets on the wheel
        alpha: Significance level
    """
    if spins < positions:
        raise ValueError("Need at least one spin per pocket")
    draws = [rng.randbelow(positions) for _ in range(spins)]
    observed = np.bincount(draws, minlength=positions)
    return _fit(observed, None, alpha)


def bucket_fit(
    rng: RandomSource, drops: int, rows: int = 12, alpha: float = 0.01
) -> FitReport:
    """
    Test that coin-flip drops land in buckets with binomial frequencies.
    """
    if drops < 1:
        raise ValueError("Need at least one drop")
    landings = [sum(rng.coin() for _ in range(rows)) for _ in range(drops)]
    observed = np.bincount(landings, minlength=rows + 1)
    expected = np.array(bucket_probabilities(rows)) * drops
    return _fit(observed, expected, alpha)
