"""Linear tolerance stack-up engine: worst case, RSS, and interference odds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from tolstack.models import Dimension, DimensionType
from tolstack.statistics import interference_probability

# Each tolerance band is taken as +/- 3 standard deviations.
PROCESS_SIGMA = 3.0


@dataclass
class StackupResult:
    """Results from a linear stack-up.

    Attributes:
        nominal_gap: Gap with every dimension at nominal.
        worst_case_min: Smallest possible gap (all parts at the
            clearance-reducing limit).
        worst_case_max: Largest possible gap.
        rss_min: Nominal gap minus the RSS tolerance.
        rss_max: Nominal gap plus the RSS tolerance.
        rss_tolerance: Root-sum-square of the symmetrized tolerances.
        contributor_count: Number of dimensions in the chain.
        interference_probability_percent: P(gap < 0) under a normal model
            with sigma = rss_tolerance / 3.
    """
    nominal_gap: float
    worst_case_min: float
    worst_case_max: float
    rss_min: float
    rss_max: float
    rss_tolerance: float
    contributor_count: int
    interference_probability_percent: float

    def summary(self) -> str:
        lines = [
            "=== Linear Stack-up ===",
            f"  Contributors:     {self.contributor_count}",
            f"  Nominal gap:      {self.nominal_gap:+.4f}",
            f"  Worst case:       [{self.worst_case_min:+.4f}, {self.worst_case_max:+.4f}]",
            f"  RSS (3 sigma):    [{self.rss_min:+.4f}, {self.rss_max:+.4f}]"
            f"  (+/-{self.rss_tolerance:.4f})",
            f"  Interference:     {self.interference_probability_percent:.2f}%",
            f"  Status:           {status_message(self)}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "nominal_gap": self.nominal_gap,
            "worst_case_min": self.worst_case_min,
            "worst_case_max": self.worst_case_max,
            "rss_min": self.rss_min,
            "rss_max": self.rss_max,
            "rss_tolerance": self.rss_tolerance,
            "contributor_count": self.contributor_count,
            "interference_probability_percent": self.interference_probability_percent,
        }


class StackStatus(Enum):
    """Traffic-light verdict on a stack-up."""
    SAFE = "safe"
    RISK = "risk"
    FAIL = "fail"


def compute_stackup(dimensions: Sequence[Dimension]) -> StackupResult:
    """Run the full stack-up over an ordered chain of dimensions.

    Increasing dimensions open the gap and decreasing ones close it.
    Worst case pairs every increasing part at one limit with every
    decreasing part at the opposite limit. RSS combines the symmetrized
    tolerances regardless of direction. Any numeric input is accepted.
    """
    inc_nom = inc_max = inc_min = 0.0
    dec_nom = dec_max = dec_min = 0.0
    sum_sq = 0.0

    for d in dimensions:
        if d.direction is DimensionType.INCREASING:
            inc_nom += d.nominal
            inc_max += d.nominal + d.tolerance_plus
            inc_min += d.nominal - d.tolerance_minus
        elif d.direction is DimensionType.DECREASING:
            dec_nom += d.nominal
            dec_max += d.nominal + d.tolerance_plus
            dec_min += d.nominal - d.tolerance_minus
        else:
            raise ValueError(f"Unknown dimension direction: {d.direction!r}")

        t = (d.tolerance_plus + d.tolerance_minus) / 2
        sum_sq += t * t

    nominal_gap = inc_nom - dec_nom
    rss_tol = float(np.sqrt(sum_sq))

    return StackupResult(
        nominal_gap=nominal_gap,
        worst_case_min=inc_min - dec_max,
        worst_case_max=inc_max - dec_min,
        rss_min=nominal_gap - rss_tol,
        rss_max=nominal_gap + rss_tol,
        rss_tolerance=rss_tol,
        contributor_count=len(dimensions),
        interference_probability_percent=interference_probability(
            nominal_gap, rss_tol / PROCESS_SIGMA),
    )


def stackup_status(result: StackupResult) -> StackStatus:
    """Classify a result: worst-case interference fails, RSS interference is a risk."""
    if result.worst_case_min < 0:
        return StackStatus.FAIL
    if result.rss_min < 0:
        return StackStatus.RISK
    return StackStatus.SAFE


def status_message(result: StackupResult) -> str:
    """Human-readable verdict for a stack-up result."""
    status = stackup_status(result)
    if status is StackStatus.FAIL:
        return "Interference Detected (Worst Case)"
    if status is StackStatus.RISK:
        return (f"Statistical Interference Risk "
                f"({result.interference_probability_percent:.1f}%)")
    return "Assembly Safe (Clearance Guaranteed)"


# ---------------------------------------------------------------------------
# Monte Carlo cross-check
# ---------------------------------------------------------------------------

@dataclass
class MonteCarloResult:
    """Simulated gap distribution.

    Attributes:
        samples: Gap value of every simulated assembly.
        mean: Sample mean.
        std: Sample standard deviation.
        interference_percent: Percentage of samples with gap < 0.
    """
    samples: np.ndarray
    mean: float
    std: float
    interference_percent: float

    def summary(self) -> str:
        lines = [
            "=== Monte Carlo ===",
            f"  Samples:          {len(self.samples)}",
            f"  Mean gap:         {self.mean:+.4f}",
            f"  Std dev:          {self.std:.4f}",
            f"  Interference:     {self.interference_percent:.2f}%",
        ]
        return "\n".join(lines)


def monte_carlo_stackup(
    dimensions: Sequence[Dimension],
    n_samples: int = 100_000,
    seed: Optional[int] = None,
) -> MonteCarloResult:
    """Simulate the stack by sampling every dimension from a normal distribution.

    Each dimension is centred on the middle of its tolerance band with a
    standard deviation of a third of its symmetrized tolerance.
    """
    rng = np.random.default_rng(seed)
    gap_samples = np.zeros(n_samples)

    for d in dimensions:
        if d.direction is DimensionType.INCREASING:
            sign = 1.0
        elif d.direction is DimensionType.DECREASING:
            sign = -1.0
        else:
            raise ValueError(f"Unknown dimension direction: {d.direction!r}")

        center = d.nominal + (d.tolerance_plus - d.tolerance_minus) / 2.0
        std = abs(d.half_tolerance) / PROCESS_SIGMA
        gap_samples += sign * rng.normal(loc=center, scale=std, size=n_samples)

    mean = float(np.mean(gap_samples))
    std = float(np.std(gap_samples, ddof=1)) if n_samples > 1 else 0.0
    interference = float(np.mean(gap_samples < 0)) * 100.0 if n_samples else 0.0

    return MonteCarloResult(
        samples=gap_samples,
        mean=mean,
        std=std,
        interference_percent=interference,
    )
