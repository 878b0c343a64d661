"""Normal-distribution helpers shared by the stack-up engine and charts.

The CDF here is the Zelen & Severo (1964) rational approximation
(Abramowitz & Stegun 26.2.17), absolute error below 7.5e-8. Displayed
probabilities are compared against fixed strings downstream, so the
coefficients and evaluation order must stay exactly as written.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from tolstack.models import Dimension
from tolstack.units import round_half_up

# Zelen & Severo coefficients
_P = 0.2316419
_PDF_SCALE = 0.3989423   # 1 / sqrt(2 pi), truncated
_B1 = 0.3193815
_B2 = -0.3565638
_B3 = 1.781478
_B4 = -1.821256
_B5 = 1.330274

# Substituted for a zero standard deviation so z stays finite.
SIGMA_EPSILON = 0.001


def normal_tail(z: float) -> float:
    """One-sided upper tail P(Z > |z|) of the standard normal."""
    t = 1.0 / (1.0 + _P * abs(z))
    d = _PDF_SCALE * math.exp(-z * z / 2.0)
    return d * t * (_B1 + t * (_B2 + t * (_B3 + t * (_B4 + t * _B5))))


def normal_cdf(z: float) -> float:
    """Approximate standard normal CDF, P(Z < z)."""
    p = normal_tail(z)
    if z > 0:
        p = 1.0 - p
    return p


def interference_probability(mean: float, sigma: float) -> float:
    """Percent of a normal gap distribution falling below zero.

    Args:
        mean: Mean gap.
        sigma: Standard deviation of the gap. Exactly zero is replaced by
            SIGMA_EPSILON.

    Returns:
        P(gap < 0) as a percentage.
    """
    if sigma == 0:
        sigma = SIGMA_EPSILON
    z = (0.0 - mean) / sigma
    return normal_cdf(z) * 100.0


def bell_curve(
    mean: float,
    sigma: float,
    steps: int = 50,
) -> list[tuple[float, float]]:
    """Sample an unnormalized Gaussian over mean +/- 4 sigma for plotting.

    Returns ``steps + 1`` (x, density) pairs rounded half-up to 4 decimals. The
    density is exp(-0.5 z^2), peaking at 1.0, so the curve shape does not
    depend on sigma. A zero sigma collapses the curve onto the mean.
    """
    x = np.linspace(mean - 4.0 * sigma, mean + 4.0 * sigma, steps + 1)
    if sigma == 0:
        density = np.ones_like(x)
    else:
        density = np.exp(-0.5 * ((x - mean) / sigma) ** 2)
    return [(round_half_up(float(xi), 4), round_half_up(float(di), 4))
            for xi, di in zip(x, density)]


def percent_contribution(dimensions: Sequence[Dimension]) -> list[tuple[str, float]]:
    """Share of the RSS variance owed to each dimension.

    contribution_i = t_i^2 / sum(t^2) with t the symmetrized tolerance.

    Returns:
        List of (name, percent) sorted by contribution descending.
    """
    variances = [(d.name, d.half_tolerance ** 2) for d in dimensions]
    total_var = sum(v for _, v in variances)
    if total_var < 1e-30:
        return [(name, 0.0) for name, _ in variances]

    pcts = [(name, (v / total_var) * 100.0) for name, v in variances]
    return sorted(pcts, key=lambda x: x[1], reverse=True)
