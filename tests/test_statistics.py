"""Tests for the normal-distribution helpers."""

import numpy as np
import pytest
from scipy.stats import norm

from tolstack.models import Dimension, DimensionType
from tolstack.scenarios import default_stack
from tolstack.statistics import (
    SIGMA_EPSILON,
    bell_curve,
    interference_probability,
    normal_cdf,
    normal_tail,
    percent_contribution,
)


class TestNormalCdf:
    def test_center(self):
        assert normal_cdf(0.0) == pytest.approx(0.5, abs=1e-6)

    def test_matches_reference_cdf(self):
        for z in np.linspace(-6.0, 6.0, 49):
            assert abs(normal_cdf(float(z)) - norm.cdf(z)) < 2e-7

    def test_known_points(self):
        assert normal_cdf(-1.0) == pytest.approx(0.158655, abs=1e-6)
        assert normal_cdf(-3.0) == pytest.approx(0.0013499, abs=1e-6)
        assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-5)

    def test_symmetry(self):
        for z in (0.3, 1.0, 2.5, 4.0):
            assert normal_cdf(z) + normal_cdf(-z) == pytest.approx(1.0)

    def test_tail_is_even(self):
        assert normal_tail(1.7) == normal_tail(-1.7)

    def test_monotonic(self):
        values = [normal_cdf(float(z)) for z in np.linspace(-5, 5, 101)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_far_tails(self):
        assert normal_cdf(-50.0) == 0.0
        assert normal_cdf(50.0) == 1.0


class TestInterferenceProbability:
    def test_percent_scale(self):
        # mean one sigma above zero
        assert interference_probability(0.1, 0.1) == pytest.approx(15.8655, abs=1e-3)

    def test_zero_mean_is_half(self):
        assert interference_probability(0.0, 2.0) == pytest.approx(50.0, abs=1e-4)

    def test_zero_sigma_uses_epsilon(self):
        # z = -mean / SIGMA_EPSILON rather than a division by zero
        p = interference_probability(SIGMA_EPSILON, 0.0)
        assert p == pytest.approx(15.8655, abs=1e-3)

    def test_zero_sigma_zero_mean_is_half(self):
        assert interference_probability(0.0, 0.0) == pytest.approx(50.0, abs=1e-4)

    def test_zero_sigma_clear_gap(self):
        assert interference_probability(1.0, 0.0) == 0.0

    def test_zero_sigma_negative_gap(self):
        assert interference_probability(-1.0, 0.0) == 100.0


class TestBellCurve:
    def test_point_count_and_range(self):
        points = bell_curve(0.0, 1.0, steps=50)
        assert len(points) == 51
        assert points[0][0] == pytest.approx(-4.0)
        assert points[-1][0] == pytest.approx(4.0)

    def test_peak_at_mean(self):
        points = bell_curve(2.0, 0.5, steps=50)
        x, density = points[25]
        assert x == pytest.approx(2.0)
        assert density == 1.0

    def test_ends_are_small(self):
        points = bell_curve(0.0, 1.0)
        assert points[0][1] == pytest.approx(0.0003)
        assert points[-1][1] == pytest.approx(0.0003)

    def test_rounded_to_four_places(self):
        for x, d in bell_curve(0.123456, 0.0789):
            assert round(x, 4) == x
            assert round(d, 4) == d

    def test_ties_round_away_from_zero(self):
        # 0.03125 and its +/- 4 sigma neighbours are exact binary ties at 4 places
        points = bell_curve(0.03125, 1.0, steps=2)
        assert [x for x, _ in points] == [-3.9688, 0.0313, 4.0313]
        assert bell_curve(0.03125, 0.0, steps=1) == [(0.0313, 1.0), (0.0313, 1.0)]

    def test_zero_sigma(self):
        points = bell_curve(1.5, 0.0, steps=10)
        assert len(points) == 11
        assert all(x == 1.5 and d == 1.0 for x, d in points)


class TestPercentContribution:
    def test_default_stack(self):
        pct = percent_contribution(default_stack().dimensions)
        assert sum(p for _, p in pct) == pytest.approx(100.0)
        assert {name for name, _ in pct[:2]} == {"Housing Cavity Depth", "Battery Thickness"}
        assert pct[0][1] == pytest.approx(43.2432, abs=1e-3)
        assert pct[-1] == ("Standoff Height", pytest.approx(2.7027, abs=1e-3))

    def test_sorted_descending(self):
        pct = percent_contribution(default_stack().dimensions)
        values = [p for _, p in pct]
        assert values == sorted(values, reverse=True)

    def test_direction_does_not_matter(self):
        dims = [
            Dimension("A", 10.0, 0.3, 0.3, DimensionType.INCREASING),
            Dimension("B", 5.0, 0.3, 0.3, DimensionType.DECREASING),
        ]
        pct = percent_contribution(dims)
        assert pct[0][1] == pytest.approx(50.0)
        assert pct[1][1] == pytest.approx(50.0)

    def test_zero_tolerances(self):
        dims = [Dimension("A", 10.0, 0.0, 0.0), Dimension("B", 5.0, 0.0, 0.0)]
        assert percent_contribution(dims) == [("A", 0.0), ("B", 0.0)]

    def test_empty(self):
        assert percent_contribution([]) == []
