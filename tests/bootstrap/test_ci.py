"""
Tests for bootstrap interval construction: rank rule, trimming,
percentile and Hall intervals.
"""

import numpy as np
import pytest

from pyinar.bootstrap._ci import (
    hall_ci,
    order_statistic_ranks,
    percentile_ci,
    trim_zero_columns,
)


class TestOrderStatisticRanks:

    @pytest.mark.parametrize("B, level, expected", [
        (200, 0.05, (5, 195)),     # B * level = 10, even
        (100, 0.1, (5, 95)),       # B * level = 10, even
        (20, 0.1, (1, 19)),        # B * level = 2, even
        (99, 0.1, (5, 95)),        # 9.9: floor(100 * 0.05) = 5
        (50, 0.05, (1, 50)),       # 2.5: floor(51 * 0.025) = 1
        (30, 0.1, (1, 30)),        # 3 (odd, float noise): floor(31 * 0.05) = 1
        (1, 0.05, (1, 1)),         # K never drops below 1
    ])
    def test_ranks(self, B, level, expected):
        assert order_statistic_ranks(B, level) == expected

    @pytest.mark.parametrize("B", [1, 7, 50, 199, 200, 1000])
    @pytest.mark.parametrize("level", [0.01, 0.05, 0.1, 0.5])
    def test_ranks_in_range_and_ordered(self, B, level):
        lo, hi = order_statistic_ranks(B, level)
        assert 1 <= lo <= hi <= B


class TestTrimZeroColumns:

    def test_drops_only_all_zero_columns(self):
        matrix = np.array([
            [0.5, 0.0, 0.2, 0.0],
            [0.4, 0.0, 0.0, 0.0],
            [0.6, 0.0, 0.1, 0.0],
        ])
        trimmed, kept = trim_zero_columns(matrix)
        np.testing.assert_array_equal(kept, [0, 2])
        np.testing.assert_array_equal(trimmed, matrix[:, [0, 2]])

    def test_nan_column_is_kept(self):
        matrix = np.array([[np.nan, 0.0], [0.0, 0.0]])
        _, kept = trim_zero_columns(matrix)
        np.testing.assert_array_equal(kept, [0])


class TestIntervals:

    def test_percentile_picks_order_statistics(self):
        values = np.arange(1, 201, dtype=float)[::-1].reshape(-1, 1)
        ci = percentile_ci(values, 0.05)
        np.testing.assert_array_equal(ci, [[5.0], [195.0]])

    def test_shape(self, rng):
        stars = rng.normal(size=(40, 3))
        assert percentile_ci(stars, 0.1).shape == (2, 3)
        assert hall_ci(stars, np.zeros(3), 0.1).shape == (2, 3)

    def test_hall_reflects_percentile(self, rng):
        stars = rng.normal(loc=[0.5, 2.0], scale=[0.1, 0.4], size=(200, 2))
        theta_hat = np.array([0.45, 2.2])
        perc = percentile_ci(stars, 0.05)
        hall = hall_ci(stars, theta_hat, 0.05)
        np.testing.assert_allclose(hall, 2 * theta_hat - perc[::-1])

    def test_lower_not_above_upper(self, rng):
        stars = rng.gamma(2.0, size=(99, 4))
        theta_hat = stars.mean(axis=0)
        for ci in (percentile_ci(stars, 0.1), hall_ci(stars, theta_hat, 0.1)):
            assert np.all(ci[0] <= ci[1])
