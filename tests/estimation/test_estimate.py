"""
Tests for INAR parameter estimation.

Moment estimates are checked against hand-computed values and against
the truth on long simulated paths; maximum-likelihood estimates against
the truth and the likelihood they maximise.
"""

import numpy as np
import pytest

from pyinar.core.exceptions import ValidationError
from pyinar.estimation import estimate
from pyinar.estimation._moments import autocovariance, yule_walker
from pyinar.likelihood import GeometricInnovation, nll_family, nll_semiparametric
from pyinar.simulation import simulate


@pytest.fixture(scope="module")
def poisson_inar1():
    pmf = np.exp(-1.0) / np.cumprod(np.r_[1.0, np.arange(1, 41)])  # Poi(1) on 0..40
    return simulate(5000, 1, [0.5], pmf, seed=101)


@pytest.fixture(scope="module")
def geometric_inar2():
    return simulate(5000, 2, [0.2, 0.3], GeometricInnovation(0.5).truncated_pmf(60), seed=102)


# ═══════════════════════════════════════════════════════════════════════
# Moments
# ═══════════════════════════════════════════════════════════════════════


class TestMomentEstimation:

    def test_autocovariance_matches_acf_convention(self):
        x = np.array([1.0, 3.0, 2.0, 4.0])
        c = x - x.mean()
        gamma = autocovariance(x, 2)
        assert gamma[0] == pytest.approx(np.sum(c * c) / 4)
        assert gamma[1] == pytest.approx(np.sum(c[:-1] * c[1:]) / 4)
        assert gamma[2] == pytest.approx(np.sum(c[:-2] * c[2:]) / 4)

    def test_yule_walker_order_two(self):
        gamma = np.array([1.0, 0.5, 0.4])
        alpha = yule_walker(gamma, 2)
        assert alpha[0] == pytest.approx(0.5 * 0.6 / 0.75)
        assert alpha[1] == pytest.approx((0.4 - 0.25) / 0.75)

    def test_negative_correlation_clipped(self):
        theta = estimate([0, 1] * 10, 1, "moment", "poisson")
        np.testing.assert_allclose(theta, [0.0, 0.5])

    def test_constant_sequence(self):
        np.testing.assert_allclose(estimate([2, 2, 2, 2], 1, "moment", "poisson"), [0.0, 2.0])

    def test_poisson_recovers_truth(self, poisson_inar1):
        alpha, lam = estimate(poisson_inar1, 1, "moment", "poisson")
        assert alpha == pytest.approx(0.5, abs=0.05)
        assert lam == pytest.approx(1.0, abs=0.15)

    def test_geometric_order_two(self, geometric_inar2):
        theta = estimate(geometric_inar2, 2, "moment", "geometric")
        assert theta.shape == (3,)
        assert theta[0] == pytest.approx(0.2, abs=0.07)
        assert theta[1] == pytest.approx(0.3, abs=0.07)
        assert theta[2] == pytest.approx(0.5, abs=0.07)

    def test_negative_binomial_layout(self, geometric_inar2):
        theta = estimate(geometric_inar2, 2, "moment", "negative-binomial")
        assert theta.shape == (4,)
        r, prob = theta[2:]
        assert r > 0
        assert 0 < prob < 1

    def test_default_family_is_poisson(self, poisson_inar1):
        np.testing.assert_array_equal(
            estimate(poisson_inar1, 1, "moment"),
            estimate(poisson_inar1, 1, "moment", "poisson"),
        )


# ═══════════════════════════════════════════════════════════════════════
# Maximum likelihood
# ═══════════════════════════════════════════════════════════════════════


class TestMaximumLikelihood:

    def test_poisson_recovers_truth(self, poisson_inar1):
        x = poisson_inar1[:1000]
        alpha, lam = estimate(x, 1, "maximum-likelihood", "poisson")
        assert alpha == pytest.approx(0.5, abs=0.08)
        assert lam == pytest.approx(1.0, abs=0.2)

    def test_improves_on_moments(self, geometric_inar1):
        mom = estimate(geometric_inar1, 1, "moment", "geometric")
        ml = estimate(geometric_inar1, 1, "maximum-likelihood", "geometric")
        assert nll_family(ml, geometric_inar1, 1, "geometric") <= (
            nll_family(mom, geometric_inar1, 1, "geometric") + 1e-8
        )

    def test_negative_binomial_size_bounded(self, geometric_inar1):
        theta = estimate(geometric_inar1, 1, "maximum-likelihood", "negative-binomial")
        assert theta.shape == (3,)
        assert theta[1] >= 1.0
        assert 0 < theta[2] < 1


class TestSemiparametric:

    def test_layout_and_pmf(self, empirical_inar1):
        theta = estimate(empirical_inar1, 1)
        M = int(empirical_inar1.max())
        assert theta.shape == (1 + M + 1,)
        pmf = theta[1:]
        assert np.all(pmf >= 0)
        assert pmf.sum() == pytest.approx(1.0)
        assert theta[0] == pytest.approx(0.5, abs=0.15)

    def test_beats_start_value(self, empirical_inar1):
        theta = estimate(empirical_inar1, 1)
        fitted = nll_semiparametric(np.r_[theta[:1], theta[2:]], empirical_inar1, 1)
        M = int(empirical_inar1.max())
        uniform = np.r_[0.5, np.full(M, 1.0 / (M + 1))]
        assert fitted < nll_semiparametric(uniform, empirical_inar1, 1)

    def test_all_zero_sequence(self):
        theta = estimate([0, 0, 0, 0, 0], 1)
        assert theta.shape == (2,)
        assert theta[1] == 1.0


class TestEstimateValidation:

    @pytest.mark.parametrize("kwargs, match", [
        ({"x": [1, 2, 3], "p": 3}, "p"),
        ({"x": [1, -2, 3], "p": 1}, "non-negative"),
        ({"x": [1.5, 2, 3], "p": 1}, "integers"),
        ({"x": [1, 2], "p": 2}, "at least 3"),
        ({"x": [1, 2, 3], "p": 1, "type": "mom"}, "type"),
        ({"x": [1, 2, 3], "p": 1, "type": "moment", "family": "poi"}, "family"),
    ])
    def test_rejects(self, kwargs, match):
        with pytest.raises(ValidationError, match=match):
            estimate(**kwargs)
