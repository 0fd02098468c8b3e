"""
Tests for the INAR bootstrap.

End-to-end runs use the real estimator and simulator on short series;
the loop mechanics (trimming, widening, invalid replicates, progress,
cancellation) use small fake collaborators with known output.
"""

import threading

import numpy as np
import pytest

from pyinar.bootstrap import BootstrapDesign, BootstrapSolution, bootstrap
from pyinar.core.exceptions import BootstrapCancelled, NumericalError


OBSERVED = np.array([3, 1, 2, 0, 4, 2, 1, 1, 3, 2, 0, 1])


class CountingSimulator:
    """Replicate b (1-based, in call order) is the constant sequence b."""

    def __init__(self, value=None):
        self.calls = 0
        self.value = value

    def __call__(self, n, p, alpha, pmf, seed=None):
        self.calls += 1
        return np.full(n, self.calls if self.value is None else self.value)


def fixed_estimator(theta):
    def estimator(x, p, type=None, family=None):
        return np.asarray(theta, dtype=float)
    return estimator


# ═══════════════════════════════════════════════════════════════════════
# End to end
# ═══════════════════════════════════════════════════════════════════════


class TestParametricBootstrap:

    def test_geometric_moment(self, geometric_inar1):
        sol = bootstrap(geometric_inar1, 1, 50, "parametric", "moment", "geometric", seed=1)
        assert isinstance(sol, BootstrapSolution)
        assert sol.x_star.shape == (200, 50)
        assert sol.parameters_star.shape == (50, 2)
        assert sol.bs_ci_percentile.shape == (2, 2)
        assert sol.bs_ci_hall.shape == (2, 2)
        assert np.all(sol.bs_ci_percentile[0] <= sol.bs_ci_percentile[1])
        assert np.all(sol.bs_ci_hall[0] <= sol.bs_ci_hall[1])
        assert np.all(sol.x_star >= 0)
        np.testing.assert_array_equal(sol.x_star, np.round(sol.x_star))

    def test_intervals_cover_truth(self, geometric_inar1):
        sol = bootstrap(geometric_inar1, 1, 100, "parametric", "moment", "geometric",
                        level=0.01, seed=3)
        lower, upper = sol.bs_ci_percentile
        assert lower[0] - 0.1 <= 0.5 <= upper[0] + 0.1
        assert lower[1] - 0.1 <= 0.5 <= upper[1] + 0.1

    def test_negative_binomial_order_two_columns(self, geometric_inar1):
        sol = bootstrap(geometric_inar1, 2, 20, "parametric", "moment",
                        "negative-binomial", M=60, seed=4)
        assert sol.parameters_star.shape[1] <= 4
        assert sol.info["n_params"] == 4
        assert sol.info["family"] == "negative-binomial"

    def test_info_and_timing(self, geometric_inar1):
        sol = bootstrap(geometric_inar1, 1, 10, "parametric", seed=5)
        assert sol.backend_name == "cpu_replicates"
        assert sol.info["setting"] == "parametric"
        assert sol.info["type"] == "moment"
        assert sol.info["family"] == "poisson"
        assert sol.info["n_invalid"] == 0
        assert {"baseline_estimate", "replicates", "confidence_intervals"} <= set(sol.timing)
        assert sol.elements == ("x_star", "parameters_star", "bs_ci_percentile", "bs_ci_hall")


class TestSemiparametricBootstrap:

    def test_empirical_pmf_columns(self, empirical_inar1):
        sol = bootstrap(empirical_inar1, 1, 5, "semiparametric", seed=6)
        assert sol.info["n_params"] is None
        assert sol.info["type"] is None
        stars = sol.parameters_star
        assert stars.shape[0] == 5
        assert np.all(np.isfinite(stars))
        # alpha plus at least pmf_0 and pmf_1
        assert stars.shape[1] >= 3
        assert np.all(stars >= -1e-12)


class TestReproducibility:

    def test_seed(self, geometric_inar1):
        a = bootstrap(geometric_inar1, 1, 20, "parametric", "moment", "geometric", seed=9)
        b = bootstrap(geometric_inar1, 1, 20, "parametric", "moment", "geometric", seed=9)
        np.testing.assert_array_equal(a.x_star, b.x_star)
        np.testing.assert_array_equal(a.parameters_star, b.parameters_star)

    def test_threads_match_sequential(self, geometric_inar1):
        seq = bootstrap(geometric_inar1, 1, 30, "parametric", "moment", "geometric", seed=10)
        par = bootstrap(geometric_inar1, 1, 30, "parametric", "moment", "geometric",
                        seed=10, n_jobs=4)
        np.testing.assert_array_equal(seq.x_star, par.x_star)
        np.testing.assert_array_equal(seq.parameters_star, par.parameters_star)
        np.testing.assert_array_equal(seq.bs_ci_hall, par.bs_ci_hall)

    def test_design_input(self, geometric_inar1):
        design = BootstrapDesign.for_bootstrap(geometric_inar1, 1, 10, "parametric", seed=11)
        direct = bootstrap(geometric_inar1, 1, 10, "parametric", seed=11)
        np.testing.assert_array_equal(bootstrap(design).parameters_star, direct.parameters_star)


# ═══════════════════════════════════════════════════════════════════════
# Replicate buffer
# ═══════════════════════════════════════════════════════════════════════


class TestReplicateBuffer:

    def test_padding_trimmed_to_estimate_length(self):
        sol = bootstrap(OBSERVED, 1, 8, "parametric", M=100,
                        estimator=fixed_estimator([0.4, 1.2]),
                        simulator=CountingSimulator())
        assert sol.parameters_star.shape == (8, 2)
        np.testing.assert_array_equal(sol.kept_columns, [0, 1])

    def test_widens_for_long_estimates(self):
        long_theta = np.arange(1, 8) / 10.0

        def estimator(x, p, type=None, family=None):
            # Observed data gets 3 entries, replicates get 7; buffer starts at p + M + 1 = 5
            return long_theta if x[0] == 9 else np.array([0.4, 0.5, 0.1])

        sol = bootstrap(OBSERVED, 1, 6, "semiparametric", M=3,
                        estimator=estimator,
                        simulator=CountingSimulator(value=9))
        assert sol.parameters_star.shape == (6, 7)
        np.testing.assert_array_equal(sol.parameters_star[0], long_theta)
        np.testing.assert_array_equal(sol.theta_hat, [0.4, 0.5, 0.1, 0.0, 0.0, 0.0, 0.0])

    def test_all_zero_parameter_warns(self):
        with pytest.warns(RuntimeWarning, match="dropped as padding"):
            sol = bootstrap(OBSERVED, 1, 5, "parametric", M=4,
                            estimator=fixed_estimator([0.5, 0.3, 0.0, 0.2]),
                            simulator=CountingSimulator())
        np.testing.assert_array_equal(sol.kept_columns, [0, 1, 3])
        np.testing.assert_array_equal(sol.theta_hat, [0.5, 0.3, 0.2])
        assert sol.warnings and "padding" in sol.warnings[0]

    def test_constant_replicates_give_degenerate_intervals(self):
        sol = bootstrap(OBSERVED, 1, 10, "parametric",
                        estimator=fixed_estimator([0.4, 1.2]),
                        simulator=CountingSimulator())
        np.testing.assert_allclose(sol.bs_ci_percentile, [[0.4, 1.2], [0.4, 1.2]])
        np.testing.assert_allclose(sol.bs_ci_hall, [[0.4, 1.2], [0.4, 1.2]])


# ═══════════════════════════════════════════════════════════════════════
# Non-finite replicates
# ═══════════════════════════════════════════════════════════════════════


def every_fifth_nan(x, p, type=None, family=None):
    """alpha = x[0] / 100; replicates 5, 10, 15, 20 are non-finite."""
    b = int(x[0])
    if b in (5, 10, 15, 20):
        return np.array([np.nan, 1.0])
    return np.array([b / 100.0, 1.0])


class TestInvalidReplicates:

    def test_exclude(self):
        with pytest.warns(RuntimeWarning, match="4 of 20 replicates are non-finite"):
            sol = bootstrap(OBSERVED, 1, 20, "semiparametric", on_invalid="exclude",
                            estimator=every_fifth_nan, simulator=CountingSimulator())
        assert sol.valid.sum() == 16
        assert sol.info["n_invalid"] == 4
        assert sol.bs_ci_percentile[0, 0] == pytest.approx(0.01)
        assert sol.bs_ci_percentile[1, 0] == pytest.approx(0.19)
        assert np.all(np.isfinite(sol.bs_ci_hall))

    def test_keep(self):
        with pytest.warns(RuntimeWarning, match="kept in the intervals"):
            sol = bootstrap(OBSERVED, 1, 20, "semiparametric", on_invalid="keep",
                            estimator=every_fifth_nan, simulator=CountingSimulator())
        assert sol.valid.all()
        assert sol.bs_ci_percentile[0, 0] == pytest.approx(0.01)
        assert np.isnan(sol.bs_ci_percentile[1, 0])
        assert np.isnan(sol.parameters_star[4, 0])

    def test_all_invalid_excluded_raises(self):
        simulator = CountingSimulator(value=5)
        with pytest.warns(RuntimeWarning):
            with pytest.raises(NumericalError) as exc_info:
                bootstrap(OBSERVED, 1, 6, "semiparametric", on_invalid="exclude",
                          estimator=every_fifth_nan, simulator=simulator)
        assert exc_info.value.n_invalid == 6


# ═══════════════════════════════════════════════════════════════════════
# Progress and cancellation
# ═══════════════════════════════════════════════════════════════════════


class TestProgressAndCancel:

    def test_progress_sequence(self):
        calls = []
        bootstrap(OBSERVED, 1, 7, "parametric",
                  estimator=fixed_estimator([0.4, 1.2]),
                  simulator=CountingSimulator(),
                  progress=lambda done, total: calls.append((done, total)))
        assert calls == [(b, 7) for b in range(1, 8)]

    def test_progress_with_threads(self, geometric_inar1):
        calls = []
        bootstrap(geometric_inar1, 1, 12, "parametric", seed=1, n_jobs=3,
                  progress=lambda done, total: calls.append(done))
        assert calls == list(range(1, 13))

    def test_cancel_mid_run(self):
        event = threading.Event()

        def progress(done, total):
            if done == 3:
                event.set()

        simulator = CountingSimulator()
        with pytest.raises(BootstrapCancelled) as exc_info:
            bootstrap(OBSERVED, 1, 10, "parametric",
                      estimator=fixed_estimator([0.4, 1.2]),
                      simulator=simulator, progress=progress, cancel=event)
        assert exc_info.value.completed == 3
        assert exc_info.value.total == 10
        assert simulator.calls == 3

    def test_cancel_before_start(self):
        event = threading.Event()
        event.set()
        simulator = CountingSimulator()
        with pytest.raises(BootstrapCancelled) as exc_info:
            bootstrap(OBSERVED, 1, 10, "parametric",
                      estimator=fixed_estimator([0.4, 1.2]),
                      simulator=simulator, cancel=event)
        assert exc_info.value.completed == 0
        assert simulator.calls == 0


class TestBackend:

    def test_satisfies_backend_protocol(self):
        from pyinar.bootstrap.backends import CPUBootstrapBackend
        from pyinar.core import Backend

        backend = CPUBootstrapBackend()
        assert isinstance(backend, Backend)
        assert backend.name == "cpu_replicates"
