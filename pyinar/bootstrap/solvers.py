"""
Solver dispatch for the INAR bootstrap.

Provides bootstrap(): the semiparametric and parametric INAR bootstrap
with percentile and Hall confidence intervals.
"""

from __future__ import annotations

from typing import Callable, Literal

from numpy.typing import ArrayLike

from pyinar.core.protocols import CancelToken, ProgressObserver
from pyinar.bootstrap.design import BootstrapDesign
from pyinar.bootstrap.solution import BootstrapSolution
from pyinar.bootstrap.backends.cpu import CPUBootstrapBackend


def bootstrap(
    x: ArrayLike | BootstrapDesign,
    p: int | None = None,
    B: int | None = None,
    setting: Literal["semiparametric", "parametric"] | None = None,
    type: Literal["moment", "maximum-likelihood"] = "moment",
    family: Literal["poisson", "geometric", "negative-binomial"] = "poisson",
    M: int = 100,
    level: float = 0.05,
    *,
    seed=None,
    n_jobs: int = 1,
    progress: ProgressObserver | None = None,
    cancel: CancelToken | None = None,
    on_invalid: Literal["keep", "exclude"] = "keep",
    estimator: Callable | None = None,
    simulator: Callable | None = None,
) -> BootstrapSolution:
    """
    (Semi)parametric INAR bootstrap.

    Fits the model to x, simulates B sequences of the same length from
    the fit, re-estimates on each, and builds percentile and Hall
    confidence intervals from the replicate estimates.

    Parameters
    ----------
    x : array-like or BootstrapDesign
        Observed counts (non-negative integers), length > p.
    p : int
        Model order, 1 or 2.
    B : int
        Number of bootstrap replicates, >= 1.
    setting : str
        "semiparametric" (empirical innovation pmf) or "parametric".
    type : str
        Parametric estimation: "moment" (default) or "maximum-likelihood".
    family : str
        Parametric innovation family: "poisson" (default), "geometric"
        or "negative-binomial".
    M : int
        Upper limit of the innovation support used to simulate from a
        parametric fit. Default 100.
    level : float
        Nominal non-coverage of the intervals. Default 0.05.
    seed : int, SeedSequence or None
        Root seed. Replicate b uses child b of SeedSequence(seed).
    n_jobs : int
        Worker threads for the replicates. Results do not depend on it.
    progress : callable or None
        Called as progress(completed, B) after each replicate.
    cancel : object with is_set() or None
        Checked between replicates (e.g. threading.Event). When set the
        run stops with BootstrapCancelled.
    on_invalid : str
        "keep" (default) writes non-finite replicate estimates through
        to the intervals; "exclude" leaves them out of the intervals.
    estimator, simulator : callable or None
        Replacements for pyinar.estimation.estimate and
        pyinar.simulation.simulate.

    Returns
    -------
    BootstrapSolution
        x_star, parameters_star, bs_ci_percentile and bs_ci_hall.
    """
    if isinstance(x, BootstrapDesign):
        design = x
    else:
        design = BootstrapDesign.for_bootstrap(
            x, p, B, setting,
            type=type,
            family=family,
            M=M,
            level=level,
            seed=seed,
            n_jobs=n_jobs,
            progress=progress,
            cancel=cancel,
            on_invalid=on_invalid,
            estimator=estimator,
            simulator=simulator,
        )

    backend = CPUBootstrapBackend()
    result = backend.solve(design)
    return BootstrapSolution(_result=result, _design=design)
