"""
Maximum-likelihood estimation for INAR(1) and INAR(2).

Parametric: L-BFGS-B on the family's negative log-likelihood, started
from the moment estimate, with box bounds on every parameter.

Semiparametric: SLSQP over (alpha, pmf_1..pmf_M) with M = max(x),
pmf_k in [0, 1] and sum(pmf_1..pmf_M) <= 1 so the implied pmf_0 stays
non-negative.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import minimize

from pyinar.core.exceptions import ConvergenceError
from pyinar.estimation._moments import fit_moments
from pyinar.likelihood.innovations import PoissonInnovation
from pyinar.likelihood.solvers import nll_family, nll_semiparametric

_ALPHA_BOUNDS = (1e-8, 1.0 - 1e-8)


def _check_optimum(opt_result, label: str) -> None:
    if not np.isfinite(opt_result.fun):
        raise ConvergenceError(
            f"{label}: optimizer ended at a non-finite objective "
            f"({opt_result.message})",
            iterations=int(opt_result.nit),
            reason=str(opt_result.message),
        )
    if not opt_result.success:
        warnings.warn(
            f"{label} optimizer did not converge after {opt_result.nit} "
            f"iterations. Message: {opt_result.message}",
            RuntimeWarning,
            stacklevel=3,
        )


def fit_ml(
    x: NDArray[np.floating[Any]],
    p: int,
    family: str,
    family_cls,
    max_iter: int = 500,
) -> NDArray[np.floating[Any]]:
    """Parametric maximum-likelihood estimate."""
    bounds = [_ALPHA_BOUNDS] * p + family_cls.bounds()
    lower = np.array([-np.inf if lo is None else lo for lo, _ in bounds])
    upper = np.array([np.inf if hi is None else hi for _, hi in bounds])
    theta0 = np.clip(fit_moments(x, p, family_cls), lower, upper)

    opt_result = minimize(
        nll_family,
        theta0,
        args=(x, p, family),
        method='L-BFGS-B',
        bounds=bounds,
        options={'maxiter': max_iter},
    )
    _check_optimum(opt_result, f"{family} INAR({p}) maximum likelihood")
    return np.asarray(opt_result.x, dtype=np.float64)


def _start_pmf(mu_eps: float, M: int) -> NDArray[np.floating[Any]]:
    # Poisson shape at the moment mean, blended with uniform to stay interior
    shape = PoissonInnovation.from_moments(mu_eps, mu_eps).truncated_pmf(M)
    shape = shape / shape.sum()
    return 0.5 * shape + 0.5 / (M + 1)


def fit_semiparametric(
    x: NDArray[np.floating[Any]],
    p: int,
    max_iter: int = 500,
) -> NDArray[np.floating[Any]]:
    """
    Semiparametric maximum-likelihood estimate.

    Returns:
        [alpha_1..alpha_p, pmf_0, pmf_1, ..., pmf_M] with M = max(x).
    """
    M = int(x.max())
    moments = fit_moments(x, p, PoissonInnovation)
    alpha0 = np.clip(moments[:p], *_ALPHA_BOUNDS)

    if M == 0:
        # All-zero data: the innovation is the point mass at 0
        return np.concatenate((alpha0, [1.0]))

    tail0 = _start_pmf(moments[p], M)[1:]
    theta0 = np.concatenate((alpha0, tail0))
    bounds = [_ALPHA_BOUNDS] * p + [(0.0, 1.0)] * M
    constraints = [{'type': 'ineq', 'fun': lambda theta: 1.0 - np.sum(theta[p:])}]

    opt_result = minimize(
        nll_semiparametric,
        theta0,
        args=(x, p),
        method='SLSQP',
        bounds=bounds,
        constraints=constraints,
        options={'maxiter': max_iter},
    )
    _check_optimum(opt_result, f"semiparametric INAR({p}) maximum likelihood")

    theta = np.asarray(opt_result.x, dtype=np.float64)
    tail = np.clip(theta[p:], 0.0, 1.0)
    pmf0 = max(1.0 - tail.sum(), 0.0)
    return np.concatenate((theta[:p], [pmf0], tail))
