"""
Method-of-moments estimation for INAR(1) and INAR(2).

Thinning coefficients come from the Yule-Walker equations on the sample
autocorrelations (R's acf: mean-centred, divisor n). For INAR(p) with
independent thinnings

    mu_eps     = mean(x) (1 - sum alpha)
    sigma2_eps = gamma(0) - sum alpha_i gamma(i) - mean(x) sum alpha_i (1 - alpha_i)

and the innovation family is fitted to (mu_eps, sigma2_eps).
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

# Coefficients are kept strictly below 1
_ALPHA_MAX = 1.0 - 1e-8


def autocovariance(x: NDArray[np.floating[Any]], max_lag: int) -> NDArray[np.floating[Any]]:
    """Sample autocovariances gamma(0..max_lag), divisor n."""
    n = x.shape[0]
    centred = x - x.mean()
    return np.array([
        np.dot(centred[:n - h], centred[h:]) / n for h in range(max_lag + 1)
    ])


def yule_walker(gamma: NDArray[np.floating[Any]], p: int) -> NDArray[np.floating[Any]]:
    """
    Yule-Walker thinning coefficients, clipped into [0, 1).

    A constant sequence has no autocorrelation to speak of; its
    coefficients are 0.
    """
    if gamma[0] <= 0:
        return np.zeros(p)
    rho = gamma / gamma[0]
    if p == 1:
        alpha = np.array([rho[1]])
    else:
        denom = 1.0 - rho[1] ** 2
        if denom <= 0:
            alpha = np.array([rho[1], 0.0])
        else:
            alpha = np.array([
                rho[1] * (1.0 - rho[2]) / denom,
                (rho[2] - rho[1] ** 2) / denom,
            ])
    return np.clip(alpha, 0.0, _ALPHA_MAX)


def innovation_moments(
    x: NDArray[np.floating[Any]],
    alpha: NDArray[np.floating[Any]],
    gamma: NDArray[np.floating[Any]],
) -> tuple[float, float]:
    """Innovation mean and variance implied by alpha and the sample moments."""
    mean = float(x.mean())
    mu_eps = mean * (1.0 - alpha.sum())
    lags = np.arange(1, alpha.shape[0] + 1)
    var_eps = (
        gamma[0]
        - np.dot(alpha, gamma[lags])
        - mean * np.dot(alpha, 1.0 - alpha)
    )
    return mu_eps, float(var_eps)


def fit_moments(
    x: NDArray[np.floating[Any]],
    p: int,
    family_cls,
) -> NDArray[np.floating[Any]]:
    """Moment estimate [alpha_1..alpha_p, innovation params...]."""
    gamma = autocovariance(x, p)
    alpha = yule_walker(gamma, p)
    mu_eps, var_eps = innovation_moments(x, alpha, gamma)
    innovation = family_cls.from_moments(mu_eps, var_eps)
    return np.concatenate((alpha, innovation.params))
