"""
Negative log-likelihoods for INAR(1) and INAR(2).

Provides the objective functions used by maximum-likelihood estimation:

    negative_log_likelihood(x, alpha, innovation)   any innovation law
    nll_parametric(par, x, p)                       NB innovations
    nll_semiparametric(par, x, p)                   empirical pmf innovations
    nll_family(par, x, p, family)                   any named family

and the single-step conditional_pmf() for diagnostics.

A transition with zero probability contributes +inf. This is left
untouched so that an optimizer sees the infeasible region as a penalty.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinar.core.exceptions import DimensionError
from pyinar.core.validation import (
    check_1d,
    check_array,
    check_counts,
    check_finite,
    check_min_samples,
)
from pyinar.likelihood._kernel import lag_matrix, transition_probabilities
from pyinar.likelihood.innovations import (
    EmpiricalInnovation,
    NegativeBinomialInnovation,
    resolve_family,
)


def _counts(x: ArrayLike, p: int) -> NDArray[np.int64]:
    arr = check_array(x, "x")
    check_1d(arr, "x")
    check_finite(arr, "x")
    check_counts(arr, "x")
    check_min_samples(arr, p + 1, "x")
    return arr.astype(np.int64)


def _thinning(alpha: ArrayLike) -> NDArray[np.float64]:
    alpha = np.atleast_1d(np.asarray(alpha, dtype=np.float64))
    if alpha.ndim != 1 or alpha.shape[0] not in (1, 2):
        raise DimensionError(
            f"alpha: expected 1 or 2 thinning coefficients, got shape {alpha.shape}"
        )
    return alpha


def conditional_pmf(
    x_t: int,
    lags: ArrayLike,
    alpha: ArrayLike,
    innovation,
) -> float:
    """
    P(X_t = x_t | X_{t-1}, ..., X_{t-p}).

    Args:
        x_t: Current value.
        lags: Previous values, most recent first: [x_{t-1}] or [x_{t-1}, x_{t-2}].
        alpha: Thinning coefficients, one per lag.
        innovation: Innovation law exposing density(k).
    """
    alpha = _thinning(alpha)
    lags = np.atleast_1d(np.asarray(lags, dtype=np.int64))
    if lags.shape != alpha.shape:
        raise DimensionError(
            f"lags: expected {alpha.shape[0]} lagged values, got {lags.shape[0]}"
        )
    prob = transition_probabilities(
        np.array([int(x_t)], dtype=np.int64), lags[None, :], alpha, innovation,
    )
    return float(prob[0])


def negative_log_likelihood(
    x: ArrayLike,
    alpha: ArrayLike,
    innovation,
) -> float:
    """
    Conditional negative log-likelihood of a count sequence.

    Sums -log P(x_t | x_{t-1}, ..., x_{t-p}) over t = p+1..n, with the
    model order p given by the number of thinning coefficients.

    Args:
        x: Observed counts, length n > p.
        alpha: Thinning coefficients (alpha_1[, alpha_2]).
        innovation: Innovation law exposing density(k).

    Returns:
        Non-negative float, or +inf if some transition is impossible.
    """
    alpha = _thinning(alpha)
    counts = _counts(x, alpha.shape[0])
    current, lagged = lag_matrix(counts, alpha.shape[0])
    probs = transition_probabilities(current, lagged, alpha, innovation)
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(-np.sum(np.log(probs)))


def nll_parametric(par: ArrayLike, x: ArrayLike, p: int) -> float:
    """
    Negative log-likelihood of the NB-INAR(p) model.

    Args:
        par: [alpha_1, ..., alpha_p, r, prob]; r is rounded to the
            nearest integer before use.
        x: Observed counts.
        p: Model order, 1 or 2.
    """
    par = np.asarray(par, dtype=np.float64)
    innovation = NegativeBinomialInnovation(np.round(par[p]), par[p + 1])
    return negative_log_likelihood(x, par[:p], innovation)


def nll_semiparametric(par: ArrayLike, x: ArrayLike, p: int) -> float:
    """
    Negative log-likelihood of the semiparametric INAR(p) model.

    Args:
        par: [alpha_1, ..., alpha_p, pmf_1, ..., pmf_M]; pmf_0 is implied
            as 1 - sum(pmf_1..pmf_M).
        x: Observed counts.
        p: Model order, 1 or 2.
    """
    par = np.asarray(par, dtype=np.float64)
    innovation = EmpiricalInnovation.from_tail(par[p:])
    return negative_log_likelihood(x, par[:p], innovation)


def nll_family(par: ArrayLike, x: ArrayLike, p: int, family: str) -> float:
    """
    Negative log-likelihood with innovations from a named family.

    Args:
        par: Thinning coefficients followed by the family's parameters.
        x: Observed counts.
        p: Model order, 1 or 2.
        family: 'poisson', 'geometric' or 'negative-binomial'.
    """
    cls = resolve_family(family)
    if cls is NegativeBinomialInnovation:
        return nll_parametric(par, x, p)
    par = np.asarray(par, dtype=np.float64)
    return negative_log_likelihood(x, par[:p], cls.from_params(par[p:]))
