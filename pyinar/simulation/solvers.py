"""
INAR(p) path simulation.

simulate() draws X_t = sum_i Bin(X_{t-i}, alpha_i) + eps_t with i.i.d.
innovations eps_t on 0..M distributed as the given pmf. A burn-in of
`prerun` steps is discarded so the returned path starts close to the
stationary distribution.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinar.core.exceptions import DimensionError, ValidationError
from pyinar.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_integer,
    check_probabilities,
)


def simulate(
    n: int,
    p: int,
    alpha: ArrayLike,
    pmf: ArrayLike,
    *,
    prerun: int = 500,
    seed: Any = None,
) -> NDArray[np.int64]:
    """
    Simulate an INAR(p) sequence.

    Parameters
    ----------
    n : int
        Length of the returned sequence. Must be >= 1.
    p : int
        Model order, 1 or 2.
    alpha : array-like
        Thinning coefficients, length p, each in [0, 1].
    pmf : array-like
        Innovation pmf on 0..M. Non-negative with positive sum; it is
        normalised before sampling.
    prerun : int
        Number of burn-in steps discarded before the returned window.
    seed : int, SeedSequence, Generator or None
        Anything numpy.random.default_rng accepts.

    Returns
    -------
    NDArray[np.int64]
        Simulated counts, shape (n,).
    """
    n = check_integer(n, "n", lower=1)
    p = check_integer(p, "p", lower=1, upper=2)
    prerun = check_integer(prerun, "prerun", lower=0)
    alpha = check_probabilities(alpha, "alpha")
    if alpha.shape[0] != p:
        raise DimensionError(
            f"alpha: expected {p} thinning coefficients, got {alpha.shape[0]}"
        )

    weights = check_array(pmf, "pmf")
    check_1d(weights, "pmf")
    check_finite(weights, "pmf")
    if np.any(weights < 0):
        raise ValidationError("pmf: entries must be non-negative")
    total = weights.sum()
    if total <= 0:
        raise ValidationError("pmf: entries must have a positive sum")

    rng = np.random.default_rng(seed)
    length = n + prerun
    eps = rng.choice(weights.shape[0], size=length, replace=True, p=weights / total)

    x = np.zeros(length, dtype=np.int64)
    x[:p] = eps[:p]
    for t in range(p, length):
        survivors = rng.binomial(x[t - p:t][::-1], alpha)
        x[t] = survivors.sum() + eps[t]

    return x[prerun:]
