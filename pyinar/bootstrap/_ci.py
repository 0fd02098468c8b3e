"""
Bootstrap confidence intervals for INAR parameters.

Both intervals use raw order statistics of the replicate estimates,
selected by a parity rule on B * level (no interpolation):

- B * level an even integer: ranks B*level/2 and B*(1 - level/2)
- otherwise: K = max(1, floor((B + 1) * level / 2)), ranks K and B + 1 - K

Ranks are 1-indexed. Percentile takes the order statistics directly;
Hall's interval takes them from d = theta* - theta_hat and reflects
around theta_hat: [theta_hat - d_(hi), theta_hat - d_(lo)].
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

# Slack for deciding that B * level is an integer
_INTEGER_TOL = 1e-9


def order_statistic_ranks(B: int, level: float) -> tuple[int, int]:
    """
    1-indexed ranks (lower, upper) of the interval bounds among B sorted values.
    """
    product = B * level
    nearest = round(product)
    if nearest > 0 and abs(product - nearest) <= _INTEGER_TOL and nearest % 2 == 0:
        lower = nearest // 2
        return lower, B - lower
    K = max(1, math.floor((B + 1) * level / 2))
    return K, B + 1 - K


def trim_zero_columns(
    parameters_star: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.intp]]:
    """
    Drop columns that are identically zero across all replicates.

    Returns:
        (trimmed matrix, indices of the kept columns)
    """
    keep = np.flatnonzero(~np.all(parameters_star == 0, axis=0))
    return parameters_star[:, keep], keep


def percentile_ci(
    parameters_star: NDArray[np.floating[Any]],
    level: float,
) -> NDArray[np.floating[Any]]:
    """
    Percentile interval per column.

    Args:
        parameters_star: Replicate estimates, shape (B, K).
        level: Nominal non-coverage, e.g. 0.05.

    Returns:
        Shape (2, K): row 0 lower, row 1 upper.
    """
    B = parameters_star.shape[0]
    lo, hi = order_statistic_ranks(B, level)
    srt = np.sort(parameters_star, axis=0)
    return np.vstack((srt[lo - 1], srt[hi - 1]))


def hall_ci(
    parameters_star: NDArray[np.floating[Any]],
    theta_hat: NDArray[np.floating[Any]],
    level: float,
) -> NDArray[np.floating[Any]]:
    """
    Hall's percentile interval per column.

    Approximates the law of (estimate - truth) by that of
    (bootstrap estimate - baseline estimate).

    Args:
        parameters_star: Replicate estimates, shape (B, K).
        theta_hat: Original estimate aligned to the columns, shape (K,).
        level: Nominal non-coverage, e.g. 0.05.

    Returns:
        Shape (2, K): row 0 lower, row 1 upper.
    """
    B = parameters_star.shape[0]
    lo, hi = order_statistic_ranks(B, level)
    srt = np.sort(parameters_star - theta_hat, axis=0)
    return np.vstack((theta_hat - srt[hi - 1], theta_hat - srt[lo - 1]))
