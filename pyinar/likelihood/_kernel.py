"""
Conditional transition probabilities of INAR(1) and INAR(2).

X_t = alpha_1 o X_{t-1} [+ alpha_2 o X_{t-2}] + eps_t, where o is
binomial thinning. The conditional pmf of X_t is a discrete convolution
over the unobserved survivor counts:

    p = 1:  sum_i  Bin(i; x_{t-1}, a1) g(x_t - i)
    p = 2:  sum_i  Bin(i; x_{t-1}, a1) sum_j Bin(j; x_{t-2}, a2) g(x_t - i - j)

with i <= min(x_t, x_{t-1}) and j <= min(x_t - i, x_{t-2}).

The sums are evaluated on a dense (time, i[, j]) grid. Grid cells
outside those ranges contribute exactly zero, because Bin(i; n, a) = 0
for i > n and g(k) = 0 for k < 0, so the result equals the ranged sums.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

# Upper bound on grid cells materialised at once
_CHUNK_CELLS = 1 << 20


def transition_probabilities(
    current: NDArray[np.integer[Any]],
    lagged: NDArray[np.integer[Any]],
    alpha: NDArray[np.floating[Any]],
    innovation,
) -> NDArray[np.floating[Any]]:
    """
    P(X_t = current[t] | lags) for a batch of time points.

    Args:
        current: Observed values x_t, shape (m,).
        lagged: Lagged values, shape (m, p); column 0 is x_{t-1}.
        alpha: Thinning coefficients, shape (p,), p in {1, 2}.
        innovation: Anything exposing density(k).

    Returns:
        Conditional probabilities, shape (m,).
    """
    m = current.shape[0]
    if m == 0:
        return np.empty(0, dtype=np.float64)

    p = alpha.shape[0]
    top = int(current.max())
    widths = [min(top, int(lagged[:, lag].max())) + 1 for lag in range(p)]
    cells_per_row = int(np.prod(widths))
    step = max(1, _CHUNK_CELLS // cells_per_row)

    out = np.empty(m, dtype=np.float64)
    for start in range(0, m, step):
        stop = min(start + step, m)
        out[start:stop] = _grid_sum(
            current[start:stop], lagged[start:stop], alpha, innovation, widths,
        )
    return out


def _grid_sum(current, lagged, alpha, innovation, widths) -> NDArray:
    if alpha.shape[0] == 1:
        i = np.arange(widths[0])[None, :]
        survivors = sp_stats.binom.pmf(i, lagged[:, [0]], alpha[0])
        noise = innovation.density(current[:, None] - i)
        return np.sum(survivors * noise, axis=1)

    i = np.arange(widths[0])[None, :, None]
    j = np.arange(widths[1])[None, None, :]
    first = sp_stats.binom.pmf(i, lagged[:, 0, None, None], alpha[0])
    second = sp_stats.binom.pmf(j, lagged[:, 1, None, None], alpha[1])
    noise = innovation.density(current[:, None, None] - i - j)
    return np.sum(first * second * noise, axis=(1, 2))


def lag_matrix(x: NDArray[np.integer[Any]], p: int) -> tuple[NDArray, NDArray]:
    """
    Split a sequence into (x_t, [x_{t-1}, ..., x_{t-p}]) for t = p..n-1.
    """
    n = x.shape[0]
    current = x[p:]
    lagged = np.column_stack([x[p - lag:n - lag] for lag in range(1, p + 1)])
    return current, lagged
