"""
Common data structures for the INAR bootstrap.

INARBootParams is the parameter payload wrapped by Result[P] and exposed
through BootstrapSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class INARBootParams:
    """
    Parameter payload for INAR bootstrap results.

    - x_star: simulated sequences, one column per replicate
    - parameters_star: replicate estimates after dropping all-zero columns
    - bs_ci_percentile / bs_ci_hall: row 0 lower, row 1 upper
    - theta_hat: baseline estimate aligned to the kept columns
    - kept_columns: column indices of parameters_star before trimming
    - valid: replicates used for the intervals
    """
    x_star: NDArray[np.floating[Any]]              # shape (n, B)
    parameters_star: NDArray[np.floating[Any]]     # shape (B, K')
    bs_ci_percentile: NDArray[np.floating[Any]]    # shape (2, K')
    bs_ci_hall: NDArray[np.floating[Any]]          # shape (2, K')
    theta_hat: NDArray[np.floating[Any]]           # shape (K',)
    kept_columns: NDArray[np.intp]                 # shape (K',)
    valid: NDArray[np.bool_]                       # shape (B,)
    level: float
    B: int
