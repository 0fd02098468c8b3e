"""
INAR parameter estimation.

Usage:
    from pyinar.estimation import estimate

    estimate(x, 1)                                   # semiparametric ML
    estimate(x, 1, "moment", "geometric")            # Yule-Walker moments
    estimate(x, 2, "maximum-likelihood", "poisson")  # parametric ML
"""

from pyinar.estimation.solvers import ESTIMATION_TYPES, estimate

__all__ = [
    "ESTIMATION_TYPES",
    "estimate",
]
