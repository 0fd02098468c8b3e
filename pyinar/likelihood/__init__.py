"""
INAR likelihood engine.

Exact conditional negative log-likelihoods for INAR(1) and INAR(2) under
binomial thinning, with parametric or empirical innovations.

Usage:
    from pyinar.likelihood import nll_parametric, nll_semiparametric

    nll_parametric([0.5, 2, 0.6], x, p=1)          # alpha, r, prob
    nll_semiparametric([0.5, 0.3, 0.2], x, p=1)    # alpha, pmf_1, pmf_2
"""

from pyinar.likelihood.innovations import (
    FAMILIES,
    EmpiricalInnovation,
    GeometricInnovation,
    Innovation,
    NegativeBinomialInnovation,
    ParametricInnovation,
    PoissonInnovation,
    resolve_family,
)
from pyinar.likelihood.solvers import (
    conditional_pmf,
    negative_log_likelihood,
    nll_family,
    nll_parametric,
    nll_semiparametric,
)

__all__ = [
    "conditional_pmf",
    "negative_log_likelihood",
    "nll_family",
    "nll_parametric",
    "nll_semiparametric",
    "FAMILIES",
    "EmpiricalInnovation",
    "GeometricInnovation",
    "Innovation",
    "NegativeBinomialInnovation",
    "ParametricInnovation",
    "PoissonInnovation",
    "resolve_family",
]
