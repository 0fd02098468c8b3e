"""
INAR bootstrap.

Semiparametric and parametric bootstrap for INAR(1) and INAR(2) with
percentile and Hall confidence intervals.

Usage:
    from pyinar.bootstrap import bootstrap

    result = bootstrap(x, p=1, B=50, setting="parametric",
                       type="moment", family="geometric", seed=42)
    result.bs_ci_percentile   # (2, K') lower / upper
    print(result.summary())
"""

from pyinar.bootstrap.design import BootstrapDesign
from pyinar.bootstrap.solution import BootstrapSolution
from pyinar.bootstrap.solvers import bootstrap

__all__ = [
    "BootstrapDesign",
    "BootstrapSolution",
    "bootstrap",
]
