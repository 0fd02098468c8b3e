"""
pyinar: likelihood inference and bootstrap for INAR count time series.

Integer-valued autoregressive models of order 1 and 2 under binomial
thinning, with parametric (Poisson, geometric, negative binomial) or
semiparametric (empirical pmf) innovations.

Submodules:
    likelihood: Conditional negative log-likelihoods
    simulation: INAR(p) path simulation
    estimation: Moment and maximum-likelihood estimation
    bootstrap: Percentile and Hall bootstrap confidence intervals
"""

__version__ = "0.1.0"

from pyinar import likelihood
from pyinar import simulation
from pyinar import estimation
from pyinar import bootstrap

__all__ = [
    "__version__",
    "likelihood",
    "simulation",
    "estimation",
    "bootstrap",
]
