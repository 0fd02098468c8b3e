"""
Solver dispatch for INAR parameter estimation.

estimate(x, p)                     semiparametric maximum likelihood
estimate(x, p, type, family)       parametric moment or maximum likelihood
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinar.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_counts,
    check_finite,
    check_integer,
    check_min_samples,
)
from pyinar.estimation._ml import fit_ml, fit_semiparametric
from pyinar.estimation._moments import fit_moments
from pyinar.likelihood.innovations import FAMILIES, resolve_family

ESTIMATION_TYPES = ('moment', 'maximum-likelihood')


def estimate(
    x: ArrayLike,
    p: int,
    type: Literal["moment", "maximum-likelihood"] | None = None,
    family: Literal["poisson", "geometric", "negative-binomial"] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Estimate INAR(p) parameters.

    Parameters
    ----------
    x : array-like
        Observed counts, non-negative integers, length > p.
    p : int
        Model order, 1 or 2.
    type : str or None
        None for the semiparametric setting; otherwise "moment" or
        "maximum-likelihood".
    family : str or None
        Innovation family for the parametric setting: "poisson"
        (default), "geometric" or "negative-binomial". Ignored when
        type is None.

    Returns
    -------
    NDArray
        Semiparametric: [alpha_1..alpha_p, pmf_0, ..., pmf_M], M = max(x).
        Parametric: [alpha_1..alpha_p, lambda] (Poisson),
        [alpha_1..alpha_p, prob] (geometric) or
        [alpha_1..alpha_p, r, prob] (negative binomial).
    """
    p = check_integer(p, "p", lower=1, upper=2)
    arr = check_array(x, "x")
    check_1d(arr, "x")
    check_finite(arr, "x")
    check_counts(arr, "x")
    check_min_samples(arr, p + 1, "x")

    if type is None:
        return fit_semiparametric(arr, p)

    check_choice(type, ESTIMATION_TYPES, "type")
    family = check_choice(family or "poisson", tuple(FAMILIES), "family")
    family_cls = resolve_family(family)

    if type == "moment":
        return fit_moments(arr, p, family_cls)
    return fit_ml(arr, p, family, family_cls)
