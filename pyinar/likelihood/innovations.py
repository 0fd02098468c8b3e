"""
Innovation laws for INAR models.

Each Innovation defines:
- density(k): the pmf at integer k (0 outside the support, never raising)
- truncated_pmf(M): the pmf materialised on 0..M, used for simulation
- params: the flat innovation parameters as they appear after the
  thinning coefficients in a parameter vector

Parametric families additionally define moment fitting and optimizer
bounds used by the estimators.

Conventions follow R's d-functions:
    dpois(k, lambda), dgeom(k, prob) = prob (1 - prob)^k,
    dnbinom(k, size, prob) with support starting at 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pyinar.core.exceptions import ValidationError

# Keeps probabilities and rates strictly inside their open ranges
_EPS = 1e-8


class Innovation(ABC):
    """Abstract innovation law: a pmf over the non-negative integers."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def params(self) -> NDArray[np.floating[Any]]:
        """Innovation parameters in parameter-vector order."""
        ...

    @abstractmethod
    def density(self, k) -> NDArray[np.floating[Any]]:
        """P(innovation = k), vectorised over integer arrays."""
        ...

    def truncated_pmf(self, M: int) -> NDArray[np.floating[Any]]:
        """The pmf evaluated at 0..M (not renormalised)."""
        return np.asarray(self.density(np.arange(M + 1)), dtype=np.float64)

    def __repr__(self) -> str:
        args = ", ".join(f"{v:.6g}" for v in self.params)
        return f"{self.__class__.__name__}({args})"


class ParametricInnovation(Innovation):
    """
    Innovation from a named parametric family.

    Subclasses supply construction from a flat parameter slice, a
    method-of-moments fit, and box bounds for maximum likelihood.
    """

    n_params: int = 1

    @classmethod
    @abstractmethod
    def from_params(cls, params: ArrayLike) -> ParametricInnovation:
        ...

    @classmethod
    @abstractmethod
    def from_moments(cls, mean: float, var: float) -> ParametricInnovation:
        """Fit from the innovation mean and variance."""
        ...

    @classmethod
    @abstractmethod
    def bounds(cls) -> list[tuple[float | None, float | None]]:
        """L-BFGS-B bounds for the innovation parameters."""
        ...


class PoissonInnovation(ParametricInnovation):
    """Poi(lam) innovations."""

    n_params = 1

    def __init__(self, lam: float):
        self.lam = float(lam)

    @property
    def name(self) -> str:
        return 'poisson'

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        return np.array([self.lam])

    def density(self, k) -> NDArray[np.floating[Any]]:
        return sp_stats.poisson.pmf(k, self.lam)

    @classmethod
    def from_params(cls, params: ArrayLike) -> PoissonInnovation:
        return cls(np.asarray(params, dtype=np.float64)[0])

    @classmethod
    def from_moments(cls, mean: float, var: float) -> PoissonInnovation:
        return cls(max(mean, _EPS))

    @classmethod
    def bounds(cls) -> list[tuple[float | None, float | None]]:
        return [(_EPS, None)]


class GeometricInnovation(ParametricInnovation):
    """Geo(prob) innovations on 0, 1, 2, ... (NB with size 1)."""

    n_params = 1

    def __init__(self, prob: float):
        self.prob = float(prob)

    @property
    def name(self) -> str:
        return 'geometric'

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        return np.array([self.prob])

    def density(self, k) -> NDArray[np.floating[Any]]:
        return sp_stats.nbinom.pmf(k, 1, self.prob)

    @classmethod
    def from_params(cls, params: ArrayLike) -> GeometricInnovation:
        return cls(np.asarray(params, dtype=np.float64)[0])

    @classmethod
    def from_moments(cls, mean: float, var: float) -> GeometricInnovation:
        # E[eps] = (1 - prob) / prob
        prob = 1.0 / (1.0 + max(mean, 0.0))
        return cls(float(np.clip(prob, _EPS, 1.0 - _EPS)))

    @classmethod
    def bounds(cls) -> list[tuple[float | None, float | None]]:
        return [(_EPS, 1.0 - _EPS)]


class NegativeBinomialInnovation(ParametricInnovation):
    """
    NB(r, prob) innovations, R's dnbinom(k, size=r, prob).

    r is used as given (non-integer sizes are valid for simulation);
    the likelihood rounds it before constructing the law. A size of 0
    is the point mass at 0, as in R.
    """

    n_params = 2

    def __init__(self, r: float, prob: float):
        self.r = float(r)
        self.prob = float(prob)

    @property
    def name(self) -> str:
        return 'negative-binomial'

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        return np.array([self.r, self.prob])

    def density(self, k) -> NDArray[np.floating[Any]]:
        if self.r == 0.0:
            return (np.asarray(k) == 0).astype(np.float64)
        return sp_stats.nbinom.pmf(k, self.r, self.prob)

    @classmethod
    def from_params(cls, params: ArrayLike) -> NegativeBinomialInnovation:
        arr = np.asarray(params, dtype=np.float64)
        return cls(arr[0], arr[1])

    @classmethod
    def from_moments(cls, mean: float, var: float) -> NegativeBinomialInnovation:
        # mean = r (1 - prob) / prob, var = mean / prob
        mean = max(mean, _EPS)
        prob = mean / var if var > 0 else 1.0 - _EPS
        prob = float(np.clip(prob, _EPS, 1.0 - _EPS))
        r = max(mean * prob / (1.0 - prob), _EPS)
        return cls(r, prob)

    @classmethod
    def bounds(cls) -> list[tuple[float | None, float | None]]:
        # r below 1 would round to a degenerate size
        return [(1.0, None), (_EPS, 1.0 - _EPS)]


class EmpiricalInnovation(Innovation):
    """
    Innovation given by an explicit pmf on 0..M.

    Entries are taken as given; lookups outside 0..M have probability 0.
    """

    def __init__(self, pmf: ArrayLike):
        self.pmf = np.asarray(pmf, dtype=np.float64).ravel()

    @classmethod
    def from_tail(cls, tail: ArrayLike) -> EmpiricalInnovation:
        """Build from [pmf_1, ..., pmf_M]; pmf_0 is 1 minus their sum."""
        tail = np.asarray(tail, dtype=np.float64).ravel()
        return cls(np.concatenate(([1.0 - tail.sum()], tail)))

    @property
    def name(self) -> str:
        return 'empirical'

    @property
    def params(self) -> NDArray[np.floating[Any]]:
        return self.pmf.copy()

    @property
    def support_max(self) -> int:
        return len(self.pmf) - 1

    def density(self, k) -> NDArray[np.floating[Any]]:
        k = np.asarray(k)
        out = np.zeros(k.shape, dtype=np.float64)
        inside = (k >= 0) & (k < len(self.pmf))
        out[inside] = self.pmf[k[inside].astype(np.intp)]
        return out

    def __repr__(self) -> str:
        return f"EmpiricalInnovation(M={self.support_max})"


# =====================================================================
# Family name -> class mapping + resolver
# =====================================================================

FAMILIES: dict[str, type[ParametricInnovation]] = {
    'poisson': PoissonInnovation,
    'geometric': GeometricInnovation,
    'negative-binomial': NegativeBinomialInnovation,
}


def resolve_family(family: str) -> type[ParametricInnovation]:
    """
    Resolve a family name to its innovation class.

    Raises:
        ValidationError: If the name is not recognised.
    """
    cls = FAMILIES.get(family) if isinstance(family, str) else None
    if cls is None:
        valid = ', '.join(FAMILIES)
        raise ValidationError(
            f"Unknown family: {family!r}. Valid families: {valid}"
        )
    return cls
