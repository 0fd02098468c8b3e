"""
Design class for the INAR bootstrap.

BootstrapDesign encapsulates all inputs needed by the backend.
Immutable, validated at construction: every argument error is raised
here, before any estimation or simulation has run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pyinar.core.exceptions import ValidationError
from pyinar.core.protocols import CancelToken, Estimator, ProgressObserver, Simulator
from pyinar.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_counts,
    check_finite,
    check_integer,
    check_level,
    check_min_samples,
)
from pyinar.estimation import ESTIMATION_TYPES, estimate
from pyinar.likelihood.innovations import FAMILIES
from pyinar.simulation import simulate

SETTINGS = ('semiparametric', 'parametric')
ON_INVALID = ('keep', 'exclude')


@dataclass(frozen=True)
class BootstrapDesign:
    """
    Frozen design for the (semi)parametric INAR bootstrap.

    Attributes:
        x: Observed counts, read-only float64, shape (n,).
        p: Model order, 1 or 2.
        B: Number of bootstrap replicates.
        setting: "semiparametric" or "parametric".
        type: "moment" or "maximum-likelihood" (parametric setting).
        family: "poisson", "geometric" or "negative-binomial" (parametric setting).
        M: Upper support limit of the truncated innovation pmf.
        level: Nominal non-coverage of the intervals, e.g. 0.05.
        seed: Root seed; replicate b uses child b of SeedSequence(seed).
        n_jobs: Worker threads for the replicate loop.
        progress: Called as progress(completed, B) after each replicate.
        cancel: Checked between replicates; stops the loop when set.
        on_invalid: "keep" non-finite replicates or "exclude" them from the intervals.
        estimator: Parameter estimator collaborator.
        simulator: Path simulator collaborator.
    """
    x: NDArray[np.floating[Any]]
    p: int
    B: int
    setting: str
    type: str
    family: str
    M: int
    level: float
    seed: Any
    n_jobs: int
    progress: ProgressObserver | None
    cancel: CancelToken | None
    on_invalid: str
    estimator: Estimator
    simulator: Simulator

    @property
    def n(self) -> int:
        return self.x.shape[0]

    @property
    def semiparametric(self) -> bool:
        return self.setting == 'semiparametric'

    def fit(self, x: NDArray) -> NDArray[np.floating[Any]]:
        """Run the estimator with the arguments this setting calls for."""
        if self.semiparametric:
            theta = self.estimator(x, self.p)
        else:
            theta = self.estimator(x, self.p, self.type, self.family)
        return np.atleast_1d(np.asarray(theta, dtype=np.float64)).ravel()

    @classmethod
    def for_bootstrap(
        cls,
        x,
        p: int,
        B: int,
        setting: str,
        type: str = "moment",
        family: str = "poisson",
        M: int = 100,
        level: float = 0.05,
        *,
        seed=None,
        n_jobs: int = 1,
        progress: ProgressObserver | None = None,
        cancel: CancelToken | None = None,
        on_invalid: str = "keep",
        estimator: Callable | None = None,
        simulator: Callable | None = None,
    ) -> BootstrapDesign:
        """
        Create a bootstrap design with validation.

        Raises:
            ValidationError: If any input is invalid.
        """
        p = check_integer(p, "p", lower=1, upper=2)
        B = check_integer(B, "B", lower=1)

        x_arr = check_array(x, "x")
        check_1d(x_arr, "x")
        check_finite(x_arr, "x")
        check_counts(x_arr, "x")
        check_min_samples(x_arr, p + 1, "x")
        x_arr = x_arr.astype(np.float64, copy=True)
        x_arr.setflags(write=False)

        check_choice(setting, SETTINGS, "setting")
        check_choice(type, ESTIMATION_TYPES, "type")
        check_choice(family, tuple(FAMILIES), "family")
        M = check_integer(M, "M", lower=0)
        level = check_level(level, "level")
        n_jobs = check_integer(n_jobs, "n_jobs", lower=1)
        check_choice(on_invalid, ON_INVALID, "on_invalid")

        if progress is not None and not callable(progress):
            raise ValidationError(
                f"progress: expected a callable, got {progress!r}"
            )
        if cancel is not None and not isinstance(cancel, CancelToken):
            raise ValidationError(
                f"cancel: expected an object with is_set(), got {cancel!r}"
            )
        for name, fn in (("estimator", estimator), ("simulator", simulator)):
            if fn is not None and not callable(fn):
                raise ValidationError(f"{name}: expected a callable, got {fn!r}")

        return cls(
            x=x_arr,
            p=p,
            B=B,
            setting=setting,
            type=type,
            family=family,
            M=M,
            level=level,
            seed=seed,
            n_jobs=n_jobs,
            progress=progress,
            cancel=cancel,
            on_invalid=on_invalid,
            estimator=estimator if estimator is not None else estimate,
            simulator=simulator if simulator is not None else simulate,
        )
