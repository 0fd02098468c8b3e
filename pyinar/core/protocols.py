"""
Core protocols for pyinar.

Structural interfaces for the collaborators the bootstrap engine drives.
Protocol (structural typing) is used rather than ABC so that plain
functions, bound methods, and ``threading.Event`` satisfy them directly.

Design Principles:
    - Minimal contracts: prescribe only what the engine calls
    - Collaborators are injected, never imported by the engine directly
"""

from typing import TYPE_CHECKING, Any, Protocol, Sequence, TypeVar, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pyinar.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


class Estimator(Protocol):
    """
    Fits a parameter vector to a count sequence.

    Called as ``estimator(x, p)`` in the semiparametric setting and
    ``estimator(x, p, type, family)`` in the parametric one. Returns the
    flat vector: thinning coefficients followed by innovation parameters.
    """

    def __call__(
        self,
        x: NDArray[np.floating[Any]],
        p: int,
        type: str | None = None,
        family: str | None = None,
    ) -> NDArray[np.floating[Any]]:
        ...


class Simulator(Protocol):
    """
    Draws a synthetic INAR(p) sequence.

    ``seed`` is whatever numpy.random.default_rng accepts; the engine
    passes a per-replicate SeedSequence.
    """

    def __call__(
        self,
        n: int,
        p: int,
        alpha: Sequence[float] | NDArray[np.floating[Any]],
        pmf: Sequence[float] | NDArray[np.floating[Any]],
        *,
        seed: Any = None,
    ) -> NDArray[np.integer[Any]]:
        ...


class ProgressObserver(Protocol):
    """Invoked once per completed replicate."""

    def __call__(self, completed: int, total: int) -> None:
        ...


@runtime_checkable
class CancelToken(Protocol):
    """Cooperative cancellation flag, e.g. threading.Event."""

    def is_set(self) -> bool:
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Backends are stateless; all configuration arrives in the design.
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_replicates'.
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If no result can be formed
            BootstrapCancelled: If the design's cancel token fires
        """
        ...
