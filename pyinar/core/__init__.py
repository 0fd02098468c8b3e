"""
Core infrastructure for pyinar.

Shared abstractions and utilities used by all domain-specific
submodules (likelihood, simulation, estimation, bootstrap).

Key components:
    protocols: Estimator, Simulator, observer and backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing
"""

from pyinar.core.protocols import (
    Backend,
    CancelToken,
    Estimator,
    ProgressObserver,
    Simulator,
)
from pyinar.core.result import Result
from pyinar.core.exceptions import (
    PyINARError,
    ValidationError,
    DimensionError,
    NumericalError,
    ConvergenceError,
    BootstrapCancelled,
)

__all__ = [
    # Protocols
    "Backend",
    "CancelToken",
    "Estimator",
    "ProgressObserver",
    "Simulator",
    # Result
    "Result",
    # Exceptions
    "PyINARError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "ConvergenceError",
    "BootstrapCancelled",
]
