"""
Exception hierarchy for pyinar.

All exceptions inherit from PyINARError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - A +inf negative log-likelihood is a value, not an exception
"""


class PyINARError(Exception):
    """Base exception for all pyinar errors."""
    pass


class ValidationError(PyINARError):
    """
    Input validation failed.

    Raised eagerly, before any estimation or simulation has happened,
    so no partial result is ever produced.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a count sequence is not 1D, or a coefficient vector does
    not match the model order.
    """
    pass


class NumericalError(PyINARError):
    """
    Numerical computation failed.

    Raised only when no result can be formed at all, e.g. when every
    bootstrap replicate is non-finite and invalid replicates are excluded.

    Attributes:
        n_invalid: Number of offending replicates, if applicable
    """

    def __init__(self, message: str, n_invalid: int | None = None):
        super().__init__(message)
        self.n_invalid = n_invalid


class ConvergenceError(PyINARError):
    """
    An optimizer used by an estimator failed outright.

    Attributes:
        iterations: Number of iterations completed
        reason: Optimizer status message
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason


class BootstrapCancelled(PyINARError):
    """
    Bootstrap loop stopped by its cancel token.

    Attributes:
        completed: Number of replicates finished before cancellation
        total: Number of replicates requested
    """

    def __init__(self, message: str, completed: int, total: int):
        super().__init__(message)
        self.completed = completed
        self.total = total
