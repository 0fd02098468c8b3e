"""
Generic result container for all pyinar computations.

Every domain wraps its own parameter payload in the same envelope, so
timing, warnings and metadata are reported the same way everywhere.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (setting, family, replicate counts)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (estimates, intervals, etc.)
        info: Structured metadata (setting, family, n, B, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=INARBootParams(...),
        ...     info={'setting': 'parametric', 'B': 50},
        ...     timing={'total_seconds': 1.2, 'replicates': 1.1},
        ...     backend_name='cpu_replicates'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
