"""
Solution wrapper for INAR bootstrap results.

BootstrapSolution wraps Result[INARBootParams] and provides convenient
accessors and the fixed-width interval table printed by summary().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyinar.core.result import Result
from pyinar.bootstrap._common import INARBootParams

if TYPE_CHECKING:
    from pyinar.bootstrap.design import BootstrapDesign

_ELEMENTS = ("x_star", "parameters_star", "bs_ci_percentile", "bs_ci_hall")


@dataclass
class BootstrapSolution:
    """
    User-facing INAR bootstrap results.

    Holds the simulated sequences, the replicate estimates and the two
    interval tables. Interval matrices have shape (2, K'): row 0 is the
    lower bound, row 1 the upper bound, column j belongs to column j of
    parameters_star.
    """
    _result: Result[INARBootParams]
    _design: 'BootstrapDesign'

    # --- Core fields ---

    @property
    def x_star(self) -> NDArray[np.floating[Any]]:
        """Simulated sequences, shape (n, B)."""
        return self._result.params.x_star

    @property
    def parameters_star(self) -> NDArray[np.floating[Any]]:
        """Replicate estimates with all-zero columns dropped, shape (B, K')."""
        return self._result.params.parameters_star

    @property
    def bs_ci_percentile(self) -> NDArray[np.floating[Any]]:
        """Percentile intervals, shape (2, K')."""
        return self._result.params.bs_ci_percentile

    @property
    def bs_ci_hall(self) -> NDArray[np.floating[Any]]:
        """Hall's percentile intervals, shape (2, K')."""
        return self._result.params.bs_ci_hall

    @property
    def theta_hat(self) -> NDArray[np.floating[Any]]:
        """Estimate on the observed data, aligned to parameters_star."""
        return self._result.params.theta_hat

    @property
    def kept_columns(self) -> NDArray[np.intp]:
        """Column indices of parameters_star before trimming."""
        return self._result.params.kept_columns

    @property
    def valid(self) -> NDArray[np.bool_]:
        """Replicates used for the intervals."""
        return self._result.params.valid

    @property
    def level(self) -> float:
        return self._result.params.level

    @property
    def B(self) -> int:
        """Number of bootstrap replicates."""
        return self._result.params.B

    @property
    def n(self) -> int:
        """Length of the observed sequence."""
        return self.x_star.shape[0]

    @property
    def elements(self) -> tuple[str, ...]:
        """Names of the populated result fields."""
        return tuple(e for e in _ELEMENTS if getattr(self, e) is not None)

    # --- Metadata ---

    @property
    def setting(self) -> str:
        return self._design.setting

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """
        Interval table.

        Produces:
            INAR bootstrap object (B=50, n=200) with element(s)
            "x_star", "parameters_star", "bs_ci_percentile", "bs_ci_hall"

            Hall's Bootstrap Percentile Confidence Intervals for Parameters:
                        1      2
            lower: 0.3912 0.4501
            upper: 0.5873 0.5731

            Bootstrap Percentile Confidence Intervals for Parameters:
                        1      2
            lower: 0.4127 0.4269
            upper: 0.6088 0.5499
        """
        k = self.bs_ci_percentile.shape[1]
        any_neg = [
            int(np.any(self.bs_ci_hall[:, j] < 0)
                or np.any(self.bs_ci_percentile[:, j] < 0))
            for j in range(k)
        ]

        header = " " * 6 + "".join(
            " " * (7 - len(str(j + 1)) + any_neg[j]) + str(j + 1)
            for j in range(k)
        )

        def row(label: str, values: NDArray) -> str:
            cells = []
            for j, value in enumerate(values):
                text = f"{value:.4f}"
                cells.append(" " * max(0, 6 + any_neg[j] - len(text)) + text + " ")
            return f"{label}: " + "".join(cells)

        elements = ", ".join(f'"{e}"' for e in self.elements)
        lines = [
            f"INAR bootstrap object (B={self.B}, n={self.n}) with element(s)",
            elements,
            "",
            "Hall's Bootstrap Percentile Confidence Intervals for Parameters:",
            header,
            row("lower", self.bs_ci_hall[0]),
            row("upper", self.bs_ci_hall[1]),
            "",
            "Bootstrap Percentile Confidence Intervals for Parameters:",
            header,
            row("lower", self.bs_ci_percentile[0]),
            row("upper", self.bs_ci_percentile[1]),
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BootstrapSolution(B={self.B}, n={self.n}, "
            f"k={self.parameters_star.shape[1]}, setting={self.setting!r}, "
            f"backend={self.backend_name!r})"
        )
