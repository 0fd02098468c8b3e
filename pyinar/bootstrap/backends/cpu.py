"""
CPU backend for the INAR bootstrap.

CPUBootstrapBackend runs B simulate-then-estimate replicates from the
baseline fit and builds percentile and Hall intervals from them.

Replicate b draws from child b of SeedSequence(seed) and writes only to
x_star[:, b] and parameters_star[b, :], so the sequential loop and the
thread-pool map produce identical results.
"""

from __future__ import annotations

import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyinar.core.compute.timing import Timer
from pyinar.core.exceptions import BootstrapCancelled, NumericalError
from pyinar.core.result import Result
from pyinar.bootstrap._ci import hall_ci, percentile_ci, trim_zero_columns
from pyinar.bootstrap._common import INARBootParams
from pyinar.bootstrap.design import BootstrapDesign
from pyinar.likelihood.innovations import resolve_family


def _widen(matrix: NDArray, width: int) -> NDArray:
    """Zero-pad the columns of matrix up to width."""
    if matrix.shape[-1] >= width:
        return matrix
    pad = [(0, 0)] * (matrix.ndim - 1) + [(0, width - matrix.shape[-1])]
    return np.pad(matrix, pad)


class CPUBootstrapBackend:
    """
    CPU backend for the semiparametric and parametric INAR bootstrap.
    """

    @property
    def name(self) -> str:
        return 'cpu_replicates'

    def solve(self, design: BootstrapDesign) -> Result[INARBootParams]:
        """Run the bootstrap and return Result[INARBootParams]."""
        timer = Timer()
        timer.start()

        n, p, B = design.n, design.p, design.B
        warnings_list: list[str] = []

        with timer.section('baseline_estimate'):
            theta_hat = design.fit(design.x)
        alpha_hat = theta_hat[:p]
        pmf = self._innovation_pmf(design, theta_hat[p:])

        x_star = np.full((n, B), np.nan)
        parameters_star = np.zeros((B, max(p + design.M + 1, theta_hat.shape[0])))
        widths = np.zeros(B, dtype=np.intp)

        with timer.section('replicates'):
            seeds = np.random.SeedSequence(design.seed).spawn(B)
            completed = 0
            for b, replicate in self._replicates(design, alpha_hat, pmf, seeds):
                if replicate is None:
                    raise BootstrapCancelled(
                        f"bootstrap cancelled after {completed} of {B} replicates",
                        completed=completed,
                        total=B,
                    )
                sequence, estimate = replicate
                x_star[:, b] = sequence
                parameters_star = _widen(parameters_star, estimate.shape[0])
                parameters_star[b, :estimate.shape[0]] = estimate
                widths[b] = estimate.shape[0]
                completed += 1
                if design.progress is not None:
                    design.progress(completed, B)

        with timer.section('confidence_intervals'):
            trimmed, kept = trim_zero_columns(parameters_star)
            theta_kept = _widen(theta_hat, parameters_star.shape[1])[kept]

            suspicious = np.setdiff1d(np.arange(widths.max()), kept)
            if suspicious.size > 0:
                msg = (
                    f"parameter column(s) {suspicious.tolist()} are zero in every "
                    f"replicate and were dropped as padding"
                )
                warnings.warn(msg, RuntimeWarning, stacklevel=3)
                warnings_list.append(msg)

            valid = np.all(np.isfinite(trimmed), axis=1)
            n_invalid = int(B - valid.sum())
            if n_invalid > 0:
                action = (
                    "excluded from the intervals" if design.on_invalid == 'exclude'
                    else "kept in the intervals"
                )
                msg = f"{n_invalid} of {B} replicates are non-finite and were {action}"
                warnings.warn(msg, RuntimeWarning, stacklevel=3)
                warnings_list.append(msg)

            if design.on_invalid == 'exclude':
                if not valid.any():
                    raise NumericalError(
                        f"all {B} bootstrap replicates are non-finite",
                        n_invalid=n_invalid,
                    )
                used = trimmed[valid]
            else:
                valid = np.ones(B, dtype=bool)
                used = trimmed

            ci_percentile = percentile_ci(used, design.level)
            ci_hall = hall_ci(used, theta_kept, design.level)

        timer.stop()

        params = INARBootParams(
            x_star=x_star,
            parameters_star=trimmed,
            bs_ci_percentile=ci_percentile,
            bs_ci_hall=ci_hall,
            theta_hat=theta_kept,
            kept_columns=kept,
            valid=valid,
            level=design.level,
            B=B,
        )

        return Result(
            params=params,
            info={
                'setting': design.setting,
                'type': None if design.semiparametric else design.type,
                'family': None if design.semiparametric else design.family,
                'n': n,
                'p': p,
                'B': B,
                'M': design.M,
                'n_params': self._arity(design),
                'n_invalid': n_invalid,
                'n_jobs': design.n_jobs,
                'theta_hat': theta_hat,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _innovation_pmf(
        self,
        design: BootstrapDesign,
        innovation_params: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """Innovation pmf the replicates are simulated from."""
        if design.semiparametric:
            return innovation_params
        family_cls = resolve_family(design.family)
        return family_cls.from_params(innovation_params).truncated_pmf(design.M)

    def _arity(self, design: BootstrapDesign) -> int | None:
        """Parameter count of the model; None when it depends on the data."""
        if design.semiparametric:
            return None
        return design.p + resolve_family(design.family).n_params

    def _replicates(self, design, alpha_hat, pmf, seeds):
        """Yield (b, (sequence, estimate) or None if cancelled) in index order."""
        if design.n_jobs == 1:
            for b in range(design.B):
                yield b, self._replicate(design, alpha_hat, pmf, seeds[b])
            return

        with ThreadPoolExecutor(max_workers=design.n_jobs) as executor:
            futures = [
                executor.submit(self._replicate, design, alpha_hat, pmf, seeds[b])
                for b in range(design.B)
            ]
            try:
                for b, future in enumerate(futures):
                    yield b, future.result()
            finally:
                for future in futures:
                    future.cancel()

    def _replicate(self, design, alpha_hat, pmf, seed):
        """One simulate-then-estimate cycle; None when cancelled."""
        if design.cancel is not None and design.cancel.is_set():
            return None
        sequence = np.asarray(
            design.simulator(design.n, design.p, alpha_hat, pmf, seed=seed),
            dtype=np.float64,
        )
        if design.cancel is not None and design.cancel.is_set():
            return None
        return sequence, design.fit(sequence)
