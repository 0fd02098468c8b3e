"""
INAR(p) simulation.

Usage:
    from pyinar.simulation import simulate

    x = simulate(200, 1, [0.5], [0.3, 0.3, 0.2, 0.1, 0.1], seed=1)
"""

from pyinar.simulation.solvers import simulate

__all__ = [
    "simulate",
]
