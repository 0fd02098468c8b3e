"""Backends for the INAR bootstrap."""

from pyinar.bootstrap.backends.cpu import CPUBootstrapBackend

__all__ = [
    "CPUBootstrapBackend",
]
