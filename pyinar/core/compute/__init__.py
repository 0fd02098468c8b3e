"""
Shared compute infrastructure for pyinar.

Domain-specific backends live in {domain}/backends/. This module only
holds numeric infrastructure that every domain can use.

Submodules:
    timing: Execution timing utilities
"""

from pyinar.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
