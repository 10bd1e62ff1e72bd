"""
Shared compute infrastructure for pyresampling.

Domain-specific backends live in {domain}/backends/; this module only
holds numeric helpers shared across them.

Submodules:
    timing: Execution timing utilities
"""

from pyresampling.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
