"""
Generic result container for all pyresampling computations.

The Result class provides a standardized envelope that all domain-specific
results use. Domains define their own parameter payloads; timing, metadata,
warnings and provenance travel in the same shape everywhere.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (mode, n, k, seed)
    - timing is optional (don't burden unit tests)
    - provenance records library versions for reproducibility
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library and interpreter versions at the time the result was built."""
    import numpy
    import scipy

    from pyresampling import __version__

    return {
        'pyresampling_version': __version__,
        'numpy_version': numpy.__version__,
        'scipy_version': scipy.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (replicates, summaries, ...)
        info: Structured metadata (mode, sample size, statistic length)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Versions of pyresampling, numpy, scipy and Python

    Examples:
        >>> Result(
        ...     params=ReplicateParams(t=t, B=999, t0=None, bias=None, se=se),
        ...     info={'mode': 'correlated', 'n': 50, 'k': 1},
        ...     timing={'total_seconds': 0.2, 'replicates': 0.19},
        ...     backend_name='cpu_replicate'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
