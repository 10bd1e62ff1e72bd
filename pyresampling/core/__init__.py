"""
Core infrastructure for pyresampling.

Shared abstractions and utilities used by the domain submodules.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing utilities
"""

from pyresampling.core.protocols import Backend
from pyresampling.core.result import Result
from pyresampling.core.exceptions import (
    PyResamplingError,
    ValidationError,
    DimensionError,
    InvalidParameterError,
    InsufficientReplicatesError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyResamplingError",
    "ValidationError",
    "DimensionError",
    "InvalidParameterError",
    "InsufficientReplicatesError",
]
