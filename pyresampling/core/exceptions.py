"""
Exception hierarchy for pyresampling.

All exceptions inherit from PyResamplingError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Errors raised by user-supplied estimators are never wrapped
"""

from __future__ import annotations

from typing import Any


class PyResamplingError(Exception):
    """Base exception for all pyresampling errors."""
    pass


class ValidationError(PyResamplingError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when
    multiple arrays have inconsistent shapes, or when an estimator
    changes its output length between replicates.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A scalar parameter is out of its admissible range.

    Attributes:
        parameter: Name of the offending parameter (e.g. 'n', 'rho', 'B')
        value: The value that was rejected
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class InsufficientReplicatesError(ValidationError):
    """
    Not enough replicates to summarize.

    Raised when a replicate set is empty, or when no finite replicate
    remains after non-finite rows are dropped.

    Attributes:
        n_replicates: Number of usable replicates found
    """

    def __init__(self, message: str, n_replicates: int = 0):
        super().__init__(message)
        self.n_replicates = n_replicates
