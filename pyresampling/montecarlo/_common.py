"""
Common data structures for Monte Carlo methods.

ReplicateParams, SummaryParams and CoverageParams are the parameter
payloads wrapped by Result[P] and exposed through Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import NDArray


SamplingMode = Literal['distribution', 'resample', 'correlated']
CIType = Literal['perc', 'basic', 'normal', 'bca']

SAMPLING_MODES: tuple[str, ...] = ('distribution', 'resample', 'correlated')
CI_TYPES: tuple[str, ...] = ('perc', 'basic', 'normal', 'bca')

DEFAULT_PROBS: tuple[float, ...] = (0.025, 0.975)
DEFAULT_CONF = 0.95
DEFAULT_QUANTILE_TYPE = 7

# Base interval and shift of the correlated sampler. With U(-1, 1) draws the
# stationary mean of the recursion is 0, so `location` is the process mean.
DEFAULT_CORRELATED_LOW = -1.0
DEFAULT_CORRELATED_HIGH = 1.0
DEFAULT_CORRELATED_LOCATION = 0.0


@dataclass(frozen=True)
class ReplicateParams:
    """
    Parameter payload for a replicate set.

    Mirrors R's boot object:
    - t: matrix of replicates (B rows, k columns)
    - t0: statistic on the source sample (resample mode only)
    - bias: mean(t) - t0, or None without t0
    - se: sd(t), NaN when B == 1
    - ci: confidence intervals (populated by boot_ci)
    """
    t: NDArray[np.floating[Any]]               # shape (B, k)
    B: int
    t0: NDArray[np.floating[Any]] | None       # shape (k,)
    bias: NDArray[np.floating[Any]] | None     # shape (k,)
    se: NDArray[np.floating[Any]]              # shape (k,)
    ci: dict[str, NDArray] | None = None       # keyed by CI type, (k, 2)
    ci_conf_level: float | None = None


@dataclass(frozen=True)
class SummaryParams:
    """
    Parameter payload for a replicate summary.

    - probs: probability levels, shape (m,)
    - quantiles: empirical quantiles, shape (m, k)
    - std_error: sample standard deviation of replicates, shape (k,)
    - mean: replicate mean, shape (k,)
    - bias: mean - t0 when t0 is known
    - n_used: replicates that entered the summary (finite rows)
    """
    probs: NDArray[np.floating[Any]]
    quantiles: NDArray[np.floating[Any]]
    std_error: NDArray[np.floating[Any]]
    mean: NDArray[np.floating[Any]]
    bias: NDArray[np.floating[Any]] | None
    n_used: int
    quantile_type: int


@dataclass(frozen=True)
class CoverageParams:
    """
    Parameter payload for a coverage study.

    - intervals: one CI per outer trial, shape (n_trials, 2)
    - hits: whether each interval contains the true value, shape (n_trials,)
    - coverage: hits.mean()
    """
    truth: float
    intervals: NDArray[np.floating[Any]]
    hits: NDArray[np.bool_]
    coverage: float
    n_trials: int
    B: int
    conf_level: float
    ci_type: str
