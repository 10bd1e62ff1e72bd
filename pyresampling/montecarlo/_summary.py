"""
Summaries of replicate sets.

Turns a finalized (B, k) replicate matrix into empirical quantiles,
standard error, mean and bias. Pure function of its inputs: repeated
calls on the same replicates give bit-identical results.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.compute.timing import Timer
from pyresampling.core.exceptions import DimensionError, InsufficientReplicatesError
from pyresampling.core.result import Result
from pyresampling.montecarlo._common import SummaryParams
from pyresampling.montecarlo._quantile import sample_quantile

logger = logging.getLogger(__name__)


def replicate_sd(t: NDArray) -> NDArray:
    """Column standard deviations with ddof=1; NaN when fewer than 2 rows."""
    if t.shape[0] < 2:
        return np.full(t.shape[1], np.nan)
    return np.std(t, axis=0, ddof=1)


def drop_nonfinite(t: NDArray) -> tuple[NDArray, int]:
    """Remove replicate rows with any NaN/Inf. Returns (rows, n_dropped)."""
    keep = np.all(np.isfinite(t), axis=1)
    n_dropped = int(t.shape[0] - keep.sum())
    if n_dropped:
        return t[keep], n_dropped
    return t, 0


def summarize_replicates(
    t: NDArray,
    probs: NDArray,
    quantile_type: int,
    t0: NDArray | None = None,
) -> Result[SummaryParams]:
    """
    Summarize a replicate matrix.

    Args:
        t: Replicates, shape (B, k).
        probs: Validated probability levels, shape (m,).
        quantile_type: Hyndman-Fan type 1-9.
        t0: Observed statistic, shape (k,), for the bias estimate.

    Returns:
        Result[SummaryParams]

    Raises:
        InsufficientReplicatesError: If t has no rows, or no finite rows.
        DimensionError: If t0 does not match the statistic length.
    """
    timer = Timer()
    timer.start()
    warnings_list: list[str] = []

    if t.ndim != 2:
        raise DimensionError(f"replicates must be 2D (B, k), got shape {t.shape}")
    if t.shape[0] == 0:
        raise InsufficientReplicatesError(
            "cannot summarize an empty replicate set", n_replicates=0
        )

    with timer.section('filter'):
        used, n_dropped = drop_nonfinite(t)
    if n_dropped:
        msg = (
            f"{n_dropped} of {t.shape[0]} replicates contain non-finite "
            f"values and were dropped"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=3)
        warnings_list.append(msg)
    B = used.shape[0]
    if B == 0:
        raise InsufficientReplicatesError(
            "no finite replicates left to summarize", n_replicates=0
        )

    # Levels outside [1/(B+1), B/(B+1)] fall back on the extreme order
    # statistics, as R's boot.ci warns.
    lo, hi = 1.0 / (B + 1), B / (B + 1.0)
    if np.any((probs < lo) | (probs > hi)):
        msg = (
            f"extreme order statistics used as endpoints: probabilities "
            f"outside [{lo:.4g}, {hi:.4g}] for B={B}"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=3)
        warnings_list.append(msg)

    with timer.section('quantiles'):
        quantiles = sample_quantile(used, probs, quantile_type)

    with timer.section('moments'):
        mean = np.mean(used, axis=0)
        se = replicate_sd(used)
        bias = None
        if t0 is not None:
            if t0.shape != mean.shape:
                raise DimensionError(
                    f"t0 has shape {t0.shape}, expected {mean.shape}"
                )
            bias = mean - t0

    timer.stop()
    logger.debug(
        "summarized %d replicates (k=%d) at %d probability levels",
        B, used.shape[1], len(probs),
    )

    params = SummaryParams(
        probs=probs,
        quantiles=quantiles,
        std_error=se,
        mean=mean,
        bias=bias,
        n_used=B,
        quantile_type=quantile_type,
    )

    return Result(
        params=params,
        info={
            'B': t.shape[0],
            'n_used': B,
            'n_dropped': n_dropped,
            'k': used.shape[1],
            'quantile_type': quantile_type,
        },
        timing=timer.result(),
        backend_name='cpu_summary',
        warnings=tuple(warnings_list),
    )
