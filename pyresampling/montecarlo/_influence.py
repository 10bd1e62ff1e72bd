"""
Jackknife influence values for BCa confidence intervals.

Leave-one-out estimates of the statistic on the source sample, used to
estimate the BCa acceleration parameter.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from pyresampling.montecarlo.backends.cpu import evaluate


def jackknife_influence(
    data: NDArray,
    estimator: Callable,
    stat_index: int = 0,
) -> NDArray:
    """
    Compute delete-1 jackknife influence values.

        L_i = (n-1) * (theta_bar - theta_{-i})

    where theta_{-i} is the statistic on data with row i removed and
    theta_bar is the mean of the leave-one-out estimates.

    Args:
        data: Source sample, shape (n,) or (n, p).
        estimator: The replicate estimator.
        stat_index: Which element of the statistic vector to use.

    Returns:
        Influence values, shape (n,).
    """
    n = data.shape[0]
    jack_stats = np.empty(n, dtype=np.float64)

    for i in range(n):
        loo_data = np.delete(data, i, axis=0)
        loo_data.setflags(write=False)
        jack_stats[i] = evaluate(estimator, loo_data)[stat_index]

    mean_jack = np.mean(jack_stats)
    return (n - 1) * (mean_jack - jack_stats)
