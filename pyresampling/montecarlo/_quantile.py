"""
Empirical quantiles of replicate sets.

The nine Hyndman & Fan (1996) sample quantile definitions, addressed by
their R type number and computed through numpy's named methods. Type 7
(linear interpolation between order statistics) is the default.

Reference:
    Hyndman, R.J. and Fan, Y. (1996) "Sample Quantiles in Statistical
    Packages", The American Statistician, 50(4), 361-365.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.exceptions import InvalidParameterError


QUANTILE_METHODS: dict[int, str] = {
    1: 'inverted_cdf',
    2: 'averaged_inverted_cdf',
    3: 'closest_observation',
    4: 'interpolated_inverted_cdf',
    5: 'hazen',
    6: 'weibull',
    7: 'linear',
    8: 'median_unbiased',
    9: 'normal_unbiased',
}


def check_quantile_type(qtype) -> int:
    """Return qtype as an int, or raise InvalidParameterError if not 1-9."""
    if (
        isinstance(qtype, bool)
        or not isinstance(qtype, (int, np.integer))
        or qtype not in QUANTILE_METHODS
    ):
        raise InvalidParameterError(
            f"quantile_type must be 1-9, got {qtype!r}",
            parameter='quantile_type',
            value=qtype,
        )
    return int(qtype)


def sample_quantile(t: NDArray, probs: NDArray, qtype: int = 7) -> NDArray:
    """
    Column-wise sample quantiles.

    Parameters
    ----------
    t : NDArray
        Replicates, shape (B,) or (B, k), no NaN values.
    probs : NDArray
        1D array of probabilities in [0, 1].
    qtype : int
        Hyndman-Fan type 1-9.

    Returns
    -------
    NDArray
        Shape (len(probs),) for 1D input, (len(probs), k) for 2D input.
    """
    method = QUANTILE_METHODS[check_quantile_type(qtype)]
    return np.quantile(t, probs, axis=0, method=method)
