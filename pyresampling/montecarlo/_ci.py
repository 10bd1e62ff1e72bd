"""
Bootstrap confidence interval computation.

Four of the methods of R's boot.ci():
- perc: percentile method
- basic: basic (pivotal) bootstrap interval
- normal: bias-corrected normal approximation
- bca: bias-corrected and accelerated
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyresampling.core.exceptions import ValidationError
from pyresampling.montecarlo._quantile import sample_quantile
from pyresampling.montecarlo._summary import replicate_sd

if TYPE_CHECKING:
    from pyresampling.montecarlo.solution import ReplicateSolution

logger = logging.getLogger(__name__)


def compute_ci(
    boot_out: 'ReplicateSolution',
    types: list[str],
    conf_level: float,
    quantile_type: int = 7,
) -> dict[str, NDArray]:
    """
    Compute bootstrap confidence intervals.

    Args:
        boot_out: Replicate set, finite rows only.
        types: List of CI types to compute.
        conf_level: Confidence level (e.g., 0.95).
        quantile_type: Quantile definition for the percentile-based types.

    Returns:
        Dict mapping CI type name to NDArray of shape (k, 2).

    Raises:
        ValidationError: If a type's prerequisites are missing (t0 for
            basic/normal/bca, a source sample for bca).
    """
    t0 = boot_out.t0
    t = boot_out.t
    alpha = 1.0 - conf_level

    ci_dict: dict[str, NDArray] = {}

    for ci_type in types:
        if ci_type in ("basic", "normal", "bca") and t0 is None:
            raise ValidationError(
                f"{ci_type!r} intervals need the observed statistic t0, "
                f"which only resample-mode replicates carry"
            )
        if ci_type == "perc":
            ci_dict["perc"] = _ci_percentile(t, alpha, quantile_type)
        elif ci_type == "basic":
            ci_dict["basic"] = _ci_basic(t0, t, alpha, quantile_type)
        elif ci_type == "normal":
            ci_dict["normal"] = _ci_normal(t0, t, alpha)
        elif ci_type == "bca":
            ci_dict["bca"] = _ci_bca(boot_out, alpha, quantile_type)
        else:
            raise ValidationError(f"Unknown CI type: {ci_type!r}")

    logger.debug("computed %s intervals at conf=%g", ", ".join(types), conf_level)
    return ci_dict


def _tail_probs(alpha: float) -> NDArray:
    return np.array([alpha / 2.0, 1.0 - alpha / 2.0])


def _ci_percentile(t: NDArray, alpha: float, qtype: int) -> NDArray:
    """
    Percentile bootstrap CI.

    CI = [Q(alpha/2), Q(1-alpha/2)]
    """
    return sample_quantile(t, _tail_probs(alpha), qtype).T.copy()


def _ci_basic(t0: NDArray, t: NDArray, alpha: float, qtype: int) -> NDArray:
    """
    Basic (pivotal) bootstrap CI.

    CI = [2*t0 - Q(1-alpha/2), 2*t0 - Q(alpha/2)]

    Note: upper quantile of bootstrap gives lower bound.
    """
    q = sample_quantile(t, _tail_probs(alpha), qtype)
    return np.column_stack([2.0 * t0 - q[1], 2.0 * t0 - q[0]])


def _ci_normal(t0: NDArray, t: NDArray, alpha: float) -> NDArray:
    """
    Normal approximation CI with bias correction.

    Centered at 2*t0 - mean(t), not at t0.
    """
    z = sp_stats.norm.ppf(1.0 - alpha / 2.0)
    center = 2.0 * t0 - np.mean(t, axis=0)
    se = replicate_sd(t)
    return np.column_stack([center - z * se, center + z * se])


def _ci_bca(boot_out: 'ReplicateSolution', alpha: float, qtype: int) -> NDArray:
    """
    BCa (bias-corrected and accelerated) CI.

    1. z0 = Phi^{-1}(proportion of t* < t0)
    2. a = sum(L^3) / (6 * sum(L^2)^1.5) from jackknife influence values
    3. Adjusted quantile levels
    4. CI from adjusted percentiles
    """
    from pyresampling.montecarlo._influence import jackknife_influence

    data = boot_out.data
    if data is None or data.shape[0] < 2:
        raise ValidationError(
            "'bca' intervals need a source sample with at least 2 rows"
        )

    t0 = boot_out.t0
    t = boot_out.t
    k = len(t0)
    R = t.shape[0]
    ci = np.empty((k, 2), dtype=np.float64)
    z_lo, z_hi = sp_stats.norm.ppf(_tail_probs(alpha))

    for j in range(k):
        t_j = t[:, j]

        prop_below = np.sum(t_j < t0[j]) / R
        # Clamp to avoid infinite z0
        prop_below = np.clip(prop_below, 1.0 / (2.0 * R), 1.0 - 1.0 / (2.0 * R))
        z0 = sp_stats.norm.ppf(prop_below)

        L = jackknife_influence(data, boot_out.estimator, j)
        L_sq_sum = np.sum(L ** 2)
        if L_sq_sum > 0:
            a = np.sum(L ** 3) / (6.0 * L_sq_sum ** 1.5)
        else:
            warnings.warn(
                f"jackknife influence values of statistic {j + 1} are all "
                f"zero; using acceleration a=0",
                RuntimeWarning,
                stacklevel=4,
            )
            a = 0.0

        levels = np.empty(2)
        for i, z_alpha in enumerate((z_lo, z_hi)):
            numer = z0 + z_alpha
            denom = 1.0 - a * numer
            if abs(denom) < 1e-15:
                levels[i] = 0.5  # degenerate case
            else:
                levels[i] = sp_stats.norm.cdf(z0 + numer / denom)

        levels = np.clip(levels, 0.5 / R, 1.0 - 0.5 / R)
        ci[j] = sample_quantile(t_j, levels, qtype)

    return ci
