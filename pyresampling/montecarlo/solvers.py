"""
Solver dispatch for Monte Carlo methods.

Provides sample() for single draws, replicate() for B repetitions of
sample-then-estimate, summarize() and boot_ci() for the replicate
distribution, and coverage() for repeated-trial interval checks.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyresampling.core.compute.timing import timed
from pyresampling.core.exceptions import (
    DimensionError,
    InsufficientReplicatesError,
    InvalidParameterError,
    ValidationError,
)
from pyresampling.core.result import Result
from pyresampling.core.validation import (
    check_array,
    check_finite_scalar,
    check_positive_int,
    check_probability,
)
from pyresampling.montecarlo._ci import compute_ci
from pyresampling.montecarlo._common import (
    CI_TYPES,
    DEFAULT_CONF,
    DEFAULT_PROBS,
    DEFAULT_QUANTILE_TYPE,
    CIType,
    CoverageParams,
    SamplingMode,
)
from pyresampling.montecarlo._quantile import check_quantile_type
from pyresampling.montecarlo._samplers import draw
from pyresampling.montecarlo._summary import drop_nonfinite, summarize_replicates
from pyresampling.montecarlo.backends.cpu import CPUReplicateBackend
from pyresampling.montecarlo.design import RandomState, ReplicateDesign, SamplerDesign
from pyresampling.montecarlo.solution import (
    CoverageSolution,
    ReplicateSolution,
    SummarySolution,
)

logger = logging.getLogger(__name__)


def _as_replicates(replicate_set) -> ReplicateSolution:
    """Accept a ReplicateSolution or a raw (B,) / (B, k) array."""
    if isinstance(replicate_set, ReplicateSolution):
        return replicate_set
    t = check_array(replicate_set, 'replicate_set')
    if t.ndim == 1:
        t = t.reshape(-1, 1)
    elif t.ndim != 2:
        raise DimensionError(
            f"replicate_set must be 1D or 2D, got {t.ndim}D with shape {t.shape}"
        )
    return ReplicateSolution.from_array(t)


def _check_conf(conf: float) -> float:
    try:
        c = float(conf)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"conf must be a number in (0, 1), got {conf!r}",
            parameter='conf',
            value=conf,
        ) from e
    if not (0.0 < c < 1.0):
        raise InvalidParameterError(
            f"conf must be in (0, 1), got {conf}",
            parameter='conf',
            value=conf,
        )
    return c


def _check_ci_types(type: CIType | Sequence[CIType]) -> list[str]:
    types = [type] if isinstance(type, str) else list(type)
    if not types:
        raise ValidationError("at least one CI type is required")
    for t in types:
        if t not in CI_TYPES:
            raise InvalidParameterError(
                f"type must be one of {', '.join(repr(c) for c in CI_TYPES)}, "
                f"got {t!r}",
                parameter='type',
                value=t,
            )
    return types


def sample(
    mode: SamplingMode | SamplerDesign,
    n: int | None = None,
    params: Mapping[str, Any] | None = None,
    *,
    rng: RandomState = None,
) -> NDArray:
    """
    Draw one sample.

    Parameters
    ----------
    mode : str or SamplerDesign
        'distribution', 'resample' or 'correlated', or a ready design (in
        which case n and params must be omitted).
    n : int
        Sample size. Optional in resample mode (defaults to source size).
    params : mapping
        Mode parameters; see SamplerDesign.build().
    rng : Generator, int or None
        Random generator handle or seed.

    Returns
    -------
    Read-only float64 array of shape (n,) or (n, p).

    Examples
    --------
    >>> sample('correlated', 10, {'rho': 0.5, 'location': 3.0}, rng=1)
    >>> sample('resample', params={'data': x}, rng=gen)
    >>> sample('distribution', 100, {'distribution': 'norm'}, rng=42)
    """
    if isinstance(mode, SamplerDesign):
        if n is not None or params is not None:
            raise ValidationError(
                "n and params must be omitted when a SamplerDesign is given"
            )
        design = mode
    else:
        design = SamplerDesign.build(mode, n, params)
    return draw(design, np.random.default_rng(rng))


def replicate(
    B: int,
    sampler: SamplerDesign,
    estimator: Callable,
    *,
    rng: RandomState = None,
    independent_streams: bool = False,
) -> ReplicateSolution:
    """
    Run B independent repetitions of sample-then-estimate.

    Parameters
    ----------
    B : int
        Number of replicates, >= 1.
    sampler : SamplerDesign
        Identical sampling configuration for every replicate.
    estimator : callable
        fn(sample) -> scalar or 1D array of fixed length k. Exceptions it
        raises abort the run and propagate unchanged.
    rng : Generator, int or None
        Random generator handle or seed. A seed gives deterministic replay.
    independent_streams : bool
        Give every replicate its own child stream spawned from one
        SeedSequence instead of consuming rng sequentially.

    Returns
    -------
    ReplicateSolution with t of shape (B, k). In resample mode t0, bias
    are populated from the source sample.

    Examples
    --------
    >>> s = SamplerDesign.for_resample(x)
    >>> result = replicate(999, s, np.mean, rng=42)
    >>> result.se
    """
    design = ReplicateDesign.for_replicate(
        B,
        sampler,
        estimator,
        rng=rng,
        independent_streams=independent_streams,
    )
    result = CPUReplicateBackend().solve(design)
    return ReplicateSolution(_result=result, _design=design)


def summarize(
    replicate_set: ReplicateSolution | ArrayLike,
    probs: ArrayLike = DEFAULT_PROBS,
    *,
    quantile_type: int = DEFAULT_QUANTILE_TYPE,
) -> SummarySolution:
    """
    Empirical quantiles and standard error of a replicate set.

    Parameters
    ----------
    replicate_set : ReplicateSolution or array-like
        Replicates, shape (B,) or (B, k).
    probs : array-like
        Probability levels in [0, 1]. Default (0.025, 0.975).
    quantile_type : int
        Hyndman-Fan type 1-9. Default 7 (linear interpolation).

    Returns
    -------
    SummarySolution with quantiles of shape (len(probs), k) and
    std_error of shape (k,).

    Raises
    ------
    InvalidParameterError
        If a probability is outside [0, 1] or quantile_type is not 1-9.
    InsufficientReplicatesError
        If the replicate set is empty or has no finite rows.
    """
    probs_arr = check_probability(probs, 'probs')
    quantile_type = check_quantile_type(quantile_type)
    replicates = _as_replicates(replicate_set)

    result = summarize_replicates(
        replicates.t,
        probs_arr,
        quantile_type,
        t0=replicates.t0,
    )
    return SummarySolution(_result=result)


def boot_ci(
    replicate_set: ReplicateSolution | ArrayLike,
    *,
    conf: float = DEFAULT_CONF,
    type: CIType | Sequence[CIType] = "perc",
    quantile_type: int = DEFAULT_QUANTILE_TYPE,
) -> ReplicateSolution:
    """
    Bootstrap confidence intervals.

    Parameters
    ----------
    replicate_set : ReplicateSolution or array-like
        Replicates. Raw arrays only support 'perc'.
    conf : float
        Confidence level in (0, 1).
    type : str or list of str
        'perc', 'basic', 'normal', 'bca'. basic/normal need t0 (resample
        mode); bca additionally re-evaluates the estimator on jackknife
        subsamples of the source.
    quantile_type : int
        Quantile definition for the percentile-based intervals.

    Returns
    -------
    New ReplicateSolution with ci populated, each entry shape (k, 2).
    """
    conf = _check_conf(conf)
    types = _check_ci_types(type)
    quantile_type = check_quantile_type(quantile_type)
    replicates = _as_replicates(replicate_set)

    if replicates.B == 0:
        raise InsufficientReplicatesError(
            "cannot compute intervals from an empty replicate set",
            n_replicates=0,
        )

    used, n_dropped = drop_nonfinite(replicates.t)
    if n_dropped:
        warnings.warn(
            f"{n_dropped} of {replicates.B} replicates contain non-finite "
            f"values and were dropped",
            RuntimeWarning,
            stacklevel=2,
        )
        if used.shape[0] == 0:
            raise InsufficientReplicatesError(
                "no finite replicates left for intervals", n_replicates=0
            )
        params = replace(replicates._result.params, t=used, B=used.shape[0])
        working = ReplicateSolution(
            _result=replace(replicates._result, params=params),
            _design=replicates._design,
        )
    else:
        working = replicates

    ci = compute_ci(working, types, conf, quantile_type)
    return replicates.with_ci(ci, conf)


def coverage(
    truth: float,
    sampler: SamplerDesign,
    estimator: Callable,
    *,
    B: int = 999,
    n_trials: int = 100,
    conf: float = DEFAULT_CONF,
    type: CIType = "perc",
    quantile_type: int = DEFAULT_QUANTILE_TYPE,
    rng: RandomState = None,
) -> CoverageSolution:
    """
    Estimate the actual coverage of a bootstrap interval.

    Each outer trial draws a fresh data set from `sampler`, bootstraps
    the estimator on it B times, builds the interval and records whether
    it contains `truth`. One generator drives all trials, so a seed makes
    the whole study reproducible.

    Parameters
    ----------
    truth : float
        True value of the estimated parameter under `sampler`.
    sampler : SamplerDesign
        Data-generating process for each trial (any mode).
    estimator : callable
        Scalar estimator fn(sample) -> float.
    B : int
        Bootstrap replicates per trial.
    n_trials : int
        Number of outer trials.
    conf, type, quantile_type
        Passed to the interval computation.
    rng : Generator, int or None
        Random generator handle or seed.

    Returns
    -------
    CoverageSolution

    Raises
    ------
    DimensionError
        If the estimator is not scalar.
    ValidationError
        If truth is not a finite number.
    """
    truth = check_finite_scalar(truth, "truth")
    n_trials = check_positive_int(n_trials, 'n_trials')
    B = check_positive_int(B, 'B')
    conf = _check_conf(conf)
    if not isinstance(type, str):
        raise ValidationError("coverage() takes a single CI type")
    (ci_type,) = _check_ci_types(type)
    quantile_type = check_quantile_type(quantile_type)
    if not isinstance(sampler, SamplerDesign):
        raise ValidationError(
            f"sampler must be a SamplerDesign, got {sampler.__class__.__name__}"
        )

    gen = np.random.default_rng(rng)
    backend = CPUReplicateBackend()
    intervals = np.empty((n_trials, 2), dtype=np.float64)

    with timed() as timer:
        for trial in range(n_trials):
            with timer.section('data_generation'):
                data = draw(sampler, gen)
            with timer.section('bootstrap'):
                design = ReplicateDesign.for_replicate(
                    B, SamplerDesign.for_resample(data), estimator, rng=gen,
                )
                boot_out = ReplicateSolution(
                    _result=backend.solve(design), _design=design,
                )
            if boot_out.t.shape[1] != 1:
                raise DimensionError(
                    f"coverage() needs a scalar estimator, got {boot_out.t.shape[1]} values"
                )
            with timer.section('intervals'):
                intervals[trial] = compute_ci(
                    boot_out, [ci_type], conf, quantile_type,
                )[ci_type][0]

        hits = (intervals[:, 0] <= truth) & (truth <= intervals[:, 1])

    rate = float(np.mean(hits))
    logger.debug(
        "coverage study: %d/%d intervals contain %g (conf=%g, type=%s)",
        int(hits.sum()), n_trials, truth, conf, ci_type,
    )

    params = CoverageParams(
        truth=truth,
        intervals=intervals,
        hits=hits,
        coverage=rate,
        n_trials=n_trials,
        B=B,
        conf_level=conf,
        ci_type=ci_type,
    )
    result = Result(
        params=params,
        info=dict(sampler.info),
        timing=timer.result(),
        backend_name='cpu_coverage',
    )
    return CoverageSolution(_result=result)
