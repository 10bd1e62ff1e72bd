"""
Design classes for Monte Carlo methods.

SamplerDesign and ReplicateDesign encapsulate all inputs needed by
backends to draw samples and run replicates. Immutable, validated at
construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pyresampling.core.exceptions import (
    DimensionError,
    InvalidParameterError,
    ValidationError,
)
from pyresampling.core.validation import (
    check_array,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_positive_int,
    check_unit_interval,
)
from pyresampling.montecarlo._common import (
    DEFAULT_CORRELATED_HIGH,
    DEFAULT_CORRELATED_LOCATION,
    DEFAULT_CORRELATED_LOW,
    SAMPLING_MODES,
    SamplingMode,
)


RandomState = np.random.Generator | int | None


def _resolve_distribution(distribution, params: Mapping[str, Any] | None):
    """Turn a scipy.stats name or frozen distribution into a frozen rv."""
    params = dict(params or {})
    if isinstance(distribution, str):
        family = getattr(sp_stats, distribution, None)
        if not isinstance(family, (sp_stats.rv_continuous, sp_stats.rv_discrete)):
            raise InvalidParameterError(
                f"unknown scipy.stats distribution: {distribution!r}",
                parameter='distribution',
                value=distribution,
            )
        try:
            return family(**params)
        except TypeError as e:
            raise InvalidParameterError(
                f"invalid parameters for {distribution!r}: {e}",
                parameter='params',
                value=params,
            ) from e

    if params:
        raise ValidationError(
            "distribution parameters can only be given together with a "
            "distribution name; freeze the distribution instead"
        )
    if not callable(getattr(distribution, 'rvs', None)):
        raise ValidationError(
            "distribution must be a scipy.stats name or an object with an "
            f"rvs(size, random_state) method, got {type(distribution).__name__}"
        )
    return distribution


@dataclass(frozen=True)
class SamplerDesign:
    """
    Frozen description of how one Sample is drawn.

    A tagged variant over the sampling strategy: `mode` selects which of
    the remaining fields are meaningful.

    Attributes:
        mode: 'distribution', 'resample' or 'correlated'.
        n: Size of each drawn sample.
        distribution: Frozen scipy.stats distribution ('distribution' mode).
        data: Source sample, shape (m,) or (m, p) ('resample' mode).
        strata: Optional stratum labels of length m ('resample' mode).
        rho: Dependence coefficient in [0, 1] ('correlated' mode).
        location: Shift applied to the whole sequence ('correlated' mode).
        low, high: Base interval of the uniform draws ('correlated' mode).
    """
    mode: SamplingMode
    n: int
    distribution: Any = None
    data: NDArray[np.floating[Any]] | None = None
    strata: NDArray | None = None
    rho: float | None = None
    location: float = DEFAULT_CORRELATED_LOCATION
    low: float = DEFAULT_CORRELATED_LOW
    high: float = DEFAULT_CORRELATED_HIGH

    @classmethod
    def for_distribution(
        cls,
        distribution,
        n: int,
        params: Mapping[str, Any] | None = None,
    ) -> SamplerDesign:
        """
        Sample n independent draws from a known distribution.

        Args:
            distribution: scipy.stats distribution name (e.g. 'norm') or a
                frozen distribution such as sp_stats.norm(loc=2, scale=3).
            n: Sample size. Must be >= 1.
            params: Keyword arguments used to freeze a named distribution.

        Raises:
            InvalidParameterError: If n < 1 or the name is unknown.
        """
        n = check_positive_int(n, 'n')
        frozen = _resolve_distribution(distribution, params)
        return cls(mode='distribution', n=n, distribution=frozen)

    @classmethod
    def for_resample(
        cls,
        data: ArrayLike,
        n: int | None = None,
        *,
        strata: ArrayLike | None = None,
    ) -> SamplerDesign:
        """
        Resample rows of `data` uniformly with replacement.

        Args:
            data: Source sample, 1D or 2D (rows are observations).
            n: Sample size. Defaults to the number of source rows.
            strata: Stratum label per source row. When given, rows are
                resampled within each stratum and n must equal the
                source size.

        Raises:
            InvalidParameterError: If n < 1, or n differs from the source
                size under stratification.
            DimensionError: If data is not 1D/2D or strata length differs.
            ValidationError: If data is empty or non-numeric, or float
                strata labels contain NaN or Inf.
        """
        data_arr = check_array(data, 'data').copy()
        if data_arr.ndim not in (1, 2):
            raise DimensionError(
                f"data must be 1D or 2D, got {data_arr.ndim}D"
            )
        check_min_samples(data_arr, 1, 'data')
        m = data_arr.shape[0]

        n = m if n is None else check_positive_int(n, 'n')

        strata_arr = None
        if strata is not None:
            strata_arr = np.asarray(strata).copy()
            if strata_arr.ndim != 1 or strata_arr.shape[0] != m:
                raise DimensionError(
                    f"strata length ({strata_arr.shape[0] if strata_arr.ndim else 0}) "
                    f"must match data rows ({m})"
                )
            if strata_arr.dtype.kind in 'fc':
                check_finite(strata_arr, 'strata')
            if n != m:
                raise InvalidParameterError(
                    f"stratified resampling requires n == {m} (data rows), got {n}",
                    parameter='n',
                    value=n,
                )
            strata_arr.setflags(write=False)

        data_arr.setflags(write=False)
        return cls(mode='resample', n=n, data=data_arr, strata=strata_arr)

    @classmethod
    def for_correlated(
        cls,
        n: int,
        rho: float,
        *,
        location: float = DEFAULT_CORRELATED_LOCATION,
        low: float = DEFAULT_CORRELATED_LOW,
        high: float = DEFAULT_CORRELATED_HIGH,
    ) -> SamplerDesign:
        """
        Serially dependent sequence for a parametric bootstrap.

        x[0] ~ U(low, high), x[i] = rho * x[i-1] + (1 - rho) * U(low, high),
        then every element is shifted by `location`.

        Raises:
            InvalidParameterError: If n < 1, rho is outside [0, 1],
                location, low or high is not a finite number, or
                low >= high.
        """
        n = check_positive_int(n, 'n')
        rho = check_unit_interval(rho, 'rho')
        low = check_finite_scalar(low, 'low')
        high = check_finite_scalar(high, 'high')
        location = check_finite_scalar(location, 'location')
        if not low < high:
            raise InvalidParameterError(
                f"base interval must satisfy low < high, got ({low}, {high})",
                parameter='low',
                value=(low, high),
            )
        return cls(
            mode='correlated',
            n=n,
            rho=rho,
            location=location,
            low=low,
            high=high,
        )

    @classmethod
    def build(
        cls,
        mode: str,
        n: int | None,
        params: Mapping[str, Any] | None = None,
    ) -> SamplerDesign:
        """
        Build a design from a mode tag and a flat parameter mapping.

        Parameter keys by mode:
            distribution: 'distribution' (name or frozen), plus any keyword
                arguments for freezing a named distribution.
            resample: 'data', optional 'strata'.
            correlated: 'rho', optional 'location', 'low', 'high'.
        """
        params = dict(params or {})

        if mode == 'distribution':
            if 'distribution' not in params:
                raise ValidationError(
                    "distribution mode requires a 'distribution' parameter"
                )
            distribution = params.pop('distribution')
            return cls.for_distribution(distribution, n, params)

        if mode == 'resample':
            _check_keys(params, required={'data'}, optional={'strata'})
            return cls.for_resample(params['data'], n, strata=params.get('strata'))

        if mode == 'correlated':
            _check_keys(
                params,
                required={'rho'},
                optional={'location', 'low', 'high'},
            )
            rho = params.pop('rho')
            return cls.for_correlated(n, rho, **params)

        raise InvalidParameterError(
            f"mode must be one of {', '.join(repr(m) for m in SAMPLING_MODES)}, "
            f"got {mode!r}",
            parameter='mode',
            value=mode,
        )

    @property
    def info(self) -> dict[str, Any]:
        """Metadata describing this sampler, recorded in results."""
        info: dict[str, Any] = {'mode': self.mode, 'n': self.n}
        if self.mode == 'distribution':
            dist = getattr(self.distribution, 'dist', None)
            info['distribution'] = getattr(dist, 'name', repr(self.distribution))
        elif self.mode == 'resample':
            info['source_n'] = self.data.shape[0]
            info['stratified'] = self.strata is not None
        else:
            info['rho'] = self.rho
            info['location'] = self.location
        return info


def _check_keys(params: dict, required: set[str], optional: set[str]) -> None:
    missing = required - params.keys()
    if missing:
        raise ValidationError(f"missing parameter(s): {sorted(missing)}")
    unknown = params.keys() - required - optional
    if unknown:
        raise InvalidParameterError(
            f"unknown parameter(s): {sorted(unknown)}",
            parameter=sorted(unknown)[0],
            value=None,
        )


@dataclass(frozen=True)
class ReplicateDesign:
    """
    Frozen design for a replicate run.

    Attributes:
        sampler: How each replicate's sample is drawn.
        estimator: fn(sample) -> scalar or 1D array of fixed length.
        B: Number of replicates.
        rng: Generator consumed sequentially across replicates, or used
            once to seed the per-replicate child streams.
        independent_streams: Spawn one child generator per replicate.
        seed: Integer seed when one was given, for reproducibility records.
    """
    sampler: SamplerDesign
    estimator: Callable
    B: int
    rng: np.random.Generator
    independent_streams: bool
    seed: int | None

    @classmethod
    def for_replicate(
        cls,
        B: int,
        sampler: SamplerDesign,
        estimator: Callable,
        *,
        rng: RandomState = None,
        independent_streams: bool = False,
    ) -> ReplicateDesign:
        """
        Create a replicate design with validation.

        Args:
            B: Number of replicates. Must be >= 1.
            sampler: A SamplerDesign.
            estimator: Callable applied to each drawn sample.
            rng: numpy Generator, integer seed, or None (fresh entropy).
            independent_streams: Use per-replicate child streams.

        Raises:
            InvalidParameterError: If B < 1.
            ValidationError: If sampler or estimator have the wrong type.
        """
        B = check_positive_int(B, 'B')
        if not isinstance(sampler, SamplerDesign):
            raise ValidationError(
                f"sampler must be a SamplerDesign, got {type(sampler).__name__}"
            )
        if not callable(estimator):
            raise ValidationError(
                f"estimator must be callable, got {type(estimator).__name__}"
            )

        seed = None
        if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
            seed = int(rng)

        return cls(
            sampler=sampler,
            estimator=estimator,
            B=B,
            rng=np.random.default_rng(rng),
            independent_streams=bool(independent_streams),
            seed=seed,
        )
