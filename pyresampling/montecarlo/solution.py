"""
Solution wrappers for Monte Carlo results.

ReplicateSolution, SummarySolution and CoverageSolution wrap Result[P]
and provide convenient accessors and R-style summary output.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.result import Result
from pyresampling.montecarlo._common import (
    CoverageParams,
    ReplicateParams,
    SummaryParams,
)
from pyresampling.montecarlo._summary import replicate_sd

if TYPE_CHECKING:
    from pyresampling.montecarlo.design import ReplicateDesign, SamplerDesign


@dataclass
class ReplicateSolution:
    """
    User-facing replicate set.

    Matches R's boot object output: t0, t, bias, SE, plus CI if computed.
    summary() produces R's print.boot format. `_design` is None when the
    replicates were supplied as a plain array.
    """
    _result: Result[ReplicateParams]
    _design: 'ReplicateDesign | None'

    @classmethod
    def from_array(
        cls,
        t: NDArray,
        t0: NDArray | None = None,
    ) -> ReplicateSolution:
        """Wrap an externally produced (B, k) replicate matrix."""
        t = np.array(t, dtype=np.float64)
        t.setflags(write=False)
        bias = None
        # Raw replicates may hold NaN/Inf; summaries filter those later.
        with np.errstate(invalid='ignore', over='ignore'):
            if t0 is not None and t.shape[0] > 0:
                bias = np.mean(t, axis=0) - t0
            se = replicate_sd(t)
        params = ReplicateParams(
            t=t,
            B=t.shape[0],
            t0=t0,
            bias=bias,
            se=se,
        )
        result = Result(
            params=params,
            info={'mode': None, 'k': t.shape[1]},
            timing=None,
            backend_name='external',
        )
        return cls(_result=result, _design=None)

    def with_ci(self, ci: dict[str, NDArray], conf_level: float) -> ReplicateSolution:
        """Copy of this solution with confidence intervals attached."""
        params = replace(self._result.params, ci=ci, ci_conf_level=conf_level)
        return ReplicateSolution(
            _result=replace(self._result, params=params),
            _design=self._design,
        )

    # --- Core replicate fields ---

    @property
    def t0(self) -> NDArray[np.floating[Any]] | None:
        """Statistic on the source sample, shape (k,), or None."""
        return self._result.params.t0

    @property
    def t(self) -> NDArray[np.floating[Any]]:
        """Replicates, shape (B, k). Read-only."""
        return self._result.params.t

    @property
    def B(self) -> int:
        """Number of replicates."""
        return self._result.params.B

    @property
    def bias(self) -> NDArray[np.floating[Any]] | None:
        """Bootstrap bias estimate: mean(t) - t0, shape (k,)."""
        return self._result.params.bias

    @property
    def se(self) -> NDArray[np.floating[Any]]:
        """Standard error: sd(t) with ddof=1, shape (k,)."""
        return self._result.params.se

    @property
    def ci(self) -> dict[str, NDArray] | None:
        """Confidence intervals keyed by type, or None if not computed."""
        return self._result.params.ci

    @property
    def ci_conf_level(self) -> float | None:
        return self._result.params.ci_conf_level

    # --- Metadata ---

    @property
    def sampler(self) -> 'SamplerDesign | None':
        return self._design.sampler if self._design is not None else None

    @property
    def mode(self) -> str | None:
        """Sampling mode, or None for externally supplied replicates."""
        sampler = self.sampler
        return sampler.mode if sampler is not None else None

    @property
    def data(self) -> NDArray | None:
        """Source sample (resample mode only)."""
        sampler = self.sampler
        return sampler.data if sampler is not None else None

    @property
    def estimator(self) -> Callable | None:
        return self._design.estimator if self._design is not None else None

    @property
    def seed(self) -> int | None:
        """Integer seed used, if one was given."""
        return self._design.seed if self._design is not None else None

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __len__(self) -> int:
        return self.B

    # --- Display ---

    def summary(self) -> str:
        """
        R-style print.boot output.

        Produces:
            ORDINARY NONPARAMETRIC BOOTSTRAP

            Bootstrap Statistics :
                original       bias    std. error
            t1*  5.12345    0.01234     0.56789
        """
        lines = []

        title = {
            "resample": "ORDINARY NONPARAMETRIC BOOTSTRAP",
            "correlated": "PARAMETRIC BOOTSTRAP (CORRELATED)",
            "distribution": "MONTE CARLO SIMULATION",
        }.get(self.mode, "REPLICATES")
        lines.append(f"\n{title}\n")

        lines.append(f"Call: replicate(B={self.B}, mode={self.mode!r})")
        lines.append("")
        lines.append("Replicate Statistics :")

        k = self.t.shape[1]
        if self.t0 is not None:
            lines.append(
                f"{'':>8s} {'original':>14s} {'bias':>14s} {'std. error':>14s}"
            )
            for i in range(k):
                label = f"t{i+1}*"
                lines.append(
                    f"{label:>8s} {self.t0[i]:14.5f} {self.bias[i]:14.5f} "
                    f"{self.se[i]:14.5f}"
                )
        else:
            lines.append(f"{'':>8s} {'mean':>14s} {'std. error':>14s}")
            means = np.mean(self.t, axis=0) if self.B else np.full(k, np.nan)
            for i in range(k):
                label = f"t{i+1}*"
                lines.append(
                    f"{label:>8s} {means[i]:14.5f} {self.se[i]:14.5f}"
                )

        if self.ci is not None:
            lines.append("")
            conf_pct = round((self.ci_conf_level or 0.95) * 100, 2)
            for ci_type, ci_vals in self.ci.items():
                lines.append(f"{conf_pct:g}% {ci_type} CI:")
                for i in range(k):
                    label = f"t{i+1}*"
                    lines.append(
                        f"  {label}: ({ci_vals[i, 0]:.5f}, "
                        f"{ci_vals[i, 1]:.5f})"
                    )

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ReplicateSolution(B={self.B}, k={self.t.shape[1]}, "
            f"mode={self.mode!r}, backend={self.backend_name!r})"
        )


@dataclass
class SummarySolution:
    """
    User-facing summary of a replicate set.

    Quantiles are indexed (probability level, statistic).
    """
    _result: Result[SummaryParams]

    @property
    def probs(self) -> NDArray[np.floating[Any]]:
        return self._result.params.probs

    @property
    def quantiles(self) -> NDArray[np.floating[Any]]:
        """Empirical quantiles, shape (len(probs), k)."""
        return self._result.params.quantiles

    @property
    def std_error(self) -> NDArray[np.floating[Any]]:
        """Sample standard deviation of the replicates, shape (k,)."""
        return self._result.params.std_error

    @property
    def mean(self) -> NDArray[np.floating[Any]]:
        return self._result.params.mean

    @property
    def bias(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.bias

    @property
    def n_used(self) -> int:
        """Replicates that entered the summary after dropping non-finite rows."""
        return self._result.params.n_used

    @property
    def quantile_type(self) -> int:
        return self._result.params.quantile_type

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def as_dict(self) -> dict[str, NDArray]:
        """{'quantiles': ..., 'std_error': ...}"""
        return {'quantiles': self.quantiles, 'std_error': self.std_error}

    def summary(self) -> str:
        k = self.quantiles.shape[1]
        header = f"{'':>8s} " + " ".join(
            f"{p * 100:>11.4g}%" for p in self.probs
        ) + f" {'std. error':>12s}"
        lines = [
            "\nREPLICATE SUMMARY",
            "",
            f"Replicates used: {self.n_used} (quantile type {self.quantile_type})",
            "",
            header,
        ]
        for i in range(k):
            label = f"t{i+1}*"
            cells = " ".join(f"{q:12.5f}" for q in self.quantiles[:, i])
            lines.append(f"{label:>8s} {cells} {self.std_error[i]:12.5f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SummarySolution(n_used={self.n_used}, "
            f"probs={self.probs.tolist()}, k={self.quantiles.shape[1]})"
        )


@dataclass
class CoverageSolution:
    """
    Outcome of a coverage study: how often the bootstrap interval
    contained the true value over repeated outer trials.
    """
    _result: Result[CoverageParams]

    @property
    def coverage(self) -> float:
        return self._result.params.coverage

    @property
    def hits(self) -> NDArray[np.bool_]:
        return self._result.params.hits

    @property
    def intervals(self) -> NDArray[np.floating[Any]]:
        """Intervals per trial, shape (n_trials, 2)."""
        return self._result.params.intervals

    @property
    def truth(self) -> float:
        return self._result.params.truth

    @property
    def n_trials(self) -> int:
        return self._result.params.n_trials

    @property
    def B(self) -> int:
        return self._result.params.B

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def ci_type(self) -> str:
        return self._result.params.ci_type

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    def summary(self) -> str:
        mean_width = float(np.mean(self.intervals[:, 1] - self.intervals[:, 0]))
        lines = [
            "\nBOOTSTRAP COVERAGE STUDY",
            "",
            f"Trials: {self.n_trials}, replicates per trial: {self.B}",
            f"Interval: {self.ci_type}, nominal level {self.conf_level:g}",
            f"True value: {self.truth:.6g}",
            f"Empirical coverage: {self.coverage:.4f}",
            f"Mean interval width: {mean_width:.6g}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CoverageSolution(coverage={self.coverage:.4g}, "
            f"n_trials={self.n_trials}, conf={self.conf_level:g})"
        )
