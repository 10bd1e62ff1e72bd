"""
CPU backend for replicate runs.

CPUReplicateBackend: draws B samples from a SamplerDesign, applies the
estimator to each, and collects the (B, k) replicate matrix.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from pyresampling.core.compute.timing import Timer
from pyresampling.core.exceptions import DimensionError
from pyresampling.core.result import Result
from pyresampling.core.validation import check_1d
from pyresampling.montecarlo._common import ReplicateParams
from pyresampling.montecarlo._samplers import draw
from pyresampling.montecarlo._summary import replicate_sd
from pyresampling.montecarlo.design import ReplicateDesign

logger = logging.getLogger(__name__)


def evaluate(estimator: Callable, sample: NDArray) -> NDArray:
    """Apply the estimator and coerce its output to a 1D float64 array."""
    value = np.atleast_1d(np.asarray(estimator(sample), dtype=np.float64))
    check_1d(value, "estimator output")
    return value


def spawn_generators(rng: np.random.Generator, B: int) -> list[np.random.Generator]:
    """B independent child generators derived from one draw of `rng`."""
    root = np.random.SeedSequence(int(rng.integers(0, 2**63 - 1)))
    return [np.random.default_rng(child) for child in root.spawn(B)]


class CPUReplicateBackend:
    """
    CPU backend for Monte Carlo and bootstrap replicates.

    Sampling mode is opaque here: every mode yields a Sample through the
    same draw() call. Errors raised by the estimator propagate unchanged
    and abort the run.
    """

    @property
    def name(self) -> str:
        return 'cpu_replicate'

    def solve(self, design: ReplicateDesign) -> Result[ReplicateParams]:
        """Run the replicates and return Result[ReplicateParams]."""
        timer = Timer()
        timer.start()

        sampler = design.sampler
        estimator = design.estimator
        B = design.B

        # Observed statistic only exists when there is a source sample
        t0 = None
        if sampler.mode == 'resample':
            with timer.section('t0_computation'):
                t0 = evaluate(estimator, sampler.data)

        if design.independent_streams:
            generators = spawn_generators(design.rng, B)
        else:
            generators = None

        logger.debug(
            "running %d replicates (mode=%s, n=%d, independent_streams=%s)",
            B, sampler.mode, sampler.n, design.independent_streams,
        )

        t: NDArray | None = None
        with timer.section('replicates'):
            for b in range(B):
                rng = generators[b] if generators is not None else design.rng
                value = evaluate(estimator, draw(sampler, rng))
                if t is None:
                    k = len(t0) if t0 is not None else len(value)
                    t = np.empty((B, k), dtype=np.float64)
                if value.shape[0] != t.shape[1]:
                    raise DimensionError(
                        f"estimator returned {value.shape[0]} values on "
                        f"replicate {b + 1}, expected {t.shape[1]}"
                    )
                t[b] = value

        with timer.section('summary_statistics'):
            se = replicate_sd(t)
            bias = np.mean(t, axis=0) - t0 if t0 is not None else None

        t.setflags(write=False)
        timer.stop()

        params = ReplicateParams(
            t=t,
            B=B,
            t0=t0,
            bias=bias,
            se=se,
            ci=None,
            ci_conf_level=None,
        )

        info = dict(sampler.info)
        info.update({
            'k': t.shape[1],
            'seed': design.seed,
            'independent_streams': design.independent_streams,
        })

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
