"""
pyresampling Monte Carlo methods.

Provides sampling (true distribution, bootstrap resample, correlated
parametric sequence), replicate runs, replicate summaries, bootstrap
confidence intervals (matching R's boot package) and coverage studies.

Usage:
    from pyresampling.montecarlo import SamplerDesign, replicate, summarize

    sampler = SamplerDesign.for_resample(data)
    result = replicate(999, sampler, np.mean, rng=42)
    summary = summarize(result, [0.025, 0.975])
    ci_result = boot_ci(result, type=["perc", "bca"])
"""

from pyresampling.montecarlo.design import ReplicateDesign, SamplerDesign
from pyresampling.montecarlo.solution import (
    CoverageSolution,
    ReplicateSolution,
    SummarySolution,
)
from pyresampling.montecarlo.solvers import (
    boot_ci,
    coverage,
    replicate,
    sample,
    summarize,
)

__all__ = [
    "SamplerDesign",
    "ReplicateDesign",
    "ReplicateSolution",
    "SummarySolution",
    "CoverageSolution",
    "sample",
    "replicate",
    "summarize",
    "boot_ci",
    "coverage",
]
