"""
pyresampling: Monte Carlo simulation and bootstrap resampling for Python.

Draw samples from a known distribution, by resampling observed data,
or as a serially dependent parametric sequence; replicate an estimator
over them and summarize the replicate distribution into quantiles,
standard errors and confidence intervals.

Submodules:
    montecarlo: Samplers, replicate runs, summaries, intervals
    core: Result envelope, exceptions, validation, timing
"""

__version__ = "0.1.0"

from pyresampling import montecarlo
from pyresampling.montecarlo import (
    SamplerDesign,
    boot_ci,
    coverage,
    replicate,
    sample,
    summarize,
)

__all__ = [
    "__version__",
    "montecarlo",
    "SamplerDesign",
    "sample",
    "replicate",
    "summarize",
    "boot_ci",
    "coverage",
]
