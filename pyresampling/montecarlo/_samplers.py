"""
Sample generators for the three sampling modes.

Each generator takes a SamplerDesign and an explicit numpy Generator and
returns one fresh, read-only Sample. No generator touches global random
state.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyresampling.montecarlo.design import SamplerDesign


def draw(design: SamplerDesign, rng: np.random.Generator) -> NDArray:
    """Draw one Sample according to design.mode."""
    if design.mode == 'distribution':
        out = _draw_distribution(design, rng)
    elif design.mode == 'resample':
        out = _draw_resample(design, rng)
    elif design.mode == 'correlated':
        out = _draw_correlated(design, rng)
    else:
        raise ValueError(f"Unknown sampling mode: {design.mode!r}")

    out.setflags(write=False)
    return out


def resample_indices(design: SamplerDesign, rng: np.random.Generator) -> NDArray:
    """Row indices of one i.i.d. (optionally stratified) resample."""
    m = design.data.shape[0]
    if design.strata is None:
        return rng.choice(m, size=design.n, replace=True)

    # Stratum codes cover every row, so each index is assigned exactly once.
    _, codes = np.unique(design.strata, return_inverse=True)
    codes = codes.reshape(m)
    indices = np.empty(m, dtype=np.intp)
    for code in range(codes.max() + 1):
        s_indices = np.flatnonzero(codes == code)
        indices[s_indices] = rng.choice(s_indices, size=len(s_indices), replace=True)
    return indices


def _draw_distribution(design: SamplerDesign, rng: np.random.Generator) -> NDArray:
    """n draws; multivariate distributions give shape (n, p)."""
    values = design.distribution.rvs(size=design.n, random_state=rng)
    out = np.asarray(values, dtype=np.float64).reshape(design.n, -1)
    return out[:, 0].copy() if out.shape[1] == 1 else out


def _draw_resample(design: SamplerDesign, rng: np.random.Generator) -> NDArray:
    # Fancy indexing copies, so the read-only source is never aliased.
    return design.data[resample_indices(design, rng)]


def _draw_correlated(design: SamplerDesign, rng: np.random.Generator) -> NDArray:
    """
    AR(1)-style sequence built from convex combinations of uniform draws.

    rho = 0 returns the uniform draws themselves; rho = 1 repeats the
    first draw.
    """
    n, rho = design.n, design.rho
    fresh = rng.uniform(design.low, design.high, size=n)
    x = np.empty(n, dtype=np.float64)
    x[0] = fresh[0]
    for i in range(1, n):
        x[i] = rho * x[i - 1] + (1.0 - rho) * fresh[i]
    return x + design.location
