"""
Tests for replicate runs.

Tests bootstrap (resample), correlated and true-distribution replicates
with scalar and vector estimators. Verifies replicate counts, seed
reproducibility, independent streams, bias/SE properties and error
propagation.
"""

import numpy as np
import pytest

from pyresampling.core.exceptions import (
    DimensionError,
    InvalidParameterError,
    ValidationError,
)
from pyresampling.core.protocols import Backend
from pyresampling.montecarlo import SamplerDesign, replicate
from pyresampling.montecarlo.backends.cpu import CPUReplicateBackend


# ---------------------------------------------------------------------------
# Estimators
# ---------------------------------------------------------------------------

def mean_var_stat(x):
    """Mean and variance (2 statistics)."""
    return np.array([np.mean(x), np.var(x, ddof=1)])


def regression_coef_stat(d):
    """Simple regression intercept and slope from paired rows."""
    x, y = d[:, 0], d[:, 1]
    x_bar, y_bar = np.mean(x), np.mean(y)
    slope = np.sum((x - x_bar) * (y - y_bar)) / np.sum((x - x_bar) ** 2)
    intercept = y_bar - slope * x_bar
    return np.array([intercept, slope])


# ---------------------------------------------------------------------------
# Tests: bootstrap replicates
# ---------------------------------------------------------------------------

class TestBootstrapReplicates:

    def test_basic_mean(self):
        data = np.arange(1.0, 11.0)
        result = replicate(999, SamplerDesign.for_resample(data), np.mean, rng=42)

        assert result.t0[0] == pytest.approx(5.5, rel=1e-10)
        assert result.t.shape == (999, 1)
        assert result.B == 999
        assert len(result) == 999
        assert abs(result.bias[0]) < 0.5
        # True SE of the mean = sd/sqrt(n) ~ 0.96
        assert 0.5 < result.se[0] < 1.5

    def test_multi_statistic(self):
        data = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        result = replicate(500, SamplerDesign.for_resample(data), mean_var_stat, rng=42)

        assert result.t0.shape == (2,)
        assert result.t.shape == (500, 2)
        assert result.t0[0] == pytest.approx(3.0)
        assert result.t0[1] == pytest.approx(2.5)

    def test_regression_bootstrap(self, paired_data):
        sampler = SamplerDesign.for_resample(paired_data)
        result = replicate(500, sampler, regression_coef_stat, rng=42)

        assert result.t0[0] == pytest.approx(2.0, abs=1.0)
        assert result.t0[1] == pytest.approx(3.0, abs=0.3)
        assert result.t.shape == (500, 2)

    def test_se_matches_analytic(self):
        data = np.arange(1.0, 101.0)
        result = replicate(5000, SamplerDesign.for_resample(data), np.mean, rng=42)

        # sd(data, ddof=0)/sqrt(n) = 28.87/10
        assert result.se[0] == pytest.approx(2.887, rel=0.1)

    def test_single_observation(self):
        result = replicate(100, SamplerDesign.for_resample([5.0]), np.mean, rng=42)
        np.testing.assert_allclose(result.t[:, 0], 5.0)
        assert result.se[0] == 0.0

    def test_bias_is_mean_minus_t0(self):
        data = np.array([1.0, 4.0, 9.0, 16.0])
        result = replicate(200, SamplerDesign.for_resample(data), np.median, rng=0)
        np.testing.assert_allclose(
            result.bias, np.mean(result.t, axis=0) - result.t0
        )


# ---------------------------------------------------------------------------
# Tests: replicate count and configuration
# ---------------------------------------------------------------------------

class TestReplicateCount:

    @pytest.mark.parametrize("B", [1, 2, 17, 250])
    def test_exactly_B_rows(self, B):
        sampler = SamplerDesign.for_correlated(10, 0.5)
        result = replicate(B, sampler, np.mean, rng=1)
        assert result.t.shape == (B, 1)
        assert result.B == B

    def test_single_replicate_se_nan(self):
        result = replicate(1, SamplerDesign.for_correlated(10, 0.5), np.mean, rng=1)
        assert np.isnan(result.se[0])

    @pytest.mark.parametrize("B", [0, -3])
    def test_B_below_one(self, B):
        with pytest.raises(InvalidParameterError) as exc_info:
            replicate(B, SamplerDesign.for_correlated(10, 0.5), np.mean)
        assert exc_info.value.parameter == 'B'

    def test_non_callable_estimator(self):
        with pytest.raises(ValidationError, match="callable"):
            replicate(10, SamplerDesign.for_correlated(10, 0.5), "mean")

    def test_sampler_must_be_design(self):
        with pytest.raises(ValidationError, match="SamplerDesign"):
            replicate(10, {'mode': 'correlated'}, np.mean)

    def test_no_t0_without_source(self):
        sampler = SamplerDesign.for_distribution('norm', 20)
        result = replicate(50, sampler, np.mean, rng=3)
        assert result.t0 is None
        assert result.bias is None
        assert result.mode == 'distribution'

    def test_every_sample_has_configured_size(self):
        sizes = []

        def size_stat(x):
            sizes.append(x.shape[0])
            return float(np.mean(x))

        replicate(30, SamplerDesign.for_correlated(13, 0.2), size_stat, rng=0)
        assert sizes == [13] * 30

    def test_replicates_read_only(self):
        result = replicate(5, SamplerDesign.for_correlated(3, 0.5), np.mean, rng=0)
        with pytest.raises(ValueError):
            result.t[0, 0] = 1.0


# ---------------------------------------------------------------------------
# Tests: random streams
# ---------------------------------------------------------------------------

class TestRandomStreams:

    def test_seed_reproducibility(self):
        sampler = SamplerDesign.for_resample(np.arange(1.0, 6.0))
        r1 = replicate(100, sampler, np.mean, rng=42)
        r2 = replicate(100, sampler, np.mean, rng=42)
        np.testing.assert_array_equal(r1.t, r2.t)
        np.testing.assert_array_equal(r1.se, r2.se)
        assert r1.seed == 42

    def test_different_seeds_differ(self):
        sampler = SamplerDesign.for_resample(np.arange(1.0, 6.0))
        r1 = replicate(100, sampler, np.mean, rng=42)
        r2 = replicate(100, sampler, np.mean, rng=99)
        assert not np.allclose(r1.t, r2.t)

    def test_generator_handle_is_consumed(self):
        """Passing the same Generator twice continues its stream."""
        sampler = SamplerDesign.for_correlated(5, 0.5)
        gen = np.random.default_rng(7)
        r1 = replicate(20, sampler, np.mean, rng=gen)
        r2 = replicate(20, sampler, np.mean, rng=gen)
        assert not np.array_equal(r1.t, r2.t)
        assert r1.seed is None

    def test_sequential_stream_matches_manual_loop(self):
        """Replicates consume one stream in order: replay by hand."""
        sampler = SamplerDesign.for_correlated(4, 0.0)
        result = replicate(3, sampler, np.mean, rng=11)

        gen = np.random.default_rng(11)
        manual = [np.mean(gen.uniform(-1.0, 1.0, size=4)) for _ in range(3)]
        np.testing.assert_allclose(result.t[:, 0], manual)

    def test_independent_streams_reproducible(self):
        sampler = SamplerDesign.for_correlated(20, 0.4)
        r1 = replicate(50, sampler, np.mean, rng=5, independent_streams=True)
        r2 = replicate(50, sampler, np.mean, rng=5, independent_streams=True)
        np.testing.assert_array_equal(r1.t, r2.t)
        assert r1.info['independent_streams'] is True

    def test_independent_streams_differ_from_sequential(self):
        sampler = SamplerDesign.for_correlated(20, 0.4)
        seq = replicate(50, sampler, np.mean, rng=5)
        ind = replicate(50, sampler, np.mean, rng=5, independent_streams=True)
        assert not np.array_equal(seq.t, ind.t)

    def test_independent_streams_statistics(self):
        """Per-replicate streams give the same sampling distribution."""
        sampler = SamplerDesign.for_distribution('norm', 25)
        result = replicate(2000, sampler, np.mean, rng=8, independent_streams=True)
        assert np.mean(result.t) == pytest.approx(0.0, abs=0.02)
        assert result.se[0] == pytest.approx(0.2, rel=0.08)


# ---------------------------------------------------------------------------
# Tests: estimator failures
# ---------------------------------------------------------------------------

class TestEstimatorFailure:

    def test_exception_propagates_unchanged(self):
        class Boom(Exception):
            pass

        calls = []

        def failing(x):
            calls.append(1)
            if len(calls) == 4:
                raise Boom("estimator failed on replicate 4")
            return np.mean(x)

        with pytest.raises(Boom, match="replicate 4"):
            replicate(10, SamplerDesign.for_correlated(5, 0.5), failing, rng=0)
        # Aborted, not retried
        assert len(calls) == 4

    def test_t0_failure_propagates(self):
        def bad(x):
            raise ZeroDivisionError("no")

        with pytest.raises(ZeroDivisionError):
            replicate(10, SamplerDesign.for_resample([1.0, 2.0]), bad, rng=0)

    def test_changing_output_length(self):
        calls = []

        def unstable(x):
            calls.append(1)
            return np.zeros(1 if len(calls) < 3 else 2)

        with pytest.raises(DimensionError, match="replicate 2"):
            replicate(10, SamplerDesign.for_resample([1.0, 2.0, 3.0]), unstable, rng=0)

    def test_matrix_output_rejected(self):
        with pytest.raises(DimensionError):
            replicate(3, SamplerDesign.for_correlated(4, 0.1),
                      lambda x: np.zeros((2, 2)), rng=0)


# ---------------------------------------------------------------------------
# Tests: backend and solution metadata
# ---------------------------------------------------------------------------

class TestBackend:

    def test_satisfies_protocol(self):
        assert isinstance(CPUReplicateBackend(), Backend)

    def test_result_metadata(self):
        sampler = SamplerDesign.for_resample(np.arange(10.0))
        result = replicate(20, sampler, np.mean, rng=1)
        assert result.backend_name == 'cpu_replicate'
        assert result.info['mode'] == 'resample'
        assert result.info['k'] == 1
        assert result.info['source_n'] == 10
        assert 'replicates' in result.timing
        assert 't0_computation' in result.timing
        assert result.warnings == ()

    def test_summary_output(self):
        sampler = SamplerDesign.for_resample(np.arange(10.0))
        text = replicate(20, sampler, mean_var_stat, rng=1).summary()
        assert "ORDINARY NONPARAMETRIC BOOTSTRAP" in text
        assert "t1*" in text and "t2*" in text
        assert "original" in text

    def test_summary_without_t0(self):
        text = replicate(20, SamplerDesign.for_correlated(5, 0.9), np.mean, rng=1).summary()
        assert "PARAMETRIC BOOTSTRAP" in text
        assert "mean" in text

    def test_repr(self):
        result = replicate(20, SamplerDesign.for_correlated(5, 0.9), np.mean, rng=1)
        assert repr(result) == (
            "ReplicateSolution(B=20, k=1, mode='correlated', backend='cpu_replicate')"
        )
