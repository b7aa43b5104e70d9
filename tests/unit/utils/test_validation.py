"""Tests for input validation and parallel helpers."""

import numpy as np
import pytest
import scipy.sparse as ssp

from pcalab.utils.data import (
    to_numpy_array,
    as_2d_float_array,
    check_nonnegative,
    check_positive,
    check_random_state,
)
from pcalab.utils.parallel import parallel_executor, delayed


class TestChecks:
    """Test numeric parameter validators."""

    def test_check_positive_accepts_valid(self):
        """Positive values and None pass silently."""
        check_positive(N=10, step=0.02, maxoutdim=None)

    @pytest.mark.parametrize("value", [0, -1, -0.5])
    def test_check_positive_rejects_nonpositive(self, value):
        """Zero and negative values raise with the parameter name."""
        with pytest.raises(ValueError, match="N must be positive"):
            check_positive(N=value)

    def test_check_nonnegative_accepts_zero(self):
        """Zero is a valid non-negative value."""
        check_nonnegative(noise_std=0, horizon=0.0)

    def test_check_nonnegative_rejects_negative(self):
        """Negative values raise with the parameter name and value."""
        with pytest.raises(ValueError, match="noise_std must be non-negative, got -0.1"):
            check_nonnegative(noise_std=-0.1)

    def test_nan_and_inf_rejected(self):
        """NaN and infinite values are rejected."""
        with pytest.raises(ValueError, match="cannot be NaN"):
            check_positive(x=np.nan)
        with pytest.raises(ValueError, match="cannot be infinite"):
            check_nonnegative(x=np.inf)

    def test_non_numeric_raises_type_error(self):
        """Non-numeric input is a TypeError, not a ValueError."""
        with pytest.raises(TypeError, match="x must be numeric"):
            check_positive(x="ten")


class TestArrays:
    """Test array conversion helpers."""

    def test_to_numpy_array_sparse(self):
        """Sparse matrices are densified."""
        sparse = ssp.csr_matrix(np.eye(3))
        np.testing.assert_array_equal(to_numpy_array(sparse), np.eye(3))

    def test_as_2d_promotes_vector(self):
        """A 1D input becomes a single column."""
        arr = as_2d_float_array([1, 2, 3])
        assert arr.shape == (3, 1)
        assert arr.dtype == float

    def test_as_2d_rejects_nonfinite(self):
        """NaN values are rejected."""
        with pytest.raises(ValueError, match="NaN or infinite"):
            as_2d_float_array([[1.0, np.nan]])

    def test_as_2d_rejects_3d(self):
        """Arrays with more than 2 dimensions are rejected."""
        with pytest.raises(ValueError, match="2D"):
            as_2d_float_array(np.zeros((2, 2, 2)))

    def test_check_random_state_reuses_instance(self):
        """An existing RandomState is passed through, not copied."""
        rs = np.random.RandomState(0)
        assert check_random_state(rs) is rs


class TestParallel:
    """Test the joblib executor wrapper."""

    def test_threading_executor_preserves_order(self):
        """Results come back in submission order."""
        with parallel_executor(n_jobs=2, backend="threading") as parallel:
            results = parallel(delayed(pow)(i, 2) for i in range(6))
        assert results == [0, 1, 4, 9, 16, 25]
