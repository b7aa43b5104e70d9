"""Configuration for tests.

This module provides shared fixtures for the pcalab test suite. Fixtures use
the library's own generators so that tests exercise the same data the
experiments do.
"""

import os
import pytest
import numpy as np

from pcalab.synthetic import (
    TOY_MIXING_MATRIX,
    generate_mixture,
    generate_rotated_mixture,
    generate_electrode_signals,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


@pytest.fixture(scope="session")
def test_mode():
    """Determine if we're in fast test mode based on environment variable."""
    return os.environ.get("PCALAB_FAST_TESTS", "").lower() in ("1", "true", "yes")


@pytest.fixture
def spike_params(test_mode):
    """Spike train parameters, shortened in fast mode."""
    if test_mode:
        return {"horizon": 100, "step": 0.02, "rate_n": 20, "noise_std": 1e-2}
    return {"horizon": 300, "step": 0.02, "rate_n": 60, "noise_std": 1e-2}


@pytest.fixture
def toy_mixture():
    """The 2D -> 3D toy example.

    Returns
    -------
    hidden : ndarray of shape (500, 2)
    observed : ndarray of shape (500, 3)
    """
    return generate_mixture(seed=17, N=500, per_dimension_scales=[1.5, 0.5],
                            mixing_matrix=TOY_MIXING_MATRIX)


@pytest.fixture
def rotated_mixture():
    """Rotated 3D data with distinct variances along each hidden axis."""
    return generate_rotated_mixture(seed=241)


@pytest.fixture
def electrode_data(spike_params):
    """Two neuron traces and their three-electrode mixture."""
    return generate_electrode_signals(seed=3, **spike_params)


@pytest.fixture
def anisotropic_data():
    """3D Gaussian data with standard deviations 3, 1 and 0.1."""
    rs = np.random.RandomState(0)
    return rs.randn(200, 3) * np.array([3.0, 1.0, 0.1])
