"""
Small synthetic datasets used by the denoising, clustering and regression
examples.
"""

import numpy as np
from sklearn.preprocessing import StandardScaler

from ..utils.data import check_nonnegative, check_positive, check_random_state


def waveform_time_grid(t_max=8.0, dt=0.1):
    """Sampling times ``0, dt, ..., <= t_max``."""
    check_nonnegative(t_max=t_max)
    check_positive(dt=dt)
    return np.arange(int(np.floor(t_max / dt + 1e-9)) + 1) * dt


def clean_waveforms(labels, t):
    """Noise-free curves: ``sin(t)`` for label 0 and ``cos(t)`` for label 1."""
    labels = np.asarray(labels)
    return np.where(labels[:, np.newaxis] == 0, np.sin(t), np.cos(t))


def generate_noisy_waveforms(seed=1, n_curves=2000, t_max=8.0, dt=0.1, noise_std=0.2):
    """
    Generate noisy sine and cosine curves.

    Every curve is either ``sin(t)`` or ``cos(t)``, picked with equal
    probability, plus independent Gaussian noise at each time point. The clean
    signal lives in a 2D subspace, so a 2-component PCA removes most of the
    noise.

    Parameters
    ----------
    seed : int, RandomState or None, default=1
        Seed or random state.
    n_curves : int, default=2000
        Number of curves (rows).
    t_max : float, default=8.0
        Last time point.
    dt : float, default=0.1
        Time step.
    noise_std : float, default=0.2
        Standard deviation of the additive noise.

    Returns
    -------
    data : ndarray of shape (n_curves, n_times)
    labels : ndarray of shape (n_curves,)
        0 for sine curves, 1 for cosine curves.
    t : ndarray of shape (n_times,)
    """
    check_positive(n_curves=n_curves)
    check_nonnegative(noise_std=noise_std)
    t = waveform_time_grid(t_max, dt)

    rs = check_random_state(seed)
    labels = rs.randint(0, 2, size=n_curves)
    data = clean_waveforms(labels, t) + noise_std * rs.randn(n_curves, len(t))

    return data, labels, t


CLOUD_CENTERS = [(x, y) for x in (-6, -2, 2, 6) for y in (-2, 2)]


def generate_eight_clouds(seed=123, n_per_cloud=50, scales=(0.5, 0.5, 20.0)):
    """
    Generate eight elongated Gaussian clouds in 3D.

    Clouds are centered at ``(x, y, 0)`` for ``x in (-6, -2, 2, 6)`` and
    ``y in (-2, 2)``. The third coordinate carries by far the largest
    variance but no cluster information, so the first principal components
    mix the clusters while a neighborhood-based method separates them.
    Columns are standardized to zero mean and unit variance.

    Parameters
    ----------
    seed : int, RandomState or None, default=123
    n_per_cloud : int, default=50
    scales : array-like of shape (3,), default=(0.5, 0.5, 20.0)
        Per-axis standard deviations within each cloud.

    Returns
    -------
    data : ndarray of shape (8 * n_per_cloud, 3)
    labels : ndarray of shape (8 * n_per_cloud,)
        Cloud index 0..7.
    """
    check_positive(n_per_cloud=n_per_cloud)
    scales = np.asarray(scales, dtype=float)
    if scales.shape != (3,):
        raise ValueError(f"scales must have 3 entries, got shape {scales.shape}")

    rs = check_random_state(seed)
    clouds = [
        scales * rs.randn(n_per_cloud, 3) + np.array([x, y, 0.0])
        for x, y in CLOUD_CENTERS
    ]
    data = StandardScaler().fit_transform(np.vstack(clouds))
    labels = np.repeat(np.arange(len(CLOUD_CENTERS)), n_per_cloud)

    return data, labels


def generate_pcr_data(seed=None, n=120, n_hidden=10, n_features=50, noise_std=0.1):
    """
    Generate a regression problem driven by a few hidden factors.

    ``y = hidden @ beta + noise`` and ``x = hidden @ T + noise``, with
    ``hidden`` of shape (n, n_hidden) and ``T`` of shape
    (n_hidden, n_features). The predictors are highly redundant, which is the
    setting where principal component regression helps.

    Returns
    -------
    x : ndarray of shape (n, n_features)
    y : ndarray of shape (n,)
    """
    check_positive(n=n, n_hidden=n_hidden, n_features=n_features)
    check_nonnegative(noise_std=noise_std)

    rs = check_random_state(seed)
    hidden = rs.randn(n, n_hidden)
    beta = rs.randn(n_hidden)
    y = hidden @ beta + noise_std * rs.randn(n)
    transformation = rs.randn(n_hidden, n_features)
    x = hidden @ transformation + noise_std * rs.randn(n, n_features)

    return x, y
