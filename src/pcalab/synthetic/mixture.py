"""
Linear generative models for PCA recovery experiments.

Observed data are produced by mixing a low-dimensional hidden signal with a
fixed matrix: ``observed = hidden @ mixing_matrix``. PCA can recover the
hidden signal (up to sign and order of components) when the hidden
dimensions have distinct variances and the mixing rows have comparable norms.
"""

import numpy as np

from ..utils.data import check_nonnegative, check_positive, check_random_state

# Projection of the 2D toy signal into 3D. Rows have (approximately) unit norm.
TOY_MIXING_MATRIX = np.array([[-0.3, 0.4, 0.866], [0.885, 0.46, 0.1]])

# Hidden standard deviations of the toy signal, larger along the first axis.
TOY_SCALES = (1.5, 0.5)

# Hidden standard deviations of the rotated 3D example.
ROTATED_SCALES = (2.5, 1.5, 0.8)


def _validate_sample_count(N):
    if not isinstance(N, (int, np.integer)):
        raise TypeError(f"N must be an integer, got {type(N).__name__}")
    check_positive(N=N)


def _draw_hidden(random_state, N, scales):
    """Draw an N x q matrix whose column j is scales[j] * N(0, 1)."""
    return np.asarray(scales, dtype=float) * random_state.randn(N, len(scales))


def generate_mixture(
    seed=None, N=500, per_dimension_scales=TOY_SCALES, mixing_matrix=TOY_MIXING_MATRIX
):
    """
    Generate a hidden signal and its linear mixture.

    Parameters
    ----------
    seed : int, RandomState or None, optional
        Seed or random state used to draw the hidden signal. Passing the
        same integer twice gives bit-identical outputs.
    N : int, default=500
        Number of samples. Must be positive.
    per_dimension_scales : array-like of shape (q,), default=(1.5, 0.5)
        Non-negative standard deviation of each hidden dimension.
    mixing_matrix : array-like of shape (q, p)
        Linear map from the hidden space to the observed space.
        Requires q <= p.

    Returns
    -------
    hidden : ndarray of shape (N, q)
        Hidden signal, ``hidden[i, j] ~ scales[j] * N(0, 1)``.
    observed : ndarray of shape (N, p)
        Exact linear image ``hidden @ mixing_matrix``. No noise is added.

    Raises
    ------
    ValueError
        If N <= 0, any scale is negative, the number of scales differs from
        the number of mixing rows, or q > p.
    TypeError
        If N is not an integer.

    Examples
    --------
    >>> hidden, observed = generate_mixture(seed=17, N=500,
    ...                                     per_dimension_scales=[1.5, 1])
    >>> hidden.shape, observed.shape
    ((500, 2), (500, 3))
    >>> np.allclose(observed, hidden @ TOY_MIXING_MATRIX)
    True
    """
    _validate_sample_count(N)

    scales = np.asarray(per_dimension_scales, dtype=float)
    if scales.ndim != 1 or scales.size == 0:
        raise ValueError(
            f"per_dimension_scales must be a non-empty 1D sequence, got shape {scales.shape}"
        )
    for j, s in enumerate(scales):
        check_nonnegative(**{f"per_dimension_scales[{j}]": s})

    mixing_matrix = np.asarray(mixing_matrix, dtype=float)
    if mixing_matrix.ndim != 2:
        raise ValueError(
            f"mixing_matrix must be 2D, got shape {mixing_matrix.shape}"
        )
    q, p = mixing_matrix.shape
    if len(scales) != q:
        raise ValueError(
            f"Number of scales ({len(scales)}) must match the number of mixing rows ({q})"
        )
    if q > p:
        raise ValueError(
            f"Hidden dimension q={q} exceeds observed dimension p={p}; q <= p is required"
        )

    rs = check_random_state(seed)
    hidden = _draw_hidden(rs, N, scales)
    observed = hidden @ mixing_matrix

    return hidden, observed


def rotation_x(angle):
    """Elementary 3D rotation about the first axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rotation_y(angle):
    """Elementary 3D rotation about the second axis."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def build_rotation_mixing(seed=None, angle1=None, angle2=None, angle_scale=1.0):
    """
    Build a 3x3 mixing matrix from two composed elementary rotations.

    Parameters
    ----------
    seed : int, RandomState or None, optional
        Seed or random state used for any angle that is not given.
    angle1 : float, optional
        Rotation angle about the first axis in radians. Drawn as
        ``angle_scale * U[0, 1)`` if None.
    angle2 : float, optional
        Rotation angle about the second axis in radians. Drawn the same way
        as angle1, after it.
    angle_scale : float, default=1.0
        Multiplier for drawn angles. The default keeps draws in [0, 1)
        radians; use ``2 * np.pi`` to cover the full circle.

    Returns
    -------
    ndarray of shape (3, 3)
        ``rotation_x(angle1) @ rotation_y(angle2)``. Orthogonal:
        ``R.T @ R == I`` up to rounding.
    """
    check_nonnegative(angle_scale=angle_scale)
    rs = check_random_state(seed)

    if angle1 is None:
        angle1 = angle_scale * rs.random_sample()
    if angle2 is None:
        angle2 = angle_scale * rs.random_sample()

    return rotation_x(angle1) @ rotation_y(angle2)


def generate_rotated_mixture(seed=71, N=100, scales=ROTATED_SCALES, angle_scale=1.0):
    """
    Generate 3D data with distinct variances along a randomly rotated frame.

    The hidden signal is drawn first, then both rotation angles, all from a
    single random stream created from ``seed``.

    Parameters
    ----------
    seed : int, RandomState or None, default=71
        Seed or random state for the whole draw.
    N : int, default=100
        Number of samples.
    scales : array-like of shape (3,), default=(2.5, 1.5, 0.8)
        Hidden standard deviations.
    angle_scale : float, default=1.0
        Passed to :func:`build_rotation_mixing`.

    Returns
    -------
    hidden : ndarray of shape (N, 3)
    observed : ndarray of shape (N, 3)
        ``hidden @ rotation``.
    rotation : ndarray of shape (3, 3)
    """
    _validate_sample_count(N)
    scales = np.asarray(scales, dtype=float)
    if scales.shape != (3,):
        raise ValueError(f"scales must have 3 entries, got shape {scales.shape}")
    for j, s in enumerate(scales):
        check_nonnegative(**{f"scales[{j}]": s})

    rs = check_random_state(seed)
    hidden = _draw_hidden(rs, N, scales)
    rotation = build_rotation_mixing(rs, angle_scale=angle_scale)

    return hidden, hidden @ rotation, rotation


def normalize_rows(matrix):
    """Scale each row of a matrix to unit Euclidean norm.

    Raises
    ------
    ValueError
        If any row has zero norm.
    """
    matrix = np.asarray(matrix, dtype=float)
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    if np.any(norms == 0):
        raise ValueError("Cannot normalize a zero row")
    return matrix / norms
