"""
Geometric views of a fitted PCA.

Helpers for the geometric reading of PCA: loading vectors as directions of
largest variance, the plane spanned by the first two components (the plane
closest to the data), reconstructions from the first L components, and the
decorrelation of scores.
"""

import numpy as np
from scipy import linalg

from .pca import fit_pca
from ..utils.data import as_2d_float_array, check_positive


def chop(x, eps=1e-12):
    """Set entries with absolute value at most eps to zero."""
    x = np.asarray(x, dtype=float)
    return np.where(np.abs(x) > eps, x, 0.0)


def pc_vectors(model):
    """
    Orthonormal frame from the first two loadings of a 3D PCA.

    Parameters
    ----------
    model : PCAModel
        Model fitted on 3D data with at least 2 components.

    Returns
    -------
    a1, a2, a3 : ndarray of shape (3,)
        First and second loading vectors and their normalized cross product.
    """
    proj = model.projection
    if proj.shape[0] != 3 or proj.shape[1] < 2:
        raise ValueError(
            f"pc_vectors needs 3D data and at least 2 components, got projection {proj.shape}"
        )
    a1 = proj[:, 0]
    a2 = proj[:, 1]
    a3 = np.cross(a1, a2)
    a3 = a3 / np.linalg.norm(a3)
    return a1, a2, a3


def pca_plane(x, y, model):
    """
    Height of the plane spanned by the first two principal components.

    The plane passes through the origin and is orthogonal to the third
    vector of :func:`pc_vectors`.

    Parameters
    ----------
    x, y : float or ndarray
        Coordinates in the first two features.
    model : PCAModel

    Returns
    -------
    float or ndarray
        ``z`` such that ``(x, y, z)`` lies on the plane.
    """
    _, _, a3 = pc_vectors(model)
    if np.isclose(a3[2], 0.0):
        raise ValueError("The principal plane is vertical; z is not a function of x, y")
    a3 = a3 / a3[2]
    return -a3[0] * np.asarray(x) - a3[1] * np.asarray(y)


def projection_residuals(data, direction):
    """
    Project each point onto the plane through the origin orthogonal to a direction.

    For a point ``s`` and unit direction ``a`` the endpoint is
    ``e = s - (a . s) a``. The segment from ``s`` to ``e`` has length
    ``|a . s|``, the score of the point along ``a``. For centered data the
    mean squared score is the variance along ``a``.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
    direction : array-like of shape (n_features,)
        Nonzero direction, normalized internally.

    Returns
    -------
    ends : ndarray of shape (n_samples, n_features)
    scores : ndarray of shape (n_samples,)
    """
    X = as_2d_float_array(data)
    a = np.asarray(direction, dtype=float)
    norm = np.linalg.norm(a)
    if norm == 0:
        raise ValueError("direction must be nonzero")
    a = a / norm
    if a.shape != (X.shape[1],):
        raise ValueError(
            f"direction must have {X.shape[1]} entries, got shape {a.shape}"
        )

    scores = X @ a
    ends = X - np.outer(scores, a)
    return ends, scores


def reconstruct_from_components(data, loadings, n_components):
    """
    Reconstruct data from its first L loading vectors: ``X Phi_L Phi_L^T``.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
    loadings : array-like of shape (n_features, n_loadings)
        Orthonormal loading vectors as columns.
    n_components : int
        Number L of leading loadings to use, ``1 <= L <= n_loadings``.

    Returns
    -------
    ndarray of shape (n_samples, n_features)
    """
    X = as_2d_float_array(data)
    loadings = np.asarray(loadings, dtype=float)
    check_positive(n_components=n_components)
    if n_components > loadings.shape[1]:
        raise ValueError(
            f"n_components={n_components} exceeds available loadings ({loadings.shape[1]})"
        )
    phi = loadings[:, :n_components]
    return X @ phi @ phi.T


def covariance_spectrum(data):
    """
    Scatter matrix of the column-centered data and its eigenvalues.

    Returns
    -------
    XtX : ndarray of shape (n_features, n_features)
    eigenvalues : ndarray of shape (n_features,)
        In ascending order. Divided by ``n - 1`` they equal the principal
        variances of a full PCA.
    """
    X = as_2d_float_array(data)
    Xc = X - X.mean(axis=0)
    XtX = Xc.T @ Xc
    return XtX, linalg.eigvalsh(XtX)


def score_covariance(model, data, eps=1e-12):
    """
    Scatter matrix ``Z^T Z`` of the PCA scores with near-zero entries chopped.

    The result is diagonal: scores along different principal components are
    uncorrelated.
    """
    Z = model.transform(data)
    ZtZ = Z.T @ Z
    # relative threshold: rounding error scales with the largest entry
    scale = max(np.max(np.abs(ZtZ)), 1.0)
    return chop(ZtZ, eps=eps * scale)


def compression_ratio(n, p, L):
    """
    Storage ratio of raw data to a rank-L PCA representation.

    Storing ``n`` samples of ``p`` features takes ``n * p`` numbers; the
    compressed form keeps ``n * L`` scores and ``p * L`` loadings.
    """
    check_positive(n=n, p=p, L=L)
    return n * p / ((p + n) * L)


def denoise(data, n_components=2, center=False, return_model=False):
    """
    Remove noise by projecting onto the leading principal components.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
    n_components : int, default=2
        Number of components kept.
    center : bool, default=False
        Whether PCA subtracts the mean first.
    return_model : bool, default=False
        Whether to also return the fitted model.

    Returns
    -------
    reconstruction : ndarray of shape (n_samples, n_features)
    model : PCAModel
        Only if ``return_model`` is True.
    """
    model = fit_pca(data, maxoutdim=n_components, pratio=1.0, center=center)
    reconstruction = model.reconstruct(data)
    if return_model:
        return reconstruction, model
    return reconstruction
