"""
Cluster structure of low-dimensional projections.
"""

import numpy as np
from sklearn.metrics import silhouette_score

from ..utils.data import as_2d_float_array


def cluster_separation(projection, labels):
    """
    Silhouette score of known clusters in a projection.

    Parameters
    ----------
    projection : array-like of shape (n_samples, n_dims)
        E.g. PCA scores or a t-SNE embedding.
    labels : array-like of shape (n_samples,)
        Ground-truth cluster labels, at least two distinct values.

    Returns
    -------
    float
        In [-1, 1]; higher means better separated clusters.
    """
    X = as_2d_float_array(projection, name="projection")
    labels = np.asarray(labels)
    if len(labels) != X.shape[0]:
        raise ValueError(
            f"labels length ({len(labels)}) must match number of samples ({X.shape[0]})"
        )
    if len(np.unique(labels)) < 2:
        raise ValueError("Need at least 2 distinct labels")
    return float(silhouette_score(X, labels))


def compare_projections(projections, labels):
    """Cluster separation for several named projections of the same points."""
    return {name: cluster_separation(proj, labels) for name, proj in projections.items()}
