"""
Low-dimensional projections for visual comparison of PCA and t-SNE.
"""

import logging
from typing import Optional

from sklearn.manifold import TSNE

from .pca import fit_pca
from ..utils.data import as_2d_float_array, check_nonnegative, check_positive, check_random_state

# sklearn.manifold.TSNE refuses fewer iterations
MIN_TSNE_ITER = 250


def pca_projection(data, out_dim=2):
    """Scores of the first ``out_dim`` principal components."""
    check_positive(out_dim=out_dim)
    return fit_pca(data, maxoutdim=out_dim, pratio=1.0).transform(data)


def tsne_projection(
    data,
    out_dim=2,
    initial_dims=0,
    max_iter=1000,
    perplexity=30.0,
    seed=None,
    logger: Optional[logging.Logger] = None,
):
    """
    t-SNE (t-distributed Stochastic Neighbor Embedding) projection.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
    out_dim : int, default=2
        Dimension of the projection.
    initial_dims : int, default=0
        If positive and smaller than the number of features, reduce the data
        to this many principal components before running t-SNE.
    max_iter : int, default=1000
        Maximum number of optimization iterations, at least 250.
    perplexity : float, default=30.0
        Effective number of neighbors. Must be smaller than n_samples.
    seed : int, RandomState or None, optional
        Seed for the stochastic optimization.
    logger : logging.Logger, optional

    Returns
    -------
    ndarray of shape (n_samples, out_dim)

    Notes
    -----
    t-SNE is stochastic and non-parametric: different seeds give different
    layouts and new points cannot be embedded without refitting. It
    preserves neighborhoods rather than variance, which lets it separate
    clusters that overlap along the directions of largest variance.

    References
    ----------
    van der Maaten, L. & Hinton, G. (2008). Visualizing data using
    t-SNE. Journal of Machine Learning Research.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    check_positive(out_dim=out_dim, max_iter=max_iter, perplexity=perplexity)
    check_nonnegative(initial_dims=initial_dims)
    if max_iter < MIN_TSNE_ITER:
        raise ValueError(f"max_iter must be at least {MIN_TSNE_ITER}, got {max_iter}")

    X = as_2d_float_array(data)
    if perplexity >= X.shape[0]:
        raise ValueError(
            f"perplexity ({perplexity}) must be smaller than the number of samples ({X.shape[0]})"
        )

    if 0 < initial_dims < X.shape[1]:
        logger.debug(f"Reducing {X.shape[1]} features to {initial_dims} with PCA before t-SNE")
        X = fit_pca(X, maxoutdim=int(initial_dims), pratio=1.0).transform(X)

    # Barnes-Hut only supports projections below 4 dimensions
    method = "barnes_hut" if out_dim < 4 else "exact"
    model = TSNE(
        n_components=out_dim,
        perplexity=perplexity,
        max_iter=max_iter,
        method=method,
        init="pca",
        random_state=check_random_state(seed),
    )
    logger.debug(f"Running t-SNE on {X.shape[0]} samples (perplexity={perplexity})")
    return model.fit_transform(X)
