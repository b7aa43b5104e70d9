"""
Decomposition module for pcalab.

PCA fitting with a variance report, geometric helpers built on the
loadings, and t-SNE projections for comparison.
"""

from .pca import (
    PCAReport,
    PCAModel,
    fit_pca,
    explained_variance_ratio,
    cumulative_variance_ratio,
    standardize,
    fit_standardized_pca,
)
from .geometry import (
    chop,
    pc_vectors,
    pca_plane,
    projection_residuals,
    reconstruct_from_components,
    covariance_spectrum,
    score_covariance,
    compression_ratio,
    denoise,
)
from .embedding import pca_projection, tsne_projection

__all__ = [
    # PCA
    "PCAReport",
    "PCAModel",
    "fit_pca",
    "explained_variance_ratio",
    "cumulative_variance_ratio",
    "standardize",
    "fit_standardized_pca",
    # Geometry
    "chop",
    "pc_vectors",
    "pca_plane",
    "projection_residuals",
    "reconstruct_from_components",
    "covariance_spectrum",
    "score_covariance",
    "compression_ratio",
    "denoise",
    # Projections
    "pca_projection",
    "tsne_projection",
]
