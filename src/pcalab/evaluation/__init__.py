"""
Evaluation of PCA recoveries and projections against known ground truth.
"""

from .recovery import (
    principal_angles,
    cosine_similarity_of_subspaces,
    match_components,
    align_components,
    compare_reconstruction,
    loading_comparison,
)
from .projection import cluster_separation, compare_projections

__all__ = [
    "principal_angles",
    "cosine_similarity_of_subspaces",
    "match_components",
    "align_components",
    "compare_reconstruction",
    "loading_comparison",
    "cluster_separation",
    "compare_projections",
]
