"""
Recovery metrics for PCA on data with a known generative model.

PCA identifies hidden components only up to sign, order and (when the mixing
rows are not unit-norm) scale. The metrics here are invariant to exactly
these ambiguities:

1. Subspace similarity: do the loadings span the same space as the mixing rows?
2. Component matching: which score column corresponds to which hidden signal,
   and with which sign?
3. Reconstruction error: how close are the aligned scores to the hidden signals?
"""

import numpy as np
from scipy.linalg import subspace_angles
from scipy.optimize import linear_sum_assignment
from typing import Dict, Tuple

from ..synthetic.mixture import normalize_rows
from ..utils.data import as_2d_float_array


def _as_row_basis(basis: np.ndarray, name: str) -> np.ndarray:
    basis = np.asarray(basis, dtype=float)
    if basis.ndim == 1:
        basis = basis[np.newaxis, :]
    if basis.ndim != 2:
        raise ValueError(f"{name} must be 1D or 2D, got shape {basis.shape}")
    if not np.all(np.isfinite(basis)):
        raise ValueError(f"{name} contains NaN or infinite values")
    if not np.any(basis):
        raise ValueError(f"{name} must contain at least one nonzero vector")
    return basis


def principal_angles(true_basis: np.ndarray, estimated_basis: np.ndarray) -> np.ndarray:
    """
    Principal angles between two subspaces.

    Parameters
    ----------
    true_basis : np.ndarray
        Vectors spanning the first subspace as rows (q, p), e.g. a mixing
        matrix.
    estimated_basis : np.ndarray
        Vectors spanning the second subspace as rows (k, p), e.g.
        ``PCAModel.components``.

    Returns
    -------
    np.ndarray
        ``min(rank_true, rank_estimated)`` angles in radians, in descending
        order.
    """
    A = _as_row_basis(true_basis, "true_basis")
    B = _as_row_basis(estimated_basis, "estimated_basis")
    if A.shape[1] != B.shape[1]:
        raise ValueError(
            f"Bases live in different spaces: {A.shape[1]} vs {B.shape[1]} features"
        )
    return subspace_angles(A.T, B.T)


def cosine_similarity_of_subspaces(
    true_basis: np.ndarray, estimated_basis: np.ndarray
) -> float:
    """
    Mean cosine of the principal angles between two subspaces.

    The value is 1 when the subspaces coincide and 0 when they are
    orthogonal. It does not depend on the sign, scale or order of the basis
    vectors, nor on which basis of the subspace is chosen.

    Parameters
    ----------
    true_basis : np.ndarray
        Ground-truth vectors as rows (q, p).
    estimated_basis : np.ndarray
        Estimated vectors as rows (k, p).

    Returns
    -------
    float
        Similarity in [0, 1].

    Raises
    ------
    ValueError
        If a basis is all zeros or the bases have different numbers of
        features.

    Examples
    --------
    >>> G = np.array([[-0.3, 0.4, 0.866], [0.885, 0.46, 0.1]])
    >>> round(cosine_similarity_of_subspaces(G, -2 * G[::-1]), 6)
    1.0
    """
    angles = principal_angles(true_basis, estimated_basis)
    return float(np.clip(np.mean(np.cos(angles)), 0.0, 1.0))


def _cross_correlation(reference: np.ndarray, estimate: np.ndarray) -> np.ndarray:
    q = reference.shape[1]
    with np.errstate(divide="ignore", invalid="ignore"):
        corr = np.corrcoef(reference.T, estimate.T)[:q, q:]
    # constant columns have undefined correlation
    return np.nan_to_num(corr, nan=0.0)


def match_components(
    reference: np.ndarray, estimate: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Pair estimated components with reference components.

    Solves the assignment that maximizes the total absolute correlation
    between paired columns, which resolves the order ambiguity; the sign of
    each paired correlation resolves the sign ambiguity.

    Parameters
    ----------
    reference : np.ndarray
        Ground-truth signals (n_samples, q).
    estimate : np.ndarray
        Recovered signals (n_samples, k) with k >= q, e.g. PCA scores.

    Returns
    -------
    permutation : np.ndarray of shape (q,)
        Estimate column assigned to each reference column.
    signs : np.ndarray of shape (q,)
        +1 or -1 per reference column.
    correlations : np.ndarray of shape (q,)
        Absolute correlation of each pair.
    """
    reference = as_2d_float_array(reference, name="reference")
    estimate = as_2d_float_array(estimate, name="estimate")
    if reference.shape[0] != estimate.shape[0]:
        raise ValueError("reference and estimate must have the same number of samples")
    if estimate.shape[1] < reference.shape[1]:
        raise ValueError(
            f"estimate has fewer components ({estimate.shape[1]}) than reference ({reference.shape[1]})"
        )

    corr = _cross_correlation(reference, estimate)
    rows, cols = linear_sum_assignment(-np.abs(corr))

    paired = corr[rows, cols]
    signs = np.where(paired < 0, -1.0, 1.0)
    return cols, signs, np.abs(paired)


def align_components(reference: np.ndarray, estimate: np.ndarray) -> np.ndarray:
    """Reorder and flip estimate columns to match the reference columns."""
    permutation, signs, _ = match_components(reference, estimate)
    estimate = as_2d_float_array(estimate, name="estimate")
    return estimate[:, permutation] * signs


def compare_reconstruction(
    reference: np.ndarray, estimate: np.ndarray, align: bool = True
) -> Dict[str, object]:
    """
    Compare recovered signals with the ground truth.

    Parameters
    ----------
    reference : np.ndarray
        Ground truth (n_samples, q).
    estimate : np.ndarray
        Recovered signals, scores or reconstructions.
    align : bool, default=True
        Resolve sign and order with :func:`align_components` first. If
        False, shapes must match and columns are compared as given.

    Returns
    -------
    dict
        - 'correlations': per-column correlation after alignment
        - 'max_abs_error': largest elementwise deviation
        - 'rmse': root mean squared error
        - 'relative_error': Frobenius error relative to the reference norm
        - 'aligned': the (aligned) estimate
    """
    reference = as_2d_float_array(reference, name="reference")
    estimate = as_2d_float_array(estimate, name="estimate")

    if align:
        estimate = align_components(reference, estimate)
    elif estimate.shape != reference.shape:
        raise ValueError(
            f"Shapes differ: reference {reference.shape}, estimate {estimate.shape}"
        )

    correlations = np.diag(_cross_correlation(reference, estimate))
    diff = reference - estimate
    ref_norm = np.linalg.norm(reference)

    return {
        "correlations": correlations,
        "max_abs_error": float(np.max(np.abs(diff))),
        "rmse": float(np.sqrt(np.mean(diff**2))),
        "relative_error": float(np.linalg.norm(diff) / ref_norm) if ref_norm > 0 else np.inf,
        "aligned": estimate,
    }


def loading_comparison(mixing_matrix: np.ndarray, model) -> Dict[str, object]:
    """
    Put the fitted loadings next to the mixing matrix that generated the data.

    Parameters
    ----------
    mixing_matrix : np.ndarray
        Ground-truth mixing matrix (q, p).
    model : PCAModel
        Model fitted on the observed data.

    Returns
    -------
    dict
        - 'projection_T': loadings as rows (outdim, p), comparable to G
        - 'mixing_matrix': G itself
        - 'abs_cosines': (q, outdim) absolute cosines between mixing rows
          and loadings; close to a permutation matrix on success
        - 'subspace_similarity': :func:`cosine_similarity_of_subspaces`
    """
    G = _as_row_basis(mixing_matrix, "mixing_matrix")
    components = model.components
    if G.shape[1] != components.shape[1]:
        raise ValueError(
            f"mixing_matrix has {G.shape[1]} columns but the model has {components.shape[1]} features"
        )

    return {
        "projection_T": components,
        "mixing_matrix": G,
        "abs_cosines": np.abs(normalize_rows(G) @ components.T),
        "subspace_similarity": cosine_similarity_of_subspaces(G, components),
    }
