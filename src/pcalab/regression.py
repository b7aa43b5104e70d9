"""
Principal component regression.

Regressing on a few principal components instead of all (highly redundant)
predictors reduces variance of the fit when the response depends on a small
number of hidden factors.
"""

import logging
from typing import Optional

import numpy as np
from sklearn.decomposition import PCA
from sklearn.linear_model import LinearRegression
from sklearn.pipeline import Pipeline

from .utils.data import as_2d_float_array, check_random_state


def rmse(y_pred, y_true):
    """Root mean squared error."""
    y_pred = np.asarray(y_pred, dtype=float)
    y_true = np.asarray(y_true, dtype=float)
    if y_pred.shape != y_true.shape:
        raise ValueError(f"Shapes differ: {y_pred.shape} vs {y_true.shape}")
    return float(np.sqrt(np.mean((y_pred - y_true) ** 2)))


def random_split(n, seed=None):
    """
    Boolean training mask where each sample is included with probability 1/2.

    Redraws until both the training and the test side are non-empty.
    """
    if n < 2:
        raise ValueError(f"Need at least 2 samples to split, got {n}")
    rs = check_random_state(seed)
    while True:
        mask = rs.randint(0, 2, size=n).astype(bool)
        if 0 < mask.sum() < n:
            return mask


def compare_pcr(
    x,
    y,
    train_mask=None,
    seed=None,
    pratio=0.99,
    logger: Optional[logging.Logger] = None,
):
    """
    Compare ordinary least squares with principal component regression.

    Parameters
    ----------
    x : array-like of shape (n_samples, n_features)
    y : array-like of shape (n_samples,)
    train_mask : array-like of bool, optional
        Training samples; the rest are used for testing. Drawn with
        :func:`random_split` if None.
    seed : int, RandomState or None, optional
        Seed for the split.
    pratio : float, default=0.99
        Fraction of variance retained by the PCA step.
    logger : logging.Logger, optional

    Returns
    -------
    dict
        - 'ols_rmse': test RMSE of linear regression on all predictors
        - 'pcr_rmse': test RMSE of the PCA + linear regression pipeline
        - 'n_components': components retained by the PCA step
        - 'train_mask': the mask used
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    x = as_2d_float_array(x, name="x")
    y = np.asarray(y, dtype=float)
    if len(y) != x.shape[0]:
        raise ValueError(f"y length ({len(y)}) must match number of samples ({x.shape[0]})")
    if not 0 < pratio <= 1:
        raise ValueError(f"pratio must be in (0, 1], got {pratio}")

    if train_mask is None:
        train_mask = random_split(len(y), seed=seed)
    train_mask = np.asarray(train_mask, dtype=bool)
    if train_mask.shape != y.shape:
        raise ValueError(
            f"train_mask shape {train_mask.shape} must match the number of samples ({len(y)})"
        )
    if train_mask.all() or not train_mask.any():
        raise ValueError("train_mask must leave at least one sample on each side of the split")
    test_mask = ~train_mask

    ols = LinearRegression().fit(x[train_mask], y[train_mask])
    # sklearn reads a float n_components < 1 as a variance fraction
    n_components = pratio if pratio < 1 else None
    pcr = Pipeline(
        [("pca", PCA(n_components=n_components)), ("regression", LinearRegression())]
    ).fit(x[train_mask], y[train_mask])

    result = {
        "ols_rmse": rmse(ols.predict(x[test_mask]), y[test_mask]),
        "pcr_rmse": rmse(pcr.predict(x[test_mask]), y[test_mask]),
        "n_components": int(pcr.named_steps["pca"].n_components_),
        "train_mask": train_mask,
    }
    logger.info(
        f"PCR with {result['n_components']} components: test RMSE {result['pcr_rmse']:.3f} "
        f"(OLS {result['ols_rmse']:.3f})"
    )
    return result
