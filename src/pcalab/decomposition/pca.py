"""
Principal component analysis with an explicit variance report.

The model exposes the quantities used throughout the examples: loadings
(``projection``, components as columns), per-component variances, total
variance and the residual variance left out by the retained components.
Variances are normalized by ``n - 1``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import linalg
from sklearn.preprocessing import StandardScaler
from sklearn.utils.extmath import svd_flip

from ..utils.data import as_2d_float_array, check_positive


@dataclass
class PCAReport:
    """Summary of a fitted PCA model.

    Attributes
    ----------
    indim : int
        Number of input features.
    outdim : int
        Number of retained principal components.
    tvar : float
        Total variance of the (centered) data.
    mean : ndarray
        Mean subtracted before projecting (zeros if not centered).
    principalvars : ndarray
        Variance along each retained component, in decreasing order.
    tprincipalvar : float
        Sum of ``principalvars``.
    tresidualvar : float
        ``tvar - tprincipalvar``.
    """

    indim: int
    outdim: int
    tvar: float
    mean: np.ndarray
    principalvars: np.ndarray
    tprincipalvar: float
    tresidualvar: float


class PCAModel(object):
    """
    Principal component analysis via a thin singular value decomposition.

    Parameters
    ----------
    maxoutdim : int, optional
        Maximum number of components to keep. Defaults to ``min(n, p)``.
    pratio : float, default=0.99
        Keep the smallest number of components whose variances add up to at
        least ``pratio`` of the total variance. ``pratio=1`` keeps all
        components (up to ``maxoutdim``).
    center : bool, default=True
        Whether to subtract the column means. With ``center=False`` the data
        are assumed to have zero mean and the decomposition is taken about
        the origin.

    Attributes
    ----------
    projection : ndarray of shape (n_features, outdim)
        Loading vectors as columns.
    principalvars : ndarray of shape (outdim,)
    mean : ndarray of shape (n_features,)
    tvar : float
    indim, outdim : int

    Examples
    --------
    >>> rs = np.random.RandomState(0)
    >>> X = rs.randn(100, 3) * [3.0, 1.0, 0.1]
    >>> model = PCAModel(pratio=1.0).fit(X)
    >>> model.outdim
    3
    >>> np.allclose(model.inverse_transform(model.transform(X)), X)
    True
    """

    def __init__(self, maxoutdim=None, pratio=0.99, center=True):
        if maxoutdim is not None:
            if not isinstance(maxoutdim, (int, np.integer)):
                raise TypeError(
                    f"maxoutdim must be an integer, got {type(maxoutdim).__name__}"
                )
            check_positive(maxoutdim=maxoutdim)
        if not 0 < pratio <= 1:
            raise ValueError(f"pratio must be in (0, 1], got {pratio}")

        self.maxoutdim = maxoutdim
        self.pratio = pratio
        self.center = center

    def fit(self, data, logger: Optional[logging.Logger] = None):
        """Fit the model to data of shape (n_samples, n_features)."""
        if logger is None:
            logger = logging.getLogger(__name__)

        X = as_2d_float_array(data)
        n, p = X.shape
        if n < 2:
            raise ValueError("Need at least 2 samples to fit PCA")

        self.mean = X.mean(axis=0) if self.center else np.zeros(p)
        Xc = X - self.mean

        U, s, Vt = linalg.svd(Xc, full_matrices=False)
        U, Vt = svd_flip(U, Vt)

        variances = s**2 / (n - 1)
        self.tvar = float(np.sum(Xc**2) / (n - 1))

        outdim = self._choose_outdim(variances, self.tvar)
        self.indim = p
        self.outdim = outdim
        self.projection = Vt[:outdim].T
        self.principalvars = variances[:outdim]
        self.n_samples_ = n

        logger.debug(
            f"PCA fitted on {n} samples x {p} features: kept {outdim} components "
            f"({self.report.tprincipalvar / self.tvar if self.tvar > 0 else 1.0:.3f} of variance)"
        )
        return self

    def _choose_outdim(self, variances, tvar):
        maxdim = len(variances)
        if self.maxoutdim is not None:
            maxdim = min(maxdim, self.maxoutdim)

        if tvar <= 0:
            return 1
        cumulative = np.cumsum(variances)
        # tolerance keeps pratio=1 reachable despite rounding in the cumsum
        reached = cumulative >= self.pratio * tvar * (1 - 1e-12)
        k = int(np.argmax(reached)) + 1 if np.any(reached) else len(variances)
        return min(k, maxdim)

    def _check_fitted(self):
        if not hasattr(self, "projection"):
            raise RuntimeError("PCAModel is not fitted yet; call fit() first")

    @property
    def components(self):
        """Loading vectors as rows, shape (outdim, n_features)."""
        self._check_fitted()
        return self.projection.T

    @property
    def report(self):
        self._check_fitted()
        tprincipalvar = float(np.sum(self.principalvars))
        return PCAReport(
            indim=self.indim,
            outdim=self.outdim,
            tvar=self.tvar,
            mean=self.mean,
            principalvars=self.principalvars,
            tprincipalvar=tprincipalvar,
            tresidualvar=self.tvar - tprincipalvar,
        )

    def transform(self, data):
        """Project data onto the loadings; returns scores (n_samples, outdim)."""
        self._check_fitted()
        X = as_2d_float_array(data)
        if X.shape[1] != self.indim:
            raise ValueError(
                f"Expected {self.indim} features, got {X.shape[1]}"
            )
        return (X - self.mean) @ self.projection

    def inverse_transform(self, scores):
        """Map scores back to the feature space."""
        self._check_fitted()
        Z = as_2d_float_array(scores, name="scores")
        if Z.shape[1] != self.outdim:
            raise ValueError(f"Expected {self.outdim} score columns, got {Z.shape[1]}")
        return Z @ self.projection.T + self.mean

    def fit_transform(self, data, logger: Optional[logging.Logger] = None):
        return self.fit(data, logger=logger).transform(data)

    def reconstruct(self, data):
        """Best approximation of data within the span of the retained components."""
        return self.inverse_transform(self.transform(data))


def fit_pca(data, maxoutdim=None, pratio=0.99, center=True, logger=None):
    """
    Fit a :class:`PCAModel`.

    Parameters
    ----------
    data : array-like of shape (n_samples, n_features)
    maxoutdim : int, optional
        Maximum number of components.
    pratio : float, default=0.99
        Fraction of total variance to retain.
    center : bool, default=True
        Subtract column means before decomposing.
    logger : logging.Logger, optional
        Logger for progress messages.

    Returns
    -------
    PCAModel
        Fitted model.
    """
    return PCAModel(maxoutdim=maxoutdim, pratio=pratio, center=center).fit(
        data, logger=logger
    )


def explained_variance_ratio(report, relative_to="tvar"):
    """
    Proportion of variance explained by each retained component.

    Parameters
    ----------
    report : PCAReport
    relative_to : {'tvar', 'tprincipalvar'}, default='tvar'
        Normalize by the total variance of the data or by the variance of
        the retained components only.
    """
    if relative_to == "tvar":
        total = report.tvar
    elif relative_to == "tprincipalvar":
        total = report.tprincipalvar
    else:
        raise ValueError(
            f"relative_to must be 'tvar' or 'tprincipalvar', got {relative_to!r}"
        )
    if total <= 0:
        raise ValueError("Total variance is zero")
    return report.principalvars / total


def cumulative_variance_ratio(report, relative_to="tvar"):
    """Cumulative proportion of variance explained."""
    return np.cumsum(explained_variance_ratio(report, relative_to=relative_to))


def standardize(data):
    """Scale columns to zero mean and unit variance.

    Returns
    -------
    scaled : ndarray
    scaler : sklearn.preprocessing.StandardScaler
        Fitted scaler, for mapping new data consistently.
    """
    scaler = StandardScaler()
    scaled = scaler.fit_transform(as_2d_float_array(data))
    return scaled, scaler


def fit_standardized_pca(data, logger=None, **pca_params):
    """Standardize the columns, then fit PCA on the scaled data.

    Scaling matters when features are measured in different units: without
    it, the features with the largest raw variance dominate the loadings.

    Returns
    -------
    model : PCAModel
        Model fitted on the standardized data.
    scaler : StandardScaler
    """
    scaled, scaler = standardize(data)
    model = fit_pca(scaled, logger=logger, **pca_params)
    return model, scaler
