import numpy as np
import scipy.sparse as ssp
from sklearn.utils import check_random_state


def to_numpy_array(data):
    if isinstance(data, np.ndarray):
        return data

    if ssp.issparse(data):
        return data.toarray()
    else:
        return np.array(data)


def as_2d_float_array(data, name="data"):
    """Convert input to a finite 2D float array.

    Parameters
    ----------
    data : array-like
        Matrix with shape (n_samples, n_features). A 1D input is treated
        as a single column.
    name : str, default="data"
        Name used in error messages.

    Returns
    -------
    np.ndarray
        Float array of shape (n_samples, n_features).

    Raises
    ------
    ValueError
        If the input has more than 2 dimensions or contains NaN/inf.
    """
    arr = np.asarray(to_numpy_array(data), dtype=float)
    if arr.ndim == 1:
        arr = arr[:, np.newaxis]
    if arr.ndim != 2:
        raise ValueError(f"{name} must be a 2D array, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN or infinite values")
    return arr


def _as_number(name, value):
    try:
        val = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")
    if np.isnan(val):
        raise ValueError(f"{name} cannot be NaN")
    if np.isinf(val):
        raise ValueError(f"{name} cannot be infinite")
    return val


def check_nonnegative(**kwargs):
    """Check that all provided parameters are non-negative.

    Parameters
    ----------
    **kwargs : dict
        Parameter name to value mappings. None values are skipped.

    Raises
    ------
    ValueError
        If any parameter value is negative, NaN, or infinite.
        Error message includes parameter name and value.
    TypeError
        If a value cannot be interpreted as a number.

    Examples
    --------
    >>> check_nonnegative(horizon=1000, noise_std=0.0)  # No error

    >>> check_nonnegative(horizon=1000, noise_std=-0.5)
    Traceback (most recent call last):
        ...
    ValueError: noise_std must be non-negative, got -0.5
    """
    for name, value in kwargs.items():
        if value is not None and _as_number(name, value) < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def check_positive(**kwargs):
    """Check that all provided parameters are strictly positive.

    Same contract as :func:`check_nonnegative`, with zero rejected as well.

    Examples
    --------
    >>> check_positive(N=500, step=0.02)  # No error

    >>> check_positive(N=0)
    Traceback (most recent call last):
        ...
    ValueError: N must be positive, got 0
    """
    for name, value in kwargs.items():
        if value is not None and _as_number(name, value) <= 0:
            raise ValueError(f"{name} must be positive, got {value}")


__all__ = [
    "to_numpy_array",
    "as_2d_float_array",
    "check_nonnegative",
    "check_positive",
    "check_random_state",
]
