"""Parallel execution helpers.

Seed sweeps run through joblib. The backend comes from the package-level
``pcalab.PARALLEL_BACKEND`` unless a call overrides it.
"""

from contextlib import contextmanager
from joblib import Parallel, delayed, parallel_config

# joblib pre_dispatch per backend; threads share memory, so dispatch less ahead
_PRE_DISPATCH = {"threading": "n_jobs", "loky": "2*n_jobs", "multiprocessing": "2*n_jobs"}


def get_parallel_backend():
    """Name of the joblib backend currently selected for pcalab."""
    import pcalab
    return pcalab.PARALLEL_BACKEND


@contextmanager
def parallel_executor(n_jobs, verbose=False, backend=None, pre_dispatch=None):
    """Yield a joblib ``Parallel`` configured for the chosen backend.

    Parameters
    ----------
    n_jobs : int
        Number of parallel jobs. Use -1 for all available cores.
    verbose : bool, default=False
        Whether to print the configuration used.
    backend : str, optional
        'loky', 'threading' or 'multiprocessing'. Defaults to
        :func:`get_parallel_backend`.
    pre_dispatch : str or int, optional
        Override the backend's default pre_dispatch.

    Examples
    --------
    >>> from pcalab.utils.parallel import parallel_executor, delayed
    >>> with parallel_executor(n_jobs=2, backend='threading') as parallel:
    ...     squares = parallel(delayed(pow)(i, 2) for i in range(4))
    >>> squares
    [0, 1, 4, 9]
    """
    backend = backend or get_parallel_backend()
    if pre_dispatch is None:
        pre_dispatch = _PRE_DISPATCH.get(backend, "2*n_jobs")

    config = {"backend": backend}
    if backend == "loky":
        # release idle workers after a minute instead of joblib's 300s
        config["idle_worker_timeout"] = 60

    if verbose:
        print(f"Parallel config: backend={backend}, n_jobs={n_jobs}, pre_dispatch={pre_dispatch}")

    with parallel_config(**config):
        yield Parallel(n_jobs=n_jobs, backend=backend, pre_dispatch=pre_dispatch)


__all__ = ["parallel_executor", "get_parallel_backend", "delayed"]
