"""
Reproducible PCA experiments.

Each experiment generates data with a known ground truth, fits PCA (or a
competing method) and evaluates the result. Experiments are registered in
``EXPERIMENTS_DICT`` with their default parameters; any parameter can be
overridden per call, and re-running with new parameters replaces
interactive controls.
"""

import logging
from typing import Any, Callable, Dict, Optional

import numpy as np
import tqdm

from .decomposition import (
    covariance_spectrum,
    denoise,
    explained_variance_ratio,
    fit_pca,
    pca_projection,
    score_covariance,
    tsne_projection,
)
from .evaluation import (
    compare_reconstruction,
    cosine_similarity_of_subspaces,
    compare_projections,
    loading_comparison,
    match_components,
)
from .regression import compare_pcr, rmse
from .synthetic import (
    ROTATED_SCALES,
    TOY_MIXING_MATRIX,
    TOY_SCALES,
    clean_waveforms,
    generate_eight_clouds,
    generate_electrode_signals,
    generate_mixture,
    generate_noisy_waveforms,
    generate_pcr_data,
    generate_rotated_mixture,
)
from .utils.parallel import delayed, parallel_executor


class ExperimentSpec(object):
    """Registered experiment.

    Attributes
    ----------
    runner : callable
        ``runner(params, logger) -> dict``. The returned dict always holds a
        'metrics' entry with scalar summaries.
    default_params : dict
        Complete set of accepted parameters with their defaults.
    description : str
        One-line summary.
    """

    def __init__(self, runner: Callable, default_params: Dict[str, Any], description: str = ""):
        self.runner = runner
        self.default_params = default_params
        self.description = description


def _compare_recovered(reference, scores):
    """Compare scores with the hidden columns they can account for.

    When fewer components are kept than there are hidden signals, each score
    column is paired with one hidden column and the rest are left out.
    """
    if scores.shape[1] < reference.shape[1]:
        matched, _, _ = match_components(scores, reference)
        reference = reference[:, np.sort(matched)]
    return compare_reconstruction(reference, scores)


def _run_toy_mixture(params, logger):
    hidden, observed = generate_mixture(
        params["seed"], params["N"], params["scales"], params["mixing_matrix"]
    )
    model = fit_pca(observed, pratio=params["pratio"], logger=logger)
    scores = model.transform(observed)

    # scores are centered, so compare against the centered hidden signal
    recovery = _compare_recovered(hidden - hidden.mean(axis=0), scores)
    loadings = loading_comparison(params["mixing_matrix"], model)
    ratios = explained_variance_ratio(model.report)

    return {
        "hidden": hidden,
        "observed": observed,
        "model": model,
        "scores": scores,
        "recovery": recovery,
        "loadings": loadings,
        "explained_variance_ratio": ratios,
        "metrics": {
            "outdim": model.outdim,
            "subspace_similarity": loadings["subspace_similarity"],
            "min_component_correlation": float(np.min(np.abs(recovery["correlations"]))),
            "relative_error": recovery["relative_error"],
            "n_recovered": recovery["aligned"].shape[1],
            "first_component_variance_ratio": float(ratios[0]),
        },
    }


def _run_rotated_mixture(params, logger):
    hidden, observed, rotation = generate_rotated_mixture(
        params["seed"], params["N"], params["scales"], params["angle_scale"]
    )
    model = fit_pca(observed, pratio=1.0, logger=logger)
    report = model.report

    n_plane = min(2, model.outdim)
    plane_similarity = cosine_similarity_of_subspaces(
        rotation[:n_plane], model.components[:n_plane]
    )

    ZtZ = score_covariance(model, observed)
    _, eigenvalues = covariance_spectrum(observed)
    expected = report.principalvars * (observed.shape[0] - 1)
    eigen_mismatch = float(
        np.max(np.abs(np.sort(eigenvalues)[::-1][: model.outdim] - expected))
    )

    return {
        "hidden": hidden,
        "observed": observed,
        "rotation": rotation,
        "model": model,
        "report": report,
        "score_covariance": ZtZ,
        "metrics": {
            "plane_similarity": plane_similarity,
            "decorrelated": bool(np.count_nonzero(ZtZ - np.diag(np.diag(ZtZ))) == 0),
            "eigenvalue_mismatch": eigen_mismatch,
            "residual_variance": report.tresidualvar,
        },
    }


def _run_spike_trains(params, logger):
    traces, electrodes = generate_electrode_signals(
        params["seed"],
        mixing_matrix=params["mixing_matrix"],
        horizon=params["horizon"],
        step=params["step"],
        rate_n=params["rate_n"],
        noise_std=params["noise_std"],
    )
    # the electrode signals oscillate around zero, so PCA is taken about the origin
    model = fit_pca(
        electrodes,
        maxoutdim=traces.shape[1],
        pratio=params["pratio"],
        center=False,
        logger=logger,
    )
    scores = model.transform(electrodes)
    recovery = _compare_recovered(traces, scores)

    return {
        "traces": traces,
        "electrodes": electrodes,
        "model": model,
        "scores": scores,
        "recovery": recovery,
        "metrics": {
            "min_component_correlation": float(np.min(np.abs(recovery["correlations"]))),
            "relative_error": recovery["relative_error"],
            "n_recovered": recovery["aligned"].shape[1],
        },
    }


def _run_denoising(params, logger):
    data, labels, t = generate_noisy_waveforms(
        params["seed"],
        n_curves=params["n_curves"],
        t_max=params["t_max"],
        dt=params["dt"],
        noise_std=params["noise_std"],
    )
    clean = clean_waveforms(labels, t)
    reconstruction, model = denoise(
        data, n_components=params["n_components"], center=False, return_model=True
    )

    return {
        "data": data,
        "labels": labels,
        "t": t,
        "reconstruction": reconstruction,
        "model": model,
        "metrics": {
            "raw_rmse": rmse(data, clean),
            "denoised_rmse": rmse(reconstruction, clean),
        },
    }


def _run_pca_vs_tsne(params, logger):
    data, labels = generate_eight_clouds(params["seed"], n_per_cloud=params["n_per_cloud"])
    projections = {
        "pca": pca_projection(data, out_dim=2),
        "tsne": tsne_projection(
            data,
            out_dim=2,
            initial_dims=params["initial_dims"],
            max_iter=params["max_iter"],
            perplexity=params["perplexity"],
            seed=params["tsne_seed"],
            logger=logger,
        ),
    }
    separation = compare_projections(projections, labels)

    return {
        "data": data,
        "labels": labels,
        "projections": projections,
        "metrics": {
            "pca_separation": separation["pca"],
            "tsne_separation": separation["tsne"],
        },
    }


def _run_pcr(params, logger):
    x, y = generate_pcr_data(
        params["seed"],
        n=params["n"],
        n_hidden=params["n_hidden"],
        n_features=params["n_features"],
        noise_std=params["noise_std"],
    )
    result = compare_pcr(x, y, seed=params["split_seed"], pratio=params["pratio"], logger=logger)

    return {
        "x": x,
        "y": y,
        "train_mask": result["train_mask"],
        "metrics": {
            "ols_rmse": result["ols_rmse"],
            "pcr_rmse": result["pcr_rmse"],
            "n_components": result["n_components"],
        },
    }


EXPERIMENTS_DICT = {
    "toy_mixture": ExperimentSpec(
        _run_toy_mixture,
        {
            "seed": 17,
            "N": 500,
            "scales": TOY_SCALES,
            "mixing_matrix": TOY_MIXING_MATRIX,
            "pratio": 0.99,
        },
        "Recover a 2D hidden signal from its 3D linear mixture",
    ),
    "rotated_mixture": ExperimentSpec(
        _run_rotated_mixture,
        {"seed": 241, "N": 100, "scales": ROTATED_SCALES, "angle_scale": 1.0},
        "Principal directions and decorrelation of rotated 3D data",
    ),
    "spike_trains": ExperimentSpec(
        _run_spike_trains,
        {
            "seed": 0,
            "mixing_matrix": TOY_MIXING_MATRIX,
            "horizon": 1000,
            "step": 0.02,
            "rate_n": 200,
            "noise_std": 1e-2,
            "pratio": 1.0,
        },
        "Recover two neurons' voltage traces from three electrodes",
    ),
    "denoising": ExperimentSpec(
        _run_denoising,
        {
            "seed": 1,
            "n_curves": 2000,
            "t_max": 8.0,
            "dt": 0.1,
            "noise_std": 0.2,
            "n_components": 2,
        },
        "Denoise sine and cosine curves with a 2-component PCA",
    ),
    "pca_vs_tsne": ExperimentSpec(
        _run_pca_vs_tsne,
        {
            "seed": 123,
            "n_per_cloud": 50,
            "perplexity": 50.0,
            "max_iter": 2000,
            "initial_dims": 0,
            "tsne_seed": 0,
        },
        "Eight clusters hidden behind a high-variance direction: PCA vs t-SNE",
    ),
    "pcr": ExperimentSpec(
        _run_pcr,
        {
            "seed": 0,
            "n": 120,
            "n_hidden": 10,
            "n_features": 50,
            "noise_std": 0.1,
            "pratio": 0.99,
            "split_seed": 0,
        },
        "Principal component regression vs ordinary least squares",
    ),
}


def merge_params_with_defaults(
    name: str, user_params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Merge user parameters with experiment defaults.

    Parameters
    ----------
    name : str
        Experiment name. Must be one of the keys in EXPERIMENTS_DICT.
    user_params : dict or None
        Parameters overriding the defaults.

    Returns
    -------
    dict
        Complete parameter set.

    Raises
    ------
    ValueError
        If the experiment is unknown or a parameter is not accepted by it.
    """
    if name not in EXPERIMENTS_DICT:
        raise ValueError(
            f"Unknown experiment: {name}. Available: {sorted(EXPERIMENTS_DICT)}"
        )

    params = dict(EXPERIMENTS_DICT[name].default_params)
    if user_params:
        unknown = set(user_params) - set(params)
        if unknown:
            raise ValueError(
                f"Unknown parameters for experiment '{name}': {sorted(unknown)}"
            )
        params.update(user_params)

    return params


def run_experiment(
    name: str,
    params: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Run one registered experiment.

    Parameters
    ----------
    name : str
        Key of EXPERIMENTS_DICT.
    params : dict, optional
        Overrides for the default parameters.
    logger : logging.Logger, optional
        Logger for progress messages. Defaults to the module logger.

    Returns
    -------
    dict
        Experiment outputs, including 'metrics' (scalar summaries),
        'params' (the merged parameters) and 'experiment' (the name).

    Examples
    --------
    >>> result = run_experiment("toy_mixture", {"N": 200})
    >>> result["metrics"]["subspace_similarity"] > 0.99
    True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    merged = merge_params_with_defaults(name, params)
    logger.debug(f"Running experiment '{name}' with params {merged}")

    result = EXPERIMENTS_DICT[name].runner(merged, logger)
    result["params"] = merged
    result["experiment"] = name

    logger.info(f"Experiment '{name}': {result['metrics']}")
    return result


def run_all_experiments(
    names=None,
    params: Optional[Dict[str, Dict[str, Any]]] = None,
    verbose: bool = False,
    logger: Optional[logging.Logger] = None,
) -> Dict[str, Dict[str, Any]]:
    """
    Run several experiments in sequence.

    Parameters
    ----------
    names : list of str, optional
        Experiments to run. Defaults to all registered experiments.
    params : dict, optional
        Per-experiment overrides, keyed by experiment name.
    verbose : bool, default=False
        Whether to show a progress bar.
    logger : logging.Logger, optional

    Returns
    -------
    dict
        Results keyed by experiment name.
    """
    if names is None:
        names = list(EXPERIMENTS_DICT)
    params = params or {}

    unknown = set(params) - set(names)
    if unknown:
        raise ValueError(f"Parameters given for experiments not being run: {sorted(unknown)}")

    results = {}
    for name in tqdm.tqdm(names, desc="Running experiments", disable=not verbose):
        results[name] = run_experiment(name, params.get(name), logger=logger)

    return results


def run_seed_sweep(
    name: str,
    seeds,
    params: Optional[Dict[str, Any]] = None,
    n_jobs: int = 1,
    backend: Optional[str] = None,
):
    """
    Repeat an experiment over several seeds, optionally in parallel.

    Parameters
    ----------
    name : str
        Key of EXPERIMENTS_DICT.
    seeds : iterable of int
        Values for the experiment's 'seed' parameter.
    params : dict, optional
        Overrides shared by all runs (must not contain 'seed').
    n_jobs : int, default=1
        Number of parallel jobs (-1 for all cores).
    backend : str, optional
        joblib backend; defaults to pcalab.PARALLEL_BACKEND.

    Returns
    -------
    list of dict
        ``{'seed': seed, 'metrics': {...}}`` per seed, in input order.
    """
    params = dict(params or {})
    if "seed" in params:
        raise ValueError("Pass seeds through the 'seeds' argument, not params")
    # validate once before dispatching
    merge_params_with_defaults(name, params)

    with parallel_executor(n_jobs, backend=backend) as parallel:
        results = parallel(
            delayed(run_experiment)(name, {**params, "seed": seed}) for seed in seeds
        )

    return [{"seed": r["params"]["seed"], "metrics": r["metrics"]} for r in results]
