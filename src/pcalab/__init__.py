"""
pcalab - Principal Component Analysis by example

Generators with a known ground truth (linear mixtures, spike trains recorded
through mixing electrodes), PCA with an explicit variance report, and
metrics that tell how well PCA recovers what generated the data.
"""

__version__ = "0.1.0"

# Backend used by parallel seed sweeps: 'loky', 'threading' or 'multiprocessing'
PARALLEL_BACKEND = "loky"


def set_parallel_backend(backend):
    """Set the joblib backend used by pcalab's parallel helpers."""
    global PARALLEL_BACKEND
    if backend not in ("loky", "threading", "multiprocessing"):
        raise ValueError(
            f"backend must be 'loky', 'threading' or 'multiprocessing', got {backend!r}"
        )
    PARALLEL_BACKEND = backend


# Core modules
from . import utils
from . import synthetic
from . import decomposition
from . import evaluation
from . import regression
from . import experiments

# Generators
from .synthetic import (
    generate_mixture,
    build_rotation_mixing,
    generate_spike_train,
    generate_electrode_signals,
)

# PCA
from .decomposition import PCAModel, PCAReport, fit_pca, tsne_projection

# Evaluation
from .evaluation import cosine_similarity_of_subspaces, compare_reconstruction

# Experiments
from .experiments import EXPERIMENTS_DICT, run_experiment, run_all_experiments

__all__ = [
    # Version and configuration
    "__version__",
    "PARALLEL_BACKEND",
    "set_parallel_backend",
    # Modules
    "utils",
    "synthetic",
    "decomposition",
    "evaluation",
    "regression",
    "experiments",
    # Generators
    "generate_mixture",
    "build_rotation_mixing",
    "generate_spike_train",
    "generate_electrode_signals",
    # PCA
    "PCAModel",
    "PCAReport",
    "fit_pca",
    "tsne_projection",
    # Evaluation
    "cosine_similarity_of_subspaces",
    "compare_reconstruction",
    # Experiments
    "EXPERIMENTS_DICT",
    "run_experiment",
    "run_all_experiments",
]
