"""Test public API imports for pcalab package."""


def test_main_package_import():
    """Test that the main pcalab package can be imported."""
    import pcalab

    assert hasattr(pcalab, "__version__")
    assert isinstance(pcalab.__version__, str)
    assert len(pcalab.__version__) > 0


def test_main_exports():
    """Test that main exports are available."""
    import pcalab

    # Generators
    assert hasattr(pcalab, "generate_mixture")
    assert hasattr(pcalab, "build_rotation_mixing")
    assert hasattr(pcalab, "generate_spike_train")
    assert hasattr(pcalab, "generate_electrode_signals")

    # PCA and evaluation
    assert hasattr(pcalab, "PCAModel")
    assert hasattr(pcalab, "fit_pca")
    assert hasattr(pcalab, "cosine_similarity_of_subspaces")

    # Experiments
    assert hasattr(pcalab, "run_experiment")
    assert hasattr(pcalab, "EXPERIMENTS_DICT")


def test_submodule_imports():
    """Test that submodules are importable and define __all__."""
    import pcalab.synthetic
    import pcalab.decomposition
    import pcalab.evaluation
    import pcalab.utils

    assert hasattr(pcalab.synthetic, "__all__")
    assert hasattr(pcalab.decomposition, "__all__")
    assert hasattr(pcalab.evaluation, "__all__")
    assert hasattr(pcalab.utils, "__all__")


def test_all_names_resolve():
    """Test that every name listed in __all__ exists."""
    import pcalab
    from pcalab import synthetic, decomposition, evaluation, utils

    for module in (pcalab, synthetic, decomposition, evaluation, utils):
        for name in module.__all__:
            assert hasattr(module, name), f"{module.__name__} is missing {name}"


def test_set_parallel_backend():
    """Test switching and validating the global parallel backend."""
    import pytest
    import pcalab

    original = pcalab.PARALLEL_BACKEND
    try:
        pcalab.set_parallel_backend("threading")
        assert pcalab.PARALLEL_BACKEND == "threading"

        from pcalab.utils.parallel import get_parallel_backend
        assert get_parallel_backend() == "threading"

        with pytest.raises(ValueError):
            pcalab.set_parallel_backend("dask")
    finally:
        pcalab.set_parallel_backend(original)
