"""Tests for PCA and t-SNE projections."""

import numpy as np
import pytest

from pcalab.decomposition.embedding import pca_projection, tsne_projection
from pcalab.decomposition.pca import fit_pca


@pytest.fixture
def two_blobs():
    """Two well separated 5D blobs."""
    rs = np.random.RandomState(42)
    data = np.vstack([rs.randn(30, 5), rs.randn(30, 5) + 8.0])
    labels = np.repeat([0, 1], 30)
    return data, labels


def test_pca_projection_matches_scores(anisotropic_data):
    """The projection equals the scores of the leading components."""
    projection = pca_projection(anisotropic_data, out_dim=2)
    expected = fit_pca(anisotropic_data, maxoutdim=2, pratio=1.0).transform(anisotropic_data)
    assert projection.shape == (200, 2)
    np.testing.assert_allclose(projection, expected)


def test_pca_projection_invalid_dim(anisotropic_data):
    """out_dim must be positive."""
    with pytest.raises(ValueError):
        pca_projection(anisotropic_data, out_dim=0)


class TestTSNE:
    """Test the t-SNE wrapper."""

    def test_shape(self, two_blobs):
        """One output row per sample."""
        data, _ = two_blobs
        embedding = tsne_projection(data, perplexity=10.0, max_iter=250, seed=0)
        assert embedding.shape == (60, 2)
        assert np.all(np.isfinite(embedding))

    def test_separates_blobs(self, two_blobs):
        """Distinct blobs stay apart in the embedding."""
        data, labels = two_blobs
        embedding = tsne_projection(data, perplexity=10.0, max_iter=500, seed=0)
        centers = np.array([embedding[labels == k].mean(axis=0) for k in (0, 1)])
        spread = max(embedding[labels == k].std(axis=0).max() for k in (0, 1))
        assert np.linalg.norm(centers[0] - centers[1]) > 2 * spread

    def test_initial_pca_reduction(self, two_blobs):
        """initial_dims reduces the features before the embedding."""
        data, _ = two_blobs
        embedding = tsne_projection(data, initial_dims=3, perplexity=10.0, max_iter=250, seed=1)
        assert embedding.shape == (60, 2)

    def test_perplexity_must_be_below_sample_count(self, two_blobs):
        """Perplexity has to be smaller than the number of samples."""
        data, _ = two_blobs
        with pytest.raises(ValueError, match="perplexity"):
            tsne_projection(data, perplexity=60.0)

    @pytest.mark.parametrize("kwargs", [{"out_dim": 0}, {"initial_dims": -1}, {"max_iter": 0}])
    def test_invalid_arguments(self, two_blobs, kwargs):
        """Non-positive sizes are rejected."""
        data, _ = two_blobs
        with pytest.raises(ValueError):
            tsne_projection(data, perplexity=10.0, **kwargs)

    def test_too_few_iterations(self, two_blobs):
        """The optimizer needs at least 250 iterations."""
        data, _ = two_blobs
        with pytest.raises(ValueError, match="at least 250"):
            tsne_projection(data, perplexity=10.0, max_iter=100)
