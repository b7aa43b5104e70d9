"""Tests for principal component regression."""

import logging

import numpy as np
import pytest

from pcalab.regression import rmse, random_split, compare_pcr
from pcalab.synthetic.datasets import generate_pcr_data


def test_rmse():
    """Root mean squared error of simple vectors."""
    assert rmse([1.0, 2.0], [1.0, 2.0]) == 0.0
    assert np.isclose(rmse([0.0, 0.0], [3.0, 4.0]), np.sqrt(12.5))


def test_rmse_shape_mismatch():
    """Inputs must have the same shape."""
    with pytest.raises(ValueError, match="Shapes differ"):
        rmse([1.0, 2.0], [1.0])


class TestRandomSplit:
    """Test train/test masks."""

    @pytest.mark.parametrize("seed", range(5))
    def test_both_sides_nonempty(self, seed):
        """Neither side of the split is empty, even for tiny n."""
        mask = random_split(2, seed=seed)
        assert mask.dtype == bool
        assert mask.sum() == 1

    def test_roughly_half(self):
        """About half the samples go to training."""
        mask = random_split(1000, seed=0)
        assert 400 < mask.sum() < 600

    def test_reproducible(self):
        """The same seed gives the same mask."""
        np.testing.assert_array_equal(random_split(50, seed=3), random_split(50, seed=3))

    def test_too_few_samples(self):
        """One sample cannot be split."""
        with pytest.raises(ValueError):
            random_split(1)


class TestComparePCR:
    """Test OLS vs PCR on redundant predictors."""

    def test_pcr_beats_ols(self):
        """With few hidden factors PCR generalizes better than OLS."""
        x, y = generate_pcr_data(seed=0)
        result = compare_pcr(x, y, seed=0)

        assert result["pcr_rmse"] < result["ols_rmse"]
        assert 5 <= result["n_components"] <= 10
        assert result["train_mask"].shape == (120,)

    def test_explicit_mask(self):
        """A given training mask is used as-is."""
        x, y = generate_pcr_data(seed=1, n=40, n_features=8, n_hidden=3)
        mask = np.arange(40) < 30
        result = compare_pcr(x, y, train_mask=mask)
        np.testing.assert_array_equal(result["train_mask"], mask)

    @pytest.mark.parametrize("n_train", [0, 40])
    def test_one_sided_mask_rejected(self, n_train):
        """Both the training and the test side must hold samples."""
        x, y = generate_pcr_data(seed=1, n=40, n_features=8, n_hidden=3)
        mask = np.arange(40) < n_train
        with pytest.raises(ValueError, match="each side"):
            compare_pcr(x, y, train_mask=mask)

    def test_mask_length_mismatch(self):
        """The training mask needs one entry per sample."""
        x, y = generate_pcr_data(seed=1, n=40, n_features=8, n_hidden=3)
        with pytest.raises(ValueError, match="train_mask shape"):
            compare_pcr(x, y, train_mask=np.arange(30) < 20)

    def test_full_pratio_keeps_all_components(self):
        """pratio=1 keeps min(n_train, n_features) components."""
        x, y = generate_pcr_data(seed=1, n=40, n_features=8, n_hidden=3)
        mask = np.arange(40) < 30
        result = compare_pcr(x, y, train_mask=mask, pratio=1.0)
        assert result["n_components"] == 8
        # the full PCA basis is a rotation, so PCR equals OLS
        assert np.isclose(result["pcr_rmse"], result["ols_rmse"])

    def test_logs_result(self, caplog):
        """The comparison is logged at INFO level."""
        x, y = generate_pcr_data(seed=0)
        with caplog.at_level(logging.INFO, logger="pcalab.regression"):
            compare_pcr(x, y, seed=0)
        assert "PCR with" in caplog.text

    def test_length_mismatch(self):
        """x and y must have the same number of samples."""
        with pytest.raises(ValueError, match="must match"):
            compare_pcr(np.ones((5, 2)), np.ones(4))

    def test_invalid_pratio(self):
        """pratio must lie in (0, 1]."""
        x, y = generate_pcr_data(seed=0, n=20)
        with pytest.raises(ValueError, match="pratio"):
            compare_pcr(x, y, pratio=0.0)
