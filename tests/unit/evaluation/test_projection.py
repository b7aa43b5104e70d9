"""Tests for cluster separation in projections."""

import numpy as np
import pytest

from pcalab.evaluation.projection import cluster_separation, compare_projections


@pytest.fixture
def labeled_points():
    rs = np.random.RandomState(0)
    separated = np.vstack([rs.randn(40, 2), rs.randn(40, 2) + 10.0])
    mixed = rs.randn(80, 2)
    labels = np.repeat([0, 1], 40)
    return separated, mixed, labels


def test_separated_clusters_score_high(labeled_points):
    """Well separated clusters approach a silhouette of 1."""
    separated, _, labels = labeled_points
    assert cluster_separation(separated, labels) > 0.8


def test_mixed_clusters_score_low(labeled_points):
    """Randomly labeled noise has a silhouette near 0."""
    _, mixed, labels = labeled_points
    assert abs(cluster_separation(mixed, labels)) < 0.2


def test_compare_projections(labeled_points):
    """Scores are returned per projection name."""
    separated, mixed, labels = labeled_points
    result = compare_projections({"good": separated, "bad": mixed}, labels)
    assert set(result) == {"good", "bad"}
    assert result["good"] > result["bad"]


def test_label_length_mismatch(labeled_points):
    """Every point needs a label."""
    separated, _, labels = labeled_points
    with pytest.raises(ValueError, match="must match"):
        cluster_separation(separated, labels[:-1])


def test_single_label_rejected(labeled_points):
    """Silhouette needs at least two clusters."""
    separated, _, _ = labeled_points
    with pytest.raises(ValueError, match="2 distinct labels"):
        cluster_separation(separated, np.zeros(80))
