# tests/test_kmeans_basic.py
"""
Single-process K-means: the reference scenarios, empty clusters, the
round cap and the estimator surface.
"""

import numpy as np
import pytest
import torch

from dkmeans import KMeans
from dkmeans.spaces import SymbolSpace

from data_gen import make_blobs_2d
from utils import as_sets, perm_invariant_accuracy


def test_two_pairs_of_points(four_points):
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (10.0, 10.0)], max_iter=10)
    km.fit(four_points)

    assert as_sets(km.clusters_) == {frozenset({0, 1}), frozenset({2, 3})}
    assert km.labels_.tolist() == [0, 0, 1, 1]
    # one round assigns everything, the second confirms nothing moved
    assert km.n_iter_ == 2
    assert km.converged_
    assert torch.allclose(km.cluster_centers_,
                          torch.tensor([[0.0, 0.5], [10.0, 10.5]], dtype=torch.float64))
    assert km.inertia_ == pytest.approx(1.0)


def test_two_pairs_of_strands(four_strands):
    km = KMeans(n_clusters=2, init=["AAAA", "TTTT"])
    km.fit(four_strands)

    assert isinstance(km.space_, SymbolSpace)
    assert as_sets(km.clusters_) == {frozenset({0, 1}), frozenset({2, 3})}
    assert km.converged_
    assert km.format_centers()[0] == "AAAA"


def test_empty_cluster_falls_back_to_origin():
    X = torch.tensor([[0.0, 0.0], [1.0, 0.0]], dtype=torch.float64)
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (100.0, 100.0)], max_iter=10)
    km.fit(X)

    # round 1 leaves cluster 1 empty, so its centroid becomes (0, 0) and
    # it captures (0, 0) in round 2
    first = km.history_[0]
    assert first.counts == [2, 0]
    assert km.labels_.tolist() == [1, 0]
    assert km.n_iter_ == 3
    assert km.converged_


def test_empty_symbol_cluster_is_kept():
    strands = ["AAAA", "AAAC", "AACA"]
    km = KMeans(n_clusters=2, init=["AAAA", "TTTT"], max_iter=5)
    km.fit(strands)

    assert km.result_.counts[1] == 0 or km.result_.counts[0] == 0
    assert sum(km.result_.counts) == 3
    assert km.converged_


def test_round_cap_forces_stop():
    X, _ = make_blobs_2d(n_per=30, seed=1)
    km = KMeans(n_clusters=3, max_iter=1, random_state=0)
    km.fit(X)

    assert km.n_iter_ == 1
    assert not km.converged_
    # the result of the single round is still a complete partition
    assert sorted(i for c in km.clusters_ for i in c.tolist()) == list(range(90))


def test_recovers_blobs():
    X, y = make_blobs_2d(n_per=50, centers=((0.0, 0.0), (10.0, 10.0)), seed=0)
    km = KMeans(n_clusters=2, init=X[[0, 50]], random_state=0).fit(X)
    assert perm_invariant_accuracy(km.labels_.numpy(), 50) == 1.0


def test_reproducible_with_seed():
    X, _ = make_blobs_2d(n_per=40, seed=2)
    a = KMeans(n_clusters=3, random_state=42).fit(X)
    b = KMeans(n_clusters=3, random_state=42).fit(X)
    assert torch.equal(a.labels_, b.labels_)


def test_predict_matches_training_labels():
    X, _ = make_blobs_2d(n_per=40, seed=3)
    km = KMeans(n_clusters=3, random_state=0)
    labels = km.fit_predict(X)
    assert torch.equal(km.predict(X), labels)


def test_predict_before_fit():
    with pytest.raises(RuntimeError):
        KMeans(n_clusters=2).predict(np.zeros((3, 2)))


def test_single_cluster_contains_everything(four_points):
    km = KMeans(n_clusters=1, random_state=0).fit(four_points)
    assert km.clusters_[0].tolist() == [0, 1, 2, 3]
    assert torch.allclose(km.cluster_centers_[0],
                          torch.tensor([5.0, 5.5], dtype=torch.float64))


@pytest.mark.parametrize("kwargs", [
    {'n_clusters': 0},
    {'n_clusters': 5},
    {'n_clusters': 2, 'max_iter': 0},
    {'n_clusters': 2, 'init': 'k-means++'},
    {'n_clusters': 2, 'init': [(0.0, 0.0)]},
])
def test_configuration_errors(four_points, kwargs):
    with pytest.raises(ValueError):
        KMeans(**kwargs).fit(four_points)


def test_get_set_params():
    km = KMeans(n_clusters=3)
    params = km.get_params()
    assert params['n_clusters'] == 3
    assert params['init'] == 'random'
    km.set_params(max_iter=7)
    assert km.max_iter == 7
    with pytest.raises(ValueError):
        km.set_params(tol=1e-3)
