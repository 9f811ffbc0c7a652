from clustfit.partition import Cluster, ClusterUpdate
from clustfit.utils.geometry import euclidean_distance
import numpy as np


def test_cluster_update():
    update = ClusterUpdate(2)
    assert update.is_empty()
    update.add(np.array([1, 2]))
    update.add(np.array([3, 0]), 3)
    assert not update.is_empty()
    assert update.normalization_factor == 4
    assert np.array_equal(update.weighted_sum, [10, 2])
    assert np.allclose(update.mean(), [2.5, 0.5])


def test_cluster_apply_updates():
    cluster = Cluster(np.array([0, 0]))
    assert cluster.center.dtype == np.float64
    # No updates => center stays the same
    assert not cluster.apply_updates(euclidean_distance)
    assert np.array_equal(cluster.center, [0, 0])
    cluster.update(np.array([2, 2]), 2)
    cluster.update(np.array([-1, 2]))
    assert cluster.normalization_factor == 3
    assert np.array_equal(cluster.center, [0, 0])
    assert cluster.apply_updates(euclidean_distance)
    assert np.allclose(cluster.center, [1, 2])
    assert cluster.normalization_factor == 0
    # Second call without new updates changes nothing
    assert not cluster.apply_updates(euclidean_distance)
    assert np.allclose(cluster.center, [1, 2])
    # Tiny movements are not noticeable
    cluster.update(cluster.center + 1e-8)
    assert not cluster.apply_updates(euclidean_distance)


def test_cluster_samples_and_sum_of_norms():
    cluster = Cluster(np.array([1, 1]))
    samples = np.array([[0, 1], [1, 3], [2, 1]])
    for sample in samples:
        cluster.add_sample(sample)
    assert cluster.n_samples == 3
    assert np.array_equal(cluster.bounds.min, [0, 1])
    assert np.array_equal(cluster.bounds.max, [2, 3])
    cluster.compute_sum_of_norms(euclidean_distance)
    assert np.isclose(cluster.sum_of_norms, 1 + 4 + 1)
    # Recomputation does not accumulate
    cluster.compute_sum_of_norms(euclidean_distance)
    assert np.isclose(cluster.sum_of_norms, 6)
