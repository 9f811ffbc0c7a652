from clustfit.data import create_random_clustered_points, NORMAL_QUANTILE_99
from clustfit.data.synthetic_data_creator import _place_clusters
import numpy as np


def test_place_clusters():
    rs = np.random.RandomState(1)
    centers, radii = _place_clusters(5, 5, (5, 10), 600, rs)
    assert centers.shape == (5, 2)
    assert radii.shape == (5,)
    assert np.all((radii >= 5) & (radii <= 10))
    assert np.all(np.abs(centers) <= 300 - 10)
    for i in range(5):
        for j in range(i + 1, 5):
            assert np.sqrt(np.sum((centers[i] - centers[j]) ** 2)) >= 2 * (radii[i] + radii[j])
    # Window too small to place more than one cluster
    centers, radii = _place_clusters(3, 3, (20, 20), 60, rs)
    assert centers.shape == (1, 2)


def test_create_random_clustered_points():
    X, L, n_clusters = create_random_clustered_points(random_state=1)
    assert X.shape[1] == 2
    assert 2000 <= X.shape[0] <= 4000
    assert L.shape == (X.shape[0],)
    assert L.dtype == np.int32
    assert 1 <= n_clusters <= 15
    assert np.all(L < n_clusters)
    assert np.all(np.abs(X) <= 300)
    # Check if random state is working
    X2, L2, n_clusters2 = create_random_clustered_points(random_state=1)
    assert np.array_equal(X, X2)
    assert np.array_equal(L, L2)
    assert n_clusters == n_clusters2
    X3, _, _ = create_random_clustered_points(random_state=2)
    assert not np.array_equal(X[:10], X3[:10])


def test_create_random_clustered_points_with_parameters():
    X, L, n_clusters = create_random_clustered_points(n_samples=(100, 100), n_clusters=(3, 3),
                                                      cluster_radius=(5, 10), window_size=100,
                                                      quantile_factor=NORMAL_QUANTILE_99, random_state=3)
    assert X.shape == (100, 2)
    assert n_clusters <= 3
    assert np.all(np.abs(X) <= 50)
    # Samples are located near their cluster
    for c in range(n_clusters):
        if np.any(L == c):
            cluster_samples = X[L == c]
            assert np.all(np.std(cluster_samples, axis=0) < 10)
