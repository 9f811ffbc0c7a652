import numpy as np
from sklearn.utils import check_random_state
from clustfit.utils.geometry import BoundingBox

"""
Quantiles of the standard normal distribution. Used to define how many samples of a cluster lie within its radius
"""
NORMAL_QUANTILE_95 = 1.6449
NORMAL_QUANTILE_99 = 2.3263
NORMAL_QUANTILE_99_9 = 3.0902


def _place_clusters(n_clusters: int, max_n_clusters: int, cluster_radius: tuple, window_size: float,
                    random_state: np.random.RandomState) -> (np.ndarray, np.ndarray):
    """
    Place circular clusters randomly within a square window without overlaps.
    Two clusters overlap if the distance of their centers is smaller than twice the sum of their radii.
    At most 10 * max_n_clusters placements are tried, so fewer than n_clusters clusters can be returned.

    Parameters
    ----------
    n_clusters : int
        the number of clusters that should be placed
    max_n_clusters : int
        the upper bound of the number of clusters. Defines the number of tries
    cluster_radius : tuple
        the lower and upper bound of the cluster radii
    window_size : float
        the side length of the window centered at the origin
    random_state : np.random.RandomState
        use a fixed random state to get a repeatable solution

    Returns
    -------
    tuple : (np.ndarray, np.ndarray)
        The cluster centers,
        The cluster radii
    """
    centers = []
    radii = []
    center_bound = 0.5 * window_size - cluster_radius[1]
    n_tries = 0
    while len(centers) < n_clusters and n_tries < max_n_clusters * 10:
        n_tries += 1
        center = random_state.uniform(-center_bound, center_bound, 2)
        radius = random_state.uniform(cluster_radius[0], cluster_radius[1])
        overlapping = any(
            np.sqrt(np.sum((other_center - center) ** 2)) < 2 * (other_radius + radius) for other_center, other_radius
            in zip(centers, radii))
        if not overlapping:
            centers.append(center)
            radii.append(radius)
    return np.array(centers).reshape((-1, 2)), np.array(radii)


def create_random_clustered_points(n_samples: tuple = (2000, 4000), n_clusters: tuple = (3, 15),
                                   cluster_radius: tuple = (20, 60), window_size: float = 600,
                                   quantile_factor: float = NORMAL_QUANTILE_95,
                                   random_state: np.random.RandomState | int = None) -> (np.ndarray, np.ndarray, int):
    """
    Create a two-dimensional data set containing a random number of circular Gaussian clusters within a square window
    centered at the origin.
    First, the number of clusters is drawn from the n_clusters range and the clusters are placed without overlaps.
    If not all of them fit into the window, the number of clusters is reduced.
    Afterwards, the number of samples is drawn from the n_samples range. Each sample is created by choosing a random
    cluster and drawing each coordinate from a normal distribution with the cluster's center as mean and
    radius / quantile_factor as standard deviation. Samples outside the window are discarded and drawn again.

    Parameters
    ----------
    n_samples : tuple
        the lower and upper bound (both inclusive) of the number of samples (default: (2000, 4000))
    n_clusters : tuple
        the lower and upper bound (both inclusive) of the number of clusters (default: (3, 15))
    cluster_radius : tuple
        the lower and upper bound of the cluster radii (default: (20, 60))
    window_size : float
        the side length of the window (default: 600)
    quantile_factor : float
        quantile of the standard normal distribution defining the share of samples within the radius of a cluster (default: NORMAL_QUANTILE_95)
    random_state : np.random.RandomState | int
        The random state (default: None)

    Returns
    -------
    tuple : (np.ndarray, np.ndarray, int)
        the data numpy array (n_samples x 2),
        the labels numpy array (n_samples),
        the number of clusters that were actually placed
    """
    assert n_samples[0] >= 1 and n_samples[0] <= n_samples[1], "n_samples must be a valid range of positive values"
    assert n_clusters[0] >= 1 and n_clusters[0] <= n_clusters[1], "n_clusters must be a valid range of positive values"
    assert cluster_radius[0] > 0 and cluster_radius[0] <= cluster_radius[1], "cluster_radius must be a valid range"
    assert 2 * cluster_radius[1] < window_size, "The clusters must fit into the window"
    random_state = check_random_state(random_state)
    n_clusters_target = random_state.randint(n_clusters[0], n_clusters[1] + 1)
    centers, radii = _place_clusters(n_clusters_target, n_clusters[1], cluster_radius, window_size, random_state)
    n_clusters_final = centers.shape[0]
    if n_clusters_final < n_clusters_target:
        print("WARNING: Could not fit more than {0} clusters into the given area".format(n_clusters_final))
    stds = radii / quantile_factor
    n_samples_final = random_state.randint(n_samples[0], n_samples[1] + 1)
    window = BoundingBox(np.full(2, -0.5 * window_size), np.full(2, 0.5 * window_size))
    X = np.zeros((n_samples_final, 2))
    L = np.zeros(n_samples_final, dtype=np.int32)
    n_created = 0
    while n_created < n_samples_final:
        cluster_id = random_state.randint(n_clusters_final)
        sample = random_state.normal(centers[cluster_id], stds[cluster_id])
        if window.contains(sample):
            X[n_created] = sample
            L[n_created] = cluster_id
            n_created += 1
    return X, L, n_clusters_final
