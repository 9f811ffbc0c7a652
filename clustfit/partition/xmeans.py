"""
@authors:
Collin Leiber
"""

import numpy as np
from collections.abc import Callable
from sklearn.base import BaseEstimator, ClusterMixin
from clustfit.partition._cluster import Cluster
from clustfit.partition._clustering import Clustering
from clustfit.partition.kmeans import _execute_kmeans
from clustfit.utils._information_theory import bic_costs, spherical_gaussian_loglikelihood
from clustfit.utils.checks import check_parameters, check_metric
from clustfit.utils.geometry import BoundingBox
from clustfit.utils.kdtree import KDTree

"""
HELPERS also used by other classes
"""


def _bic_score(clusters: list, n_dims: int) -> float:
    """
    Calculate the BIC score of a set of clusters modelled as a mixture of spherical Gaussians with a common variance.
    Only clusters with more than one sample contribute to the log-likelihood.
    For more information see: 'X-means: Extending k-means with efficient estimation of the number of clusters'

    Parameters
    ----------
    clusters : list
        list containing the clusters. Their samples and sum of norms must already be computed
    n_dims : int
        Number of features in the data set

    Returns
    -------
    bic_total : float
        The BIC score of the clusters. None if the number of samples does not exceed the number of clusters
    """
    n_clusters = len(clusters)
    n_points = sum(cluster.n_samples for cluster in clusters)
    if n_points <= n_clusters:
        return None
    # Mixing weights, means and variances
    n_free_params = (n_clusters - 1) + n_clusters * n_dims + n_clusters
    variance = sum(cluster.sum_of_norms for cluster in clusters) / (n_points - n_clusters)
    bic_loglikelihood = sum(
        spherical_gaussian_loglikelihood(cluster.n_samples, n_points, n_dims, cluster.sum_of_norms, variance) for
        cluster in clusters if cluster.n_samples > 1)
    bic_total = bic_loglikelihood - n_free_params * bic_costs(n_points, False)
    return bic_total


def _execute_two_means(X: np.ndarray, center: np.ndarray, metric: Callable, init: str | Callable,
                       n_split_trials: int, random_state: np.random.RandomState) -> list:
    """
    Split a cluster into two using k-means.
    The first try uses the given init strategy. Each additional try selects a random sample as first new center and
    the coordinate on the opposite site of the original center as second new center.
    The result with the lowest sum of norms where both clusters contain at least one sample will be returned.

    Parameters
    ----------
    X : np.ndarray
        the samples of the cluster
    center : np.ndarray
        the original cluster center
    metric : Callable
        the metric used to compute the distances
    init : str | Callable
        Strategy to create the initial centers of the first try
    n_split_trials : int
        Number tries to split a cluster. For each try 2-KMeans is executed with different cluster centers
    random_state : np.random.RandomState
        use a fixed random state to get a repeatable solution

    Returns
    -------
    best_children : list
        The two resulting clusters. None if no try resulted in two non-empty clusters
    """
    assert X.shape[0] >= 2, "X must contain at least 2 elements"
    kd_tree = KDTree(X)
    best_children = None
    best_sum_of_norms = np.inf
    n_random_trials = min(n_split_trials - 1, X.shape[0])
    random_centers = X[random_state.choice(X.shape[0], n_random_trials, replace=False)]
    # Calculate second new centers as: new2 = old - (new1 - old)
    adjusted_centers = center - (random_centers - center)
    for i in range(n_random_trials + 1):
        n_clusters = 2 if i == 0 else np.array([random_centers[i - 1], adjusted_centers[i - 1]])
        children, _, _ = _execute_kmeans(X, n_clusters, kd_tree, metric, init, random_state=random_state)
        if any(child.n_samples == 0 for child in children):
            continue
        sum_of_norms = children[0].sum_of_norms + children[1].sum_of_norms
        if sum_of_norms < best_sum_of_norms:
            best_sum_of_norms = sum_of_norms
            best_children = children
    return best_children


class _ClusterCandidate():
    """
    A tentative cluster of XMeans together with the two clusters it would be replaced with if it was split.

    Parameters
    ----------
    cluster : Cluster
        the tentative cluster

    Attributes
    ----------
    cluster : Cluster
        the tentative cluster
    children : list
        the two clusters resulting from the last split. Empty if the cluster has not been split yet or can not be split
    bvalue : float
        BIC of the cluster minus the BIC of its children. Negative values indicate that splitting improves the model.
        Is np.inf if the cluster can not be split
    """

    def __init__(self, cluster: Cluster):
        self.cluster = cluster
        self.children = []
        self.bvalue = np.inf

    def split(self, metric: Callable, init: str | Callable, n_split_trials: int,
              random_state: np.random.RandomState) -> None:
        self.children = []
        self.bvalue = np.inf
        if self.cluster.n_samples < 2:
            return
        samples = np.array(self.cluster.samples)
        children = _execute_two_means(samples, self.cluster.center, metric, init, n_split_trials, random_state)
        if children is None:
            return
        # Decide if parent or children are better candidates to represent the samples
        parent_bic = _bic_score([self.cluster], samples.shape[1])
        children_bic = _bic_score(children, samples.shape[1])
        if parent_bic is None or children_bic is None:
            return
        self.children = children
        self.bvalue = parent_bic - children_bic


def _get_number_of_splits(bvalues: np.ndarray, max_n_clusters: int) -> int:
    """
    Get the number of cluster candidates that will be replaced by their children.
    Candidates must be sorted by their bvalues in ascending order. All candidates with a negative bvalue should be
    split as long as the total number of clusters stays below max_n_clusters.
    A single candidate will always be split if possible.

    Parameters
    ----------
    bvalues : np.ndarray
        the sorted bvalues of the candidates
    max_n_clusters : int
        Maximum number of clusters

    Returns
    -------
    n_splits : int
        The number of candidates to split, i.e. the first n_splits candidates will be split
    """
    if bvalues.shape[0] == 1:
        n_splits = 1 if np.isfinite(bvalues[0]) else 0
    else:
        n_splits = int(np.searchsorted(bvalues, 0., side="left"))
    n_splits = int(min(n_splits, max_n_clusters - bvalues.shape[0]))
    return n_splits


def _xmeans(X: np.ndarray, max_n_clusters: int, metric: Callable, init: str | Callable, n_split_trials: int,
            random_state: np.random.RandomState, debug: bool) -> (list, np.ndarray):
    """
    Start the actual XMeans clustering procedure on the input data set.

    Parameters
    ----------
    X : np.ndarray
        the given data set
    max_n_clusters : int
        Maximum number of clusters
    metric : Callable
        the metric used to compute the distances
    init : str | Callable
        Strategy to create the initial centers of the k-means executions
    n_split_trials : int
        Number tries to split a cluster. For each try 2-KMeans is executed with different cluster centers
    random_state : np.random.RandomState
        use a fixed random state to get a repeatable solution
    debug : bool
        If true, additional information will be printed to the console

    Returns
    -------
    tuple : (list, np.ndarray)
        The final clusters,
        The labels as identified by XMeans
    """
    # Scale input data to [0,1] for all axes
    bounding_box = BoundingBox.from_samples(X)
    sample_extent = bounding_box.extent()
    sample_extent[sample_extent == 0] = 1
    X_scaled = (X - bounding_box.min) / sample_extent
    kd_tree = KDTree(X_scaled)
    # The first clustering: in fact located at the mean of all samples
    clusters, _, _ = _execute_kmeans(X_scaled, 1, kd_tree, metric, init, random_state=random_state)
    cluster_candidates = [_ClusterCandidate(cluster) for cluster in clusters]
    n_clusters_old = 0
    while n_clusters_old < len(cluster_candidates) < max_n_clusters:
        n_clusters_old = len(cluster_candidates)
        if debug:
            print("=== XMeans round with {0} cluster candidates ===".format(n_clusters_old))
        # Split clusters => Improve-Structure
        for candidate in cluster_candidates:
            candidate.split(metric, init, n_split_trials, random_state)
            if debug:
                print("Candidate with {0} samples: bvalue = {1}".format(candidate.cluster.n_samples,
                                                                         candidate.bvalue))
        cluster_candidates.sort(key=lambda candidate: candidate.bvalue)
        n_splits = _get_number_of_splits(np.array([candidate.bvalue for candidate in cluster_candidates]),
                                         max_n_clusters)
        if debug:
            print("Splitting {0} candidates".format(n_splits))
        new_centers = []
        for i, candidate in enumerate(cluster_candidates):
            if i < n_splits:
                new_centers += [child.center for child in candidate.children]
            else:
                new_centers.append(candidate.cluster.center)
        # Correction clustering on all samples => Improve-Params
        clusters, _, _ = _execute_kmeans(X_scaled, np.array(new_centers), kd_tree, metric, init,
                                         random_state=random_state)
        cluster_candidates = [_ClusterCandidate(cluster) for cluster in clusters]
    # Transform centers back to the original space and execute a final k-means
    final_centers = np.array(
        [candidate.cluster.center for candidate in cluster_candidates]) * sample_extent + bounding_box.min
    if debug:
        print("XMeans finished with {0} clusters".format(final_centers.shape[0]))
    clusters, labels, _ = _execute_kmeans(X, final_centers, None, metric, init, random_state=random_state)
    return clusters, labels


class XMeans(Clustering, ClusterMixin, BaseEstimator):
    """
    Execute the XMeans clustering procedure.
    Starting with a single cluster, XMeans repeatedly tries to split each cluster into two using k-means. The Bayesian
    Information Criterion (BIC) of each cluster is compared with the one of its two children to decide which clusters
    should be split. Afterwards, k-means is executed on the whole data set with all resulting centers.
    This is repeated until the number of clusters does not change anymore or max_n_clusters is reached.
    All k-means executions are accelerated by a kd-tree (see FilteringKMeans). The data is scaled to [0, 1] in each
    feature beforehand.

    Parameters
    ----------
    max_n_clusters : int
        Maximum number of clusters. Must be at least 1 (default: np.inf)
    init : str | Callable
        Strategy to create the initial centers of the k-means executions. See FilteringKMeans (default: 'kdtree')
    metric : Callable
        the metric used to compute the distances, i.e. a function (np.ndarray, np.ndarray) -> float.
        If None, the (not squared) Euclidean distance is used (default: None)
    n_split_trials : int
        Number tries to split a cluster. The first try uses init, each additional try starts with a random sample and
        its reflection at the cluster center (default: 10)
    random_state : np.random.RandomState | int
        use a fixed random state to get a repeatable solution. Can also be of type int (default: None)
    debug : bool
        If true, additional information will be printed to the console (default: False)

    Attributes
    ----------
    n_clusters_ : int
        The final number of clusters
    labels_ : np.ndarray
        The final labels
    cluster_centers_ : np.ndarray
        The final cluster centers
    clusters_ : list
        The final clusters including their samples, bounds and sum of norms
    n_features_in_ : int
        the number of features used for the fitting

    Examples
    ----------
    >>> from clustfit.data import create_random_clustered_points
    >>> X, L, n_clusters = create_random_clustered_points(random_state=1)
    >>> xm = XMeans(max_n_clusters=2 * n_clusters, random_state=1)
    >>> xm.fit(X)

    References
    ----------
    Pelleg, Dan, and Andrew W. Moore. "X-means: Extending k-means with efficient estimation of the number of clusters."
    Icml. Vol. 1. 2000.
    """

    def __init__(self, max_n_clusters: int = np.inf, init: str | Callable = "kdtree", metric: Callable = None,
                 n_split_trials: int = 10, random_state: np.random.RandomState | int = None, debug: bool = False):
        self.max_n_clusters = max_n_clusters
        self.init = init
        self.metric = metric
        self.n_split_trials = n_split_trials
        self.random_state = random_state
        self.debug = debug

    def fit(self, X: np.ndarray, y: np.ndarray = None) -> 'XMeans':
        """
        Initiate the actual clustering process on the input data set.
        The resulting cluster labels will be stored in the labels_ attribute.

        Parameters
        ----------
        X : np.ndarray
            the given data set
        y : np.ndarray
            the labels (can be ignored)

        Returns
        -------
        self : XMeans
            this instance of the XMeans algorithm
        """
        if self.max_n_clusters < 1:
            raise ValueError("max_n_clusters must be at least 1. Your input: {0}".format(self.max_n_clusters))
        if self.n_split_trials < 1:
            raise ValueError("n_split_trials must be at least 1. Your input: {0}".format(self.n_split_trials))
        X, _, random_state = check_parameters(X=X, y=y, random_state=self.random_state, allow_size_1=True)
        metric = check_metric(self.metric)
        clusters, labels = _xmeans(X, self.max_n_clusters, metric, self.init, self.n_split_trials, random_state,
                                   self.debug)
        self._set_results(clusters, labels, metric, X.shape[1])
        return self
