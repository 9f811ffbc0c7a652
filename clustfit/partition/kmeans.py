"""
@authors:
Collin Leiber
"""

import numpy as np
from collections.abc import Callable
from sklearn.base import BaseEstimator, ClusterMixin
from sklearn.utils import check_random_state
from clustfit.partition._clustering import Clustering, _get_nearest_cluster_id, _assign_samples, \
    _clusters_from_centers
from clustfit.utils.checks import check_parameters, check_metric
from clustfit.utils.kdtree import KDTree, KDTreeNode

"""
HELPERS also used by other classes
"""


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _generate_initial_cluster_positions(node: KDTreeNode, n: int) -> list:
    """
    Generate initial cluster centers using a heuristic on the kd-tree.
    The n centers are distributed across the two children of a node proportionally to the number of samples they
    contain. A leaf receives at most as many centers as it has samples, all of them located at its center of mass.

    Parameters
    ----------
    node : KDTreeNode
        the root of the subtree that should be used to generate the centers
    n : int
        the number of centers that should be generated

    Returns
    -------
    centers : list
        List containing the generated centers
    """
    if n == 0:
        return []
    if node.is_leaf:
        return [node.center_of_mass.copy() for _ in range(min(n, node.n_points))]
    n_left = _round_half_up(n * node.left_child.n_points / node.n_points)
    centers = _generate_initial_cluster_positions(node.left_child, n_left)
    centers += _generate_initial_cluster_positions(node.right_child, n - n_left)
    return centers


def _initial_cluster_centers(X: np.ndarray, n_clusters: int | np.ndarray, init: str | Callable, kd_tree: KDTree,
                             random_state: np.random.RandomState) -> np.ndarray:
    """
    Get the initial cluster centers based on the n_clusters and init parameters.
    If n_clusters is of type np.ndarray, it is used as the initial centers and init is ignored.

    Parameters
    ----------
    X : np.ndarray
        the given data set
    n_clusters : int | np.ndarray
        The number of clusters. Can also be of type np.ndarray if initial cluster centers are specified
    init : str | Callable
        Strategy to create the initial centers. Can be 'kdtree', 'random' or a callable
        (X, n_clusters, kd_tree, random_state) -> np.ndarray
    kd_tree : KDTree
        the kd-tree on X
    random_state : np.random.RandomState
        use a fixed random state to get a repeatable solution

    Returns
    -------
    centers : np.ndarray
        The initial cluster centers
    """
    if isinstance(n_clusters, np.ndarray):
        centers = np.array(n_clusters, dtype=np.float64)
    elif isinstance(n_clusters, (int, np.integer)):
        if n_clusters < 1:
            raise ValueError("n_clusters must be at least 1. Your input: {0}".format(n_clusters))
        if n_clusters > X.shape[0]:
            raise ValueError("n_clusters ({0}) can not be larger than the number of samples ({1})".format(
                n_clusters, X.shape[0]))
        if type(init) is str and init == "kdtree":
            centers = np.array(_generate_initial_cluster_positions(kd_tree.root, n_clusters))
            assert centers.shape[0] == n_clusters, "The kd-tree heuristic created {0} instead of {1} centers".format(
                centers.shape[0], n_clusters)
        elif type(init) is str and init == "random":
            centers = X[random_state.choice(X.shape[0], n_clusters, replace=False)]
        elif callable(init):
            centers = np.array(init(X, n_clusters, kd_tree, random_state), dtype=np.float64)
            if centers.ndim != 2 or centers.shape[0] != n_clusters:
                raise ValueError(
                    "The init callable must return {0} centers. Shape of the result: {1}".format(n_clusters,
                                                                                                 centers.shape))
        else:
            raise ValueError("init must be 'kdtree', 'random' or a callable. Your input: {0}".format(init))
    else:
        raise ValueError("n_clusters must be of type int or np.ndarray. Your input: {0}".format(n_clusters))
    if centers.ndim != 2 or centers.shape[0] == 0:
        raise ValueError("At least one initial cluster center must be specified. Shape of the centers: {0}".format(
            centers.shape))
    if centers.shape[1] != X.shape[1]:
        raise ValueError("The initial cluster centers have {0} features but X has {1}".format(centers.shape[1],
                                                                                             X.shape[1]))
    return centers


def _distance_to_node(x: np.ndarray, node: KDTreeNode, metric: Callable) -> float:
    """
    Get a lower bound of the distance between a point and the samples of a kd-tree node.
    Therefore, a copy of the point is clipped to the bounding box of the node.

    Parameters
    ----------
    x : np.ndarray
        the point
    node : KDTreeNode
        the node
    metric : Callable
        the metric used to compute the distance

    Returns
    -------
    distance : float
        The distance between the point and the bounding box of the node
    """
    return metric(x, node.bounding_box.clip(x))


def _is_dominating(owner_candidate_id: int, clusters: list, node: KDTreeNode, metric: Callable) -> bool:
    """
    Check if the owner candidate is nearer than all other clusters to every point within the bounding box of the node.
    For each other cluster, only the corner of the box that is most favourable to that cluster is checked.

    Parameters
    ----------
    owner_candidate_id : int
        the id of the cluster that owns the node if it is dominating
    clusters : list
        list containing the clusters
    node : KDTreeNode
        the node
    metric : Callable
        the metric used to compute the distances

    Returns
    -------
    dominating : bool
        True if the candidate dominates all other clusters
    """
    candidate_center = clusters[owner_candidate_id].center
    box = node.bounding_box
    for cluster_id, cluster in enumerate(clusters):
        if cluster_id == owner_candidate_id:
            continue
        # Outermost point of the box in direction from candidate to challenger
        check_point = np.where(cluster.center > candidate_center, box.max, box.min)
        if metric(cluster.center, check_point) <= metric(candidate_center, check_point):
            return False
    return True


def _update_from_kd_tree_node(node: KDTreeNode, clusters: list, metric: Callable) -> int:
    """
    Recursively add the samples of the kd-tree node to the updates of their nearest clusters.
    If a single cluster dominates all others within the bounding box of a node, the whole node is assigned to this
    cluster at once. Else, the children are processed.
    See 'Accelerating exact k-means algorithms with geometric reasoning' for more information.

    Parameters
    ----------
    node : KDTreeNode
        the kd-tree node to process
    clusters : list
        list containing the clusters
    metric : Callable
        the metric used to compute the distances

    Returns
    -------
    n_visited : int
        The number of nodes visited in this subtree
    """
    if node.is_leaf:
        nearest_cluster_id = _get_nearest_cluster_id(clusters, node.center_of_mass, metric)
        clusters[nearest_cluster_id].update(node.center_of_mass, node.n_points)
        return 1
    # Find owner candidate. Equal distances of two clusters mean that there is no candidate
    owner_candidate_id = None
    shortest_distance = np.inf
    for cluster_id, cluster in enumerate(clusters):
        distance = _distance_to_node(cluster.center, node, metric)
        if distance == shortest_distance:
            owner_candidate_id = None
        if distance < shortest_distance:
            shortest_distance = distance
            owner_candidate_id = cluster_id
    if owner_candidate_id is not None and _is_dominating(owner_candidate_id, clusters, node, metric):
        clusters[owner_candidate_id].update(node.center_of_mass, node.n_points)
        return 1
    n_visited = _update_from_kd_tree_node(node.left_child, clusters, metric)
    n_visited += _update_from_kd_tree_node(node.right_child, clusters, metric)
    return n_visited + 1


def _update_brute_force(X: np.ndarray, clusters: list, metric: Callable) -> int:
    """
    Add each sample to the update of its nearest cluster (classic Lloyd step).

    Parameters
    ----------
    X : np.ndarray
        the given data set
    clusters : list
        list containing the clusters
    metric : Callable
        the metric used to compute the distances

    Returns
    -------
    n_visited : int
        The number of processed samples
    """
    for sample in X:
        clusters[_get_nearest_cluster_id(clusters, sample, metric)].update(sample)
    return X.shape[0]


def _kmeans(X: np.ndarray, clusters: list, kd_tree: KDTree, metric: Callable, algorithm: str, max_iter: int,
            debug: bool) -> (np.ndarray, int):
    """
    Start the actual k-means procedure on the input data set.
    The centers of the given clusters are updated until no center moves anymore or max_iter is reached.
    Afterwards, each sample is added to its nearest cluster.

    Parameters
    ----------
    X : np.ndarray
        the given data set
    clusters : list
        list containing the clusters located at their initial centers. Will be changed in-place
    kd_tree : KDTree
        the kd-tree on X. Only used if algorithm is 'filtering'
    metric : Callable
        the metric used to compute the distances
    algorithm : str
        'filtering' to use the kd-tree or 'lloyd' to process each sample individually
    max_iter : int
        maximum number of iterations
    debug : bool
        If true, additional information will be printed to the console

    Returns
    -------
    tuple : (np.ndarray, int)
        The final labels,
        The number of iterations
    """
    n_iter = 0
    any_update_noticeable = True
    while any_update_noticeable and n_iter < max_iter:
        if algorithm == "filtering":
            n_visited = _update_from_kd_tree_node(kd_tree.root, clusters, metric)
        else:
            n_visited = _update_brute_force(X, clusters, metric)
        # Update all clusters and check if termination is reached
        any_update_noticeable = False
        for cluster in clusters:
            update_noticeable = cluster.apply_updates(metric)
            any_update_noticeable = any_update_noticeable or update_noticeable
        n_iter += 1
        if debug:
            print("k-means iteration {0}: visited {1} nodes, centers changed: {2}".format(n_iter, n_visited,
                                                                                          any_update_noticeable))
    labels = _assign_samples(X, clusters, metric)
    return labels, n_iter


def _execute_kmeans(X: np.ndarray, n_clusters: int | np.ndarray, kd_tree: KDTree = None, metric: Callable = None,
                    init: str | Callable = "kdtree", algorithm: str = "filtering", max_iter: int = 300,
                    random_state: np.random.RandomState = None, debug: bool = False) -> (list, np.ndarray, int):
    """
    Check the parameters, create the initial clusters and execute k-means.

    Parameters
    ----------
    X : np.ndarray
        the given data set
    n_clusters : int | np.ndarray
        The number of clusters. Can also be of type np.ndarray if initial cluster centers are specified
    kd_tree : KDTree
        a pre-computed kd-tree on X. If None, it will be created (default: None)
    metric : Callable
        the metric used to compute the distances. If None, the Euclidean distance is used (default: None)
    init : str | Callable
        Strategy to create the initial centers if n_clusters is an int (default: 'kdtree')
    algorithm : str
        'filtering' to use the kd-tree or 'lloyd' to process each sample individually (default: 'filtering')
    max_iter : int
        maximum number of iterations (default: 300)
    random_state : np.random.RandomState
        use a fixed random state to get a repeatable solution (default: None)
    debug : bool
        If true, additional information will be printed to the console (default: False)

    Returns
    -------
    tuple : (list, np.ndarray, int)
        The final clusters,
        The final labels,
        The number of iterations
    """
    if algorithm not in ["filtering", "lloyd"]:
        raise ValueError("algorithm must be 'filtering' or 'lloyd'. Your input: {0}".format(algorithm))
    if max_iter < 1:
        raise ValueError("max_iter must be at least 1. Your input: {0}".format(max_iter))
    if X.ndim != 2 or X.shape[0] == 0:
        raise ValueError("k-means requires a non-empty 2d data set. Shape of X: {0}".format(X.shape))
    metric = check_metric(metric)
    random_state = check_random_state(random_state)
    if kd_tree is None:
        kd_tree = KDTree(X)
    elif kd_tree.n_points != X.shape[0] or kd_tree.n_dims != X.shape[1]:
        raise ValueError(
            "The kd-tree was built on {0} samples with {1} features but X contains {2} samples with {3} features".format(
                kd_tree.n_points, kd_tree.n_dims, X.shape[0], X.shape[1]))
    centers = _initial_cluster_centers(X, n_clusters, init, kd_tree, random_state)
    clusters = _clusters_from_centers(centers)
    labels, n_iter = _kmeans(X, clusters, kd_tree, metric, algorithm, max_iter, debug)
    return clusters, labels, n_iter


class FilteringKMeans(Clustering, ClusterMixin, BaseEstimator):
    """
    The k-means clustering algorithm accelerated by a kd-tree.
    In each iteration, whole nodes of the kd-tree are assigned to a single cluster if this cluster is nearer to every
    point of the node's bounding box than all other clusters. Therefore, most samples do not have to be processed
    individually while the result is equal to the one of the classic Lloyd's algorithm.
    Empty clusters keep their last center.

    Parameters
    ----------
    n_clusters : int | np.ndarray
        The number of clusters. Can also be of type np.ndarray if initial cluster centers are specified (default: 8)
    init : str | Callable
        Strategy to create the initial centers if n_clusters is an int. 'kdtree' distributes the centers across the
        kd-tree proportionally to the number of samples in each subtree, 'random' chooses random samples.
        Can also be a callable (X, n_clusters, kd_tree, random_state) -> np.ndarray (default: 'kdtree')
    metric : Callable
        the metric used to compute the distances, i.e. a function (np.ndarray, np.ndarray) -> float.
        If None, the (not squared) Euclidean distance is used (default: None)
    algorithm : str
        'filtering' to use the kd-tree or 'lloyd' to process each sample individually in each iteration (default: 'filtering')
    max_iter : int
        maximum number of iterations (default: 300)
    random_state : np.random.RandomState | int
        use a fixed random state to get a repeatable solution. Only relevant if init is 'random' or a callable (default: None)
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
    n_iter_ : int
        The number of iterations
    n_features_in_ : int
        the number of features used for the fitting

    Examples
    ----------
    >>> from sklearn.datasets import make_blobs
    >>> X, L = make_blobs(1000, 2, centers=5, random_state=1)
    >>> kmeans = FilteringKMeans(5)
    >>> kmeans.fit(X)
    >>> kmeans.sort()

    References
    ----------
    Pelleg, Dan, and Andrew Moore. "Accelerating exact k-means algorithms with geometric reasoning."
    Proceedings of the fifth ACM SIGKDD international conference on Knowledge discovery and data mining. 1999.
    """

    def __init__(self, n_clusters: int | np.ndarray = 8, init: str | Callable = "kdtree", metric: Callable = None,
                 algorithm: str = "filtering", max_iter: int = 300, random_state: np.random.RandomState | int = None,
                 debug: bool = False):
        self.n_clusters = n_clusters
        self.init = init
        self.metric = metric
        self.algorithm = algorithm
        self.max_iter = max_iter
        self.random_state = random_state
        self.debug = debug

    def fit(self, X: np.ndarray, y: np.ndarray = None, kd_tree: KDTree = None) -> 'FilteringKMeans':
        """
        Initiate the actual clustering process on the input data set.
        The resulting cluster labels will be stored in the labels_ attribute.

        Parameters
        ----------
        X : np.ndarray
            the given data set
        y : np.ndarray
            the labels (can be ignored)
        kd_tree : KDTree
            a pre-computed kd-tree on X. If None, it will be created (default: None)

        Returns
        -------
        self : FilteringKMeans
            this instance of the FilteringKMeans algorithm
        """
        X, _, random_state = check_parameters(X=X, y=y, random_state=self.random_state, allow_size_1=True)
        metric = check_metric(self.metric)
        clusters, labels, n_iter = _execute_kmeans(X, self.n_clusters, kd_tree, metric, self.init, self.algorithm,
                                                   self.max_iter, random_state, self.debug)
        self._set_results(clusters, labels, metric, X.shape[1])
        self.n_iter_ = n_iter
        return self
