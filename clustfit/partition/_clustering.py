import numpy as np
from collections.abc import Callable
from sklearn.utils.validation import check_is_fitted
from clustfit.partition._cluster import Cluster
from clustfit.utils.checks import check_parameters, check_metric

"""
HELPERS also used by multiple algorithms
"""


def _get_nearest_cluster_id(clusters: list, sample: np.ndarray, metric: Callable) -> int:
    """
    Get the id of the cluster whose center is nearest to the given sample by checking all clusters.
    If multiple clusters have the same distance, the first one is returned.

    Parameters
    ----------
    clusters : list
        list containing the clusters
    sample : np.ndarray
        the sample
    metric : Callable
        the metric used to compute the distances

    Returns
    -------
    nearest_cluster_id : int
        The id of the nearest cluster
    """
    if len(clusters) == 0:
        raise ValueError("The nearest cluster can not be determined because there are no clusters")
    nearest_cluster_id = 0
    min_distance = np.inf
    for cluster_id, cluster in enumerate(clusters):
        distance = metric(cluster.center, sample)
        if distance < min_distance:
            min_distance = distance
            nearest_cluster_id = cluster_id
    return nearest_cluster_id


def _assign_samples(X: np.ndarray, clusters: list, metric: Callable) -> np.ndarray:
    """
    Add each sample to its nearest cluster and compute the resulting sum of norms of all clusters.
    This is the post-processing step after the centers have converged.

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
    labels : np.ndarray
        The id of the cluster each sample was added to
    """
    labels = np.zeros(X.shape[0], dtype=np.int32)
    for i, sample in enumerate(X):
        labels[i] = _get_nearest_cluster_id(clusters, sample, metric)
        clusters[labels[i]].add_sample(sample)
    for cluster in clusters:
        cluster.compute_sum_of_norms(metric)
    return labels


class Clustering():
    """
    Functionality shared by all algorithms producing a list of Cluster objects.
    Must be combined with sklearn's BaseEstimator.

    Attributes
    ----------
    clusters_ : list
        The final clusters
    n_clusters_ : int
        The final number of clusters
    labels_ : np.ndarray
        The final labels, i.e. the position of the cluster in clusters_ each sample belongs to
    cluster_centers_ : np.ndarray
        The final cluster centers
    """

    def _set_results(self, clusters: list, labels: np.ndarray, metric: Callable, n_features: int) -> None:
        self.clusters_ = clusters
        self.labels_ = labels
        self.n_clusters_ = len(clusters)
        self.cluster_centers_ = np.array([cluster.center for cluster in clusters])
        self.metric_ = metric
        self.n_features_in_ = n_features

    def sort(self) -> 'Clustering':
        """
        Sort the clusters by decreasing number of samples.
        The labels and cluster centers are adjusted accordingly.

        Returns
        -------
        self : Clustering
            this instance of the clustering algorithm
        """
        check_is_fitted(self, ["clusters_", "labels_"])
        order = sorted(range(self.n_clusters_), key=lambda c: self.clusters_[c].n_samples, reverse=True)
        new_ids = np.zeros(self.n_clusters_, dtype=np.int32)
        new_ids[order] = np.arange(self.n_clusters_)
        self.clusters_ = [self.clusters_[c] for c in order]
        self.labels_ = new_ids[self.labels_]
        self.cluster_centers_ = self.cluster_centers_[order]
        return self

    def get_nearest_cluster_id(self, sample: np.ndarray, metric: Callable = None) -> int:
        """
        Get the id of the final cluster that is nearest to the given sample.

        Parameters
        ----------
        sample : np.ndarray
            the sample
        metric : Callable
            the metric. If None, the metric used for fitting will be applied (default: None)

        Returns
        -------
        nearest_cluster_id : int
            The id of the nearest cluster
        """
        check_is_fitted(self, ["clusters_"])
        metric = self.metric_ if metric is None else check_metric(metric)
        return _get_nearest_cluster_id(self.clusters_, np.asarray(sample, dtype=np.float64), metric)

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict the labels of an input dataset by assigning each sample to its nearest final cluster.

        Parameters
        ----------
        X : np.ndarray
            the given data set

        Returns
        -------
        predicted_labels : np.ndarray
            the predicted labels of the input data set
        """
        check_is_fitted(self, ["clusters_", "n_features_in_"])
        X, _, _ = check_parameters(X=X, estimator_obj=self, allow_size_1=True)
        predicted_labels = np.array([_get_nearest_cluster_id(self.clusters_, sample, self.metric_) for sample in X],
                                    dtype=np.int32)
        return predicted_labels


def _clusters_from_centers(centers: np.ndarray) -> list:
    return [Cluster(center) for center in centers]
