import numpy as np
from collections.abc import Callable
from clustfit.utils.geometry import BoundingBox

"""
Minimum distance a center must move within one iteration to be considered as changed
"""
_CONVERGENCE_THRESHOLD = 1e-6


class ClusterUpdate():
    """
    Accumulates the weighted samples that are assigned to a cluster during a single k-means iteration.

    Parameters
    ----------
    n_dims : int
        Number of features

    Attributes
    ----------
    weighted_sum : np.ndarray
        The sum of all added samples multiplied by their weights
    normalization_factor : float
        The sum of all weights
    """

    def __init__(self, n_dims: int):
        self.weighted_sum = np.zeros(n_dims)
        self.normalization_factor = 0.

    def add(self, sample: np.ndarray, weight: float = 1.) -> None:
        assert weight >= 0, "weight must not be negative"
        self.weighted_sum += sample * weight
        self.normalization_factor += weight

    def is_empty(self) -> bool:
        return self.normalization_factor == 0

    def mean(self) -> np.ndarray:
        assert not self.is_empty(), "The mean of an empty update is undefined"
        return self.weighted_sum * (1. / self.normalization_factor)


class Cluster():
    """
    A single cluster of a clustering result.
    During the iterations of k-means only the center of the cluster is relevant. It is changed by adding weighted
    samples using update() and committing them with apply_updates().
    After the algorithm converged, the final members are added via add_sample() and the sum of squared distances to
    the center is stored in sum_of_norms.

    Parameters
    ----------
    center : np.ndarray
        the initial center of the cluster

    Attributes
    ----------
    center : np.ndarray
        The current center
    samples : list
        The samples that belong to this cluster. Empty until the clustering algorithm finished
    bounds : BoundingBox
        The bounding box of the samples
    sum_of_norms : float
        Sum of squared distances (in terms of the used metric) between the samples and the center
    """

    def __init__(self, center: np.ndarray):
        self.center = np.array(center, dtype=np.float64)
        self.samples = []
        self.bounds = BoundingBox()
        self.sum_of_norms = 0.
        self._pending_update = ClusterUpdate(self.center.shape[0])

    @property
    def n_samples(self) -> int:
        return len(self.samples)

    @property
    def normalization_factor(self) -> float:
        return self._pending_update.normalization_factor

    def update(self, sample: np.ndarray, weight: float = 1.) -> None:
        """
        Add a weighted sample to the update of the current iteration. The center itself stays unchanged until
        apply_updates() is called.

        Parameters
        ----------
        sample : np.ndarray
            the sample. Can also be the center of mass of multiple samples
        weight : float
            the weight of the sample, e.g. the number of samples represented by it (default: 1.)
        """
        self._pending_update.add(sample, weight)

    def apply_updates(self, metric: Callable) -> bool:
        """
        Move the center to the weighted mean of all samples added since the last call and reset the update.
        If no samples were added, the center stays where it is.

        Parameters
        ----------
        metric : Callable
            the metric used to measure the movement of the center

        Returns
        -------
        moved : bool
            True if the center moved by more than 1e-6
        """
        if self._pending_update.is_empty():
            return False
        new_center = self._pending_update.mean()
        moved = metric(self.center, new_center) > _CONVERGENCE_THRESHOLD
        self.center = new_center
        self._pending_update = ClusterUpdate(self.center.shape[0])
        return moved

    def add_sample(self, sample: np.ndarray) -> None:
        self.bounds.add(sample)
        self.samples.append(sample)

    def compute_sum_of_norms(self, metric: Callable) -> None:
        self.sum_of_norms = 0.
        for sample in self.samples:
            distance = metric(sample, self.center)
            self.sum_of_norms += distance * distance

    def __repr__(self) -> str:
        return "Cluster(center={0}, n_samples={1}, sum_of_norms={2})".format(self.center, self.n_samples,
                                                                              self.sum_of_norms)
