import numpy as np


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """
    The default metric of all clustering procedures in clustfit.
    Beware that the distance is not squared.

    Parameters
    ----------
    a : np.ndarray
        the first sample
    b : np.ndarray
        the second sample

    Returns
    -------
    distance : float
        The Euclidean distance between a and b
    """
    distance = np.sqrt(np.sum((a - b) ** 2))
    return float(distance)


class BoundingBox():
    """
    An axis-aligned bounding box in an n-dimensional space.
    A box without any samples is empty. In this case min and max are None.

    Parameters
    ----------
    min : np.ndarray
        the lower corner of the box (default: None)
    max : np.ndarray
        the upper corner of the box (default: None)

    Attributes
    ----------
    min : np.ndarray
        the lower corner of the box
    max : np.ndarray
        the upper corner of the box
    """

    def __init__(self, min: np.ndarray = None, max: np.ndarray = None):
        assert (min is None) == (max is None), "min and max must either both be None or both be specified"
        if min is not None:
            min = np.array(min, dtype=np.float64)
            max = np.array(max, dtype=np.float64)
            assert min.shape == max.shape, "min and max must have the same shape"
            assert np.all(min <= max), "min must not be larger than max"
        self.min = min
        self.max = max

    @classmethod
    def from_samples(cls, X: np.ndarray) -> 'BoundingBox':
        """
        Create the smallest bounding box enclosing all samples in X.

        Parameters
        ----------
        X : np.ndarray
            the given data set

        Returns
        -------
        bounding_box : BoundingBox
            The bounding box of X
        """
        X = np.asarray(X, dtype=np.float64)
        assert X.ndim == 2 and X.shape[0] > 0, "X must be a non-empty 2d array"
        return cls(np.min(X, axis=0), np.max(X, axis=0))

    def is_empty(self) -> bool:
        return self.min is None

    @property
    def n_dims(self) -> int:
        return 0 if self.is_empty() else self.min.shape[0]

    def add(self, sample: np.ndarray) -> None:
        """
        Extend the box so that it contains the given sample.

        Parameters
        ----------
        sample : np.ndarray
            the sample that should be added
        """
        sample = np.asarray(sample, dtype=np.float64)
        if self.is_empty():
            self.min = sample.copy()
            self.max = sample.copy()
        else:
            np.minimum(self.min, sample, out=self.min)
            np.maximum(self.max, sample, out=self.max)

    def union(self, other: 'BoundingBox') -> 'BoundingBox':
        """
        Get the smallest box containing this box and the other one.

        Parameters
        ----------
        other : BoundingBox
            the other box

        Returns
        -------
        bounding_box : BoundingBox
            The combined box
        """
        if self.is_empty():
            return BoundingBox(other.min, other.max)
        if other.is_empty():
            return BoundingBox(self.min, self.max)
        return BoundingBox(np.minimum(self.min, other.min), np.maximum(self.max, other.max))

    def contains(self, sample: np.ndarray) -> bool:
        if self.is_empty():
            return False
        return bool(np.all(self.min <= sample) and np.all(sample <= self.max))

    def extent(self) -> np.ndarray:
        """
        Get the side lengths of the box.

        Returns
        -------
        extent : np.ndarray
            max - min for each feature
        """
        assert not self.is_empty(), "An empty bounding box has no extent"
        return self.max - self.min

    def clip(self, sample: np.ndarray) -> np.ndarray:
        """
        Get the point of the box that is closest to the given sample (with respect to any Minkowski metric).
        Samples inside the box are returned unchanged.

        Parameters
        ----------
        sample : np.ndarray
            the sample to clip

        Returns
        -------
        clipped : np.ndarray
            A clipped copy of the sample
        """
        assert not self.is_empty(), "Can not clip a sample to an empty bounding box"
        return np.minimum(np.maximum(sample, self.min), self.max)

    def __repr__(self) -> str:
        if self.is_empty():
            return "BoundingBox(empty)"
        return "BoundingBox(min={0}, max={1})".format(self.min, self.max)
