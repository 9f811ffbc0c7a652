import numpy as np
import pytest


@pytest.fixture
def three_blobs() -> (np.ndarray, np.ndarray):
    """
    A small data set with three well separated blobs of four samples each.

    Returns
    -------
    tuple : (np.ndarray, np.ndarray)
        the data numpy array,
        the ground truth labels
    """
    offsets = np.array([[-0.5, -0.4], [0.45, -0.5], [-0.4, 0.5], [0.5, 0.45]])
    blob_centers = np.array([[0, 0], [10, 0], [5, 10]])
    X = np.concatenate([blob_center + offsets for blob_center in blob_centers])
    L = np.repeat(np.arange(3), 4)
    return X, L
