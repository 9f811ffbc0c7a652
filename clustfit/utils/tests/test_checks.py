from clustfit.utils.checks import check_parameters, check_metric
from clustfit.utils.geometry import euclidean_distance
import numpy as np
import pytest


def test_check_parameters():
    X = [[1, 2], [3, 4], [5, 6]]
    X_checked, y_checked, random_state = check_parameters(X, y=[0, 1, 1], random_state=1)
    assert X_checked.dtype == np.float64
    assert X_checked.shape == (3, 2)
    assert y_checked.shape == (3,)
    assert isinstance(random_state, np.random.RandomState)
    with pytest.raises(ValueError):
        check_parameters(X, y=[0, 1])
    with pytest.raises(ValueError):
        check_parameters(np.zeros((0, 2)))
    with pytest.raises(ValueError):
        check_parameters([[1, 2]])
    X_checked, _, _ = check_parameters([[1, 2]], allow_size_1=True)
    assert X_checked.shape == (1, 2)


def test_check_metric():
    assert check_metric(None) is euclidean_distance
    manhattan = lambda a, b: float(np.sum(np.abs(a - b)))
    assert check_metric(manhattan) is manhattan
    with pytest.raises(ValueError):
        check_metric("euclidean")
