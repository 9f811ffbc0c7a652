from sklearn.utils.estimator_checks import check_estimator
from sklearn.base import BaseEstimator
import numpy as np
from collections.abc import Callable
from sklearn.utils import check_array, check_random_state
from clustfit.utils.geometry import euclidean_distance


def check_clustfit_estimator(estimator_obj: BaseEstimator, checks_to_ignore: tuple | list = ("check_complex_data",)) -> None:
    """
    Run the check_estimator function from sklearn. The checks in checks_to_ignore are allowed to fail.
    For more information, check: https://github.com/scikit-learn/scikit-learn/blob/main/sklearn/utils/estimator_checks.py

    Parameters
    ----------
    estimator_obj : BaseEstimator
        Initialization of the tested BaseEstimator
    checks_to_ignore : tuple | list
        List containing the names of checks to ignore (default: ("check_complex_data",))
    """
    expected_failed_checks = {check_name: "ignored by clustfit" for check_name in checks_to_ignore}
    check_estimator(estimator_obj, expected_failed_checks=expected_failed_checks, on_fail="raise")


def check_parameters(X: np.ndarray, *, y: np.ndarray = None, random_state: np.random.RandomState | int = None,
                     allow_size_1: bool = False, estimator_obj: BaseEstimator = None) -> (
        np.ndarray, np.ndarray, np.random.RandomState):
    """
    Check if parameters for X, y and random_state are defined in accordance with the sklearn standard.
    An empty data set always raises a ValueError.

    Parameters
    ----------
    X : np.ndarray
        the given data set
    y : np.ndarray
        the labels (can usually be ignored) (default: None)
    random_state : np.random.RandomState | int
        the random state (default: None)
    allow_size_1 : bool
        allow a dataset with a single sample (default: False)
    estimator_obj : BaseEstimator
        a fitted estimator. If specified, the number of features in X is compared with its n_features_in_ (default: None)

    Returns
    -------
    tuple : (np.ndarray, np.ndarray, np.random.RandomState)
        the checked data set,
        the checked labels
        the checked random_state
    """
    X = check_array(X, accept_sparse=False, ensure_2d=True, dtype=np.float64)
    if y is not None:
        y = check_array(y, ensure_2d=False, dtype=None)
        if y.shape[0] != X.shape[0]:
            raise ValueError("X and y must contain the same number of samples. X: {0}, y: {1}".format(
                X.shape[0], y.shape[0]))
    if not allow_size_1 and X.shape[0] == 1:
        raise ValueError("Model cannot be fitted if n_samples = 1. X shape = {0}".format(X.shape))
    if estimator_obj is not None and hasattr(estimator_obj, "n_features_in_") and \
            estimator_obj.n_features_in_ != X.shape[1]:
        raise ValueError("X has {0} features, but {1} is expecting {2} features as input.".format(
            X.shape[1], type(estimator_obj).__name__, estimator_obj.n_features_in_))
    random_state = check_random_state(random_state)
    return X, y, random_state


def check_metric(metric) -> Callable:
    """
    Check the metric parameter of a clustering algorithm.
    None is replaced by the Euclidean distance.

    Parameters
    ----------
    metric : Callable
        the metric, i.e. a function (np.ndarray, np.ndarray) -> float. Can be None

    Returns
    -------
    metric : Callable
        The checked metric
    """
    if metric is None:
        return euclidean_distance
    if not callable(metric):
        raise ValueError("metric must be a callable taking two samples and returning a non-negative scalar. "
                         "Your input: {0}".format(metric))
    return metric
