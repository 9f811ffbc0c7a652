import numpy as np

"""
Often used constants
"""
_LOG_2_PI = np.log(2 * np.pi)
_MIN_VARIANCE = np.finfo(np.float64).tiny


def bic_costs(n_points: int, use_log2: bool = False) -> float:
    """
    Calculate the Bayesian Information Criterion (BIC) costs for a single parameter.
    Is equal to: 1/2 * log(n_points)

    Parameters
    ----------
    n_points : int
        Number of samples
    use_log2 : bool
        Defines whether log2 should be used instead of ln (default: False)

    Returns
    -------
    costs : float
        The BIC costs
    """
    assert n_points > 1, "The number of points must be larger than 1 to calculate the BIC costs. Your input:\n{0}".format(
        n_points)
    if use_log2:
        bic_costs = 0.5 * np.log2(n_points)
    else:
        bic_costs = 0.5 * np.log(n_points)
    return bic_costs


def spherical_gaussian_loglikelihood(n_points_cluster: int, n_points_total: int, n_dims: int, sum_of_norms: float,
                                     variance: float) -> float:
    """
    Calculate the log-likelihood of the samples of a single cluster within a mixture of spherical Gaussians sharing
    a common variance. The mixing weight of the cluster is estimated by n_points_cluster / n_points_total.
    For more information see: 'X-means: Extending k-means with efficient estimation of the number of clusters'

    Parameters
    ----------
    n_points_cluster : int
        Number of samples in the cluster
    n_points_total : int
        Number of samples in all clusters of the mixture
    n_dims : int
        Number of features
    sum_of_norms : float
        Sum of the squared distances between the samples of the cluster and its center
    variance : float
        The pooled variance across all clusters. Values below the smallest positive float will be raised to it

    Returns
    -------
    loglikelihood : float
        The log-likelihood of the cluster
    """
    variance = max(variance, _MIN_VARIANCE)
    loglikelihood = n_points_cluster * np.log(n_points_cluster) - n_points_cluster * np.log(
        n_points_total) - n_points_cluster / 2 * _LOG_2_PI - n_points_cluster * n_dims / 2 * np.log(
        variance) - sum_of_norms / (2 * variance)
    return loglikelihood
