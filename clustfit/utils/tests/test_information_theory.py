from clustfit.utils._information_theory import bic_costs, spherical_gaussian_loglikelihood, _MIN_VARIANCE
import numpy as np
from scipy.stats import multivariate_normal


def test_bic_costs():
    assert bic_costs(2) == 0.5 * np.log(2)
    assert np.isclose(bic_costs(100), 2.302585, atol=1e-6)
    assert np.isclose(bic_costs(1024, True), 5)
    assert bic_costs(1000, True) > bic_costs(1000, False)


def test_spherical_gaussian_loglikelihood():
    rs = np.random.RandomState(1)
    X = rs.normal(0, 2, (50, 3))
    center = np.mean(X, axis=0)
    sum_of_norms = np.sum((X - center) ** 2)
    variance = sum_of_norms / (X.shape[0] - 1)
    # Single cluster: mixing weight is 1, so the result equals the plain Gaussian log-likelihood minus the
    # correction of the maximum likelihood estimate
    loglikelihood = spherical_gaussian_loglikelihood(X.shape[0], X.shape[0], X.shape[1], sum_of_norms, variance)
    expected = np.sum(multivariate_normal.logpdf(X, center, np.eye(X.shape[1]) * variance)) + np.log(
        2 * np.pi) * X.shape[0] * (X.shape[1] - 1) / 2
    assert np.isclose(loglikelihood, expected)
    # Smaller mixing weight lowers the log-likelihood
    loglikelihood_weighted = spherical_gaussian_loglikelihood(X.shape[0], 2 * X.shape[0], X.shape[1], sum_of_norms,
                                                              variance)
    assert np.isclose(loglikelihood - loglikelihood_weighted, X.shape[0] * np.log(2))


def test_spherical_gaussian_loglikelihood_with_zero_variance():
    loglikelihood = spherical_gaussian_loglikelihood(5, 10, 2, 0., 0.)
    assert np.isfinite(loglikelihood)
    assert loglikelihood == spherical_gaussian_loglikelihood(5, 10, 2, 0., _MIN_VARIANCE)
