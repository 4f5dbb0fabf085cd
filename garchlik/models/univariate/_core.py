import numpy as np
from numba import jit, float64, int64


"""
Numba-compiled recursions for the univariate EGARCH likelihood.

The log-variance recursion is strictly sequential, so it runs as an explicit
per-period loop compiled to machine code. Kernels in this module cannot raise
the package's typed exceptions from nopython mode; instead they return the
index of the first degenerate period (or -1) and leave reporting to the
Python wrapper in ``garchlik.models.univariate.egarch``.
"""


LOG_2PI = np.log(2.0 * np.pi)


@jit(int64(float64[:], float64, float64, float64, float64, float64, float64[:]),
     nopython=True, cache=True)
def egarch_log_variance_recursion(residuals, omega, alpha, beta, gamma,
                                  min_lagged_std, log_sigma2):
    """Fill conditional log-variances for the EGARCH(1,1) recursion.

    For t >= 1:
    ln σ²_t = ω + α·|u_{t-1}|/σ_{t-1} + β·ln σ²_{t-1} + γ·u_{t-1}/σ_{t-1}

    Args:
        residuals: Mean-equation residuals u
        omega: Intercept of the log-variance equation
        alpha: Coefficient on the absolute standardized shock
        beta: Persistence coefficient
        gamma: Coefficient on the signed standardized shock
        min_lagged_std: Lagged standard deviations at or below this value
            stop the recursion
        log_sigma2: Output array; element 0 must hold the initial log-variance

    Returns:
        int: Index of the first period whose lagged standard deviation is
        degenerate (not finite, or not above ``min_lagged_std``), -1 if the
        recursion completed
    """
    T = len(residuals)

    for t in range(1, T):
        sigma_prev = np.sqrt(np.exp(log_sigma2[t-1]))
        if not (sigma_prev > min_lagged_std) or not np.isfinite(sigma_prev):
            return t

        log_sigma2[t] = (omega
                         + alpha * np.abs(residuals[t-1]) / sigma_prev
                         + beta * log_sigma2[t-1]
                         + gamma * residuals[t-1] / sigma_prev)

    return -1


@jit(float64[:](float64[:], float64[:]), nopython=True, cache=True)
def gaussian_loglikelihood(residuals, sigma2):
    """Per-period Gaussian log-density with mean zero and variance sigma2.

    The first period is set to zero: its variance is the sample variance used
    to start the recursion, not a model-implied value.

    Args:
        residuals: Residuals u
        sigma2: Conditional variances

    Returns:
        np.ndarray: Log-likelihood contributions
    """
    T = len(residuals)
    loglik = np.zeros(T)

    for t in range(1, T):
        loglik[t] = (-0.5 * LOG_2PI
                     - 0.5 * np.log(sigma2[t])
                     - 0.5 * residuals[t] ** 2 / sigma2[t])

    return loglik
