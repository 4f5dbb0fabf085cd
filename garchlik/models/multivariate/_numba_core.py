# garchlik/models/multivariate/_numba_core.py

"""
Numba-accelerated recursion for the DCC likelihood.

The pseudo-correlation state Q_t depends on Q_{t-1}, so the conditional
covariance path is built in a single explicit loop over time. The kernel fills
a pre-allocated (N, N, T) array in place and returns the index of the first
period whose pseudo-variances are not strictly positive (or -1), leaving the
typed error to the Python wrapper in ``garchlik.models.multivariate.dcc``.
"""

import numpy as np
from numba import jit, float64, int64


@jit(int64(float64[:, :], float64[:, :], float64[:, :], float64, float64, float64[:, :, :]),
     nopython=True, cache=True)
def dcc_covariance_recursion(std_residuals, variances, qbar, alpha, beta, sigma):
    """
    Fill the DCC conditional covariance matrices.

    For t >= 1:
    Q_t = (1 - alpha - beta)*Qbar + alpha*v_{t-1}*v_{t-1}' + beta*Q_{t-1}
    R_t = diag(Q_t)^(-1/2) * Q_t * diag(Q_t)^(-1/2)
    Sigma_t = R_t .* sqrt(d_t * d_t')

    with Q_0 = Qbar and d_t the univariate conditional variances at t.

    Args:
        std_residuals: Standardized residuals v (T x n_assets)
        variances: Univariate conditional variances d (T x n_assets)
        qbar: Unconditional correlation target (n_assets x n_assets)
        alpha: Weight on the lagged outer product of standardized residuals
        beta: Weight on the lagged pseudo-correlation state
        sigma: Output array (n_assets x n_assets x T); the slice for t = 0 is
            set to NaN

    Returns:
        int: First period with a non-positive or non-finite diagonal of Q_t,
        -1 if the recursion completed
    """
    T, n_assets = std_residuals.shape

    Q_t = np.empty((n_assets, n_assets), dtype=np.float64)
    for i in range(n_assets):
        for j in range(n_assets):
            Q_t[i, j] = qbar[i, j]
            sigma[i, j, 0] = np.nan

    scale = 1.0 - alpha - beta
    q_inv_sqrt = np.empty(n_assets, dtype=np.float64)
    d_sqrt = np.empty(n_assets, dtype=np.float64)

    for t in range(1, T):
        for i in range(n_assets):
            for j in range(n_assets):
                Q_t[i, j] = (scale * qbar[i, j]
                             + alpha * std_residuals[t-1, i] * std_residuals[t-1, j]
                             + beta * Q_t[i, j])

        for i in range(n_assets):
            if not (Q_t[i, i] > 0.0) or not np.isfinite(Q_t[i, i]):
                return t
            q_inv_sqrt[i] = 1.0 / np.sqrt(Q_t[i, i])
            d_sqrt[i] = np.sqrt(variances[t, i])

        for i in range(n_assets):
            for j in range(n_assets):
                sigma[i, j, t] = (Q_t[i, j] * q_inv_sqrt[i] * q_inv_sqrt[j]
                                  * d_sqrt[i] * d_sqrt[j])

    return -1
