'''
Dynamic Conditional Correlation (DCC) likelihood.

This module evaluates the Gaussian log-likelihood of the DCC(1,1) correlation
layer of Engle (2002), given standardized residuals and conditional variances
already produced by univariate models (typically EGARCH, see
``garchlik.models.univariate.egarch``).

The two correlation weights are passed unconstrained. They are mapped onto the
open simplex {alpha > 0, beta > 0, alpha + beta < 1} with a softmax against a
fixed zero, so an optimizer can search over all of R^2 without explicit
constraints. The Q_t/R_t/Sigma_t recursion runs in a Numba kernel; the
likelihood of each period is evaluated from a Cholesky factorization of
Sigma_t.

References:
    Engle, R. (2002). Dynamic conditional correlation: A simple class of multivariate
    generalized autoregressive conditional heteroskedasticity models. Journal of
    Business & Economic Statistics, 20(3), 339-350.
'''

import logging
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from scipy import linalg, special

from garchlik.core.config import get_config
from garchlik.core.exceptions import (
    NumericError, ParameterError, raise_dimension_error, raise_numeric_error,
    raise_parameter_error, warn_numeric
)
from garchlik.core.results import DCCLikelihoodResult
from garchlik.core.types import CorrelationMatrix, Matrix, ParameterVector
from garchlik.core.validation import (
    validate_finite, validate_matrix_shape, validate_square_matrix,
    validate_strictly_positive, validate_symmetric, validate_vector
)
from garchlik.models.multivariate._numba_core import dcc_covariance_recursion

# Set up module-level logger
logger = logging.getLogger("garchlik.models.multivariate.dcc")

LOG_2PI = np.log(2.0 * np.pi)


def dcc_parameter_transform(params: ParameterVector) -> Tuple[float, float]:
    """Map unconstrained (a, b) to DCC weights (alpha, beta).

    alpha = e^a / (1 + e^a + e^b), beta = e^b / (1 + e^a + e^b)

    Evaluated as a softmax over (0, a, b), which stays finite for large
    inputs. A NumericWarning is issued when alpha, beta or 1 - alpha - beta
    falls below the ``numerical.dcc_boundary_tol`` setting.

    Args:
        params: Unconstrained pair (a, b)

    Returns:
        Tuple[float, float]: (alpha, beta), both in (0, 1) with sum below 1

    Raises:
        DimensionError: If params is not a vector of length 2
    """
    params = validate_vector(params, 2, "params")
    weights = special.softmax(np.concatenate(([0.0], params)))
    remainder, alpha, beta = (float(w) for w in weights)

    tol = float(get_config("numerical", "dcc_boundary_tol", 1e-8))
    if min(remainder, alpha, beta) < tol:
        warn_numeric(
            "DCC weights are close to the boundary of the admissible region",
            operation="DCC parameter transform",
            issue="near boundary",
            value={"alpha": alpha, "beta": beta, "1 - alpha - beta": remainder}
        )

    return alpha, beta


def dcc_parameter_inverse_transform(alpha: float, beta: float) -> np.ndarray:
    """Map DCC weights back to the unconstrained pair (a, b).

    a = log(alpha / (1 - alpha - beta)), b = log(beta / (1 - alpha - beta))

    Raises:
        ParameterError: If alpha <= 0, beta <= 0 or alpha + beta >= 1
    """
    if not (alpha > 0 and beta > 0 and alpha + beta < 1):
        raise_parameter_error(
            f"DCC weights must satisfy alpha > 0, beta > 0, alpha + beta < 1, "
            f"got alpha={alpha}, beta={beta}",
            param_name="alpha, beta",
            param_value=(alpha, beta),
            constraint="alpha > 0, beta > 0, alpha + beta < 1"
        )
    remainder = 1.0 - alpha - beta
    return np.array([np.log(alpha / remainder), np.log(beta / remainder)])


@dataclass
class DCCParams:
    """Constrained DCC(1,1) weights.

    Attributes:
        alpha: Weight on the lagged outer product of standardized residuals
        beta: Weight on the lagged pseudo-correlation state
    """

    alpha: float
    beta: float

    def __post_init__(self) -> None:
        self.alpha = float(self.alpha)
        self.beta = float(self.beta)
        self.validate()

    def validate(self) -> None:
        """Validate DCC parameter constraints.

        Raises:
            ParameterError: If alpha or beta is negative or alpha + beta >= 1
        """
        for name, value in (("alpha", self.alpha), ("beta", self.beta)):
            if not (np.isfinite(value) and value >= 0):
                raise ParameterError(
                    f"DCC parameter {name} must be non-negative, got {value}",
                    param_name=name, param_value=value, constraint="non-negative"
                )

        if self.alpha + self.beta >= 1:
            raise ParameterError(
                f"DCC stationarity constraint violated: alpha + beta = {self.alpha + self.beta} >= 1",
                param_name="alpha + beta",
                param_value=self.alpha + self.beta,
                constraint="< 1"
            )

    def to_array(self) -> np.ndarray:
        return np.array([self.alpha, self.beta])

    @classmethod
    def from_array(cls, array: Any) -> 'DCCParams':
        """Create parameters from ``[alpha, beta]``.

        Raises:
            DimensionError: If the array length is not 2
        """
        alpha, beta = validate_vector(array, 2, "params")
        return cls(alpha=alpha, beta=beta)

    def transform(self) -> np.ndarray:
        """Return the unconstrained pair (a, b) for an optimizer.

        Valid parameters may sit on the boundary (alpha = 0 or beta = 0),
        which has no finite image in unconstrained space.

        Raises:
            ParameterError: If alpha or beta is zero
        """
        for name, value in (("alpha", self.alpha), ("beta", self.beta)):
            if value == 0:
                raise ParameterError(
                    f"DCC parameter {name} is zero; boundary weights have no "
                    f"unconstrained representation",
                    param_name=name, param_value=value, constraint="> 0 for transform"
                )
        return dcc_parameter_inverse_transform(self.alpha, self.beta)

    @classmethod
    def inverse_transform(cls, array: ParameterVector) -> 'DCCParams':
        """Create parameters from the unconstrained pair (a, b)."""
        alpha, beta = dcc_parameter_transform(array)
        return cls(alpha=alpha, beta=beta)


def _validate_dcc_inputs(std_residuals: Matrix,
                         variances: Matrix,
                         qbar: CorrelationMatrix) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    # Shapes first, so mismatches surface as DimensionError before any value check
    v = validate_matrix_shape(std_residuals, matrix_name="std_residuals", min_rows=2)
    T, n_assets = v.shape
    if n_assets == 0:
        raise_dimension_error(
            "std_residuals must have at least one column",
            array_name="std_residuals",
            expected_shape="(T, N) with N >= 1",
            actual_shape=v.shape
        )
    d = validate_matrix_shape(variances, T, n_assets, "variances")
    qbar = validate_square_matrix(qbar, "qbar")
    if qbar.shape[0] != n_assets:
        raise_dimension_error(
            f"qbar has shape {qbar.shape}, expected ({n_assets}, {n_assets})",
            array_name="qbar",
            expected_shape=(n_assets, n_assets),
            actual_shape=qbar.shape
        )

    validate_finite(v, "std_residuals")
    validate_finite(d, "variances")
    validate_strictly_positive(d, "variances")
    validate_finite(qbar, "qbar")
    validate_symmetric(qbar, "qbar", float(get_config("numerical", "symmetry_tol", 1e-10)))

    return (np.ascontiguousarray(v), np.ascontiguousarray(d),
            np.ascontiguousarray(qbar))


def dcc_loglikelihood(params: ParameterVector,
                      std_residuals: Matrix,
                      variances: Matrix,
                      qbar: CorrelationMatrix,
                      keep_covariances: bool = True) -> DCCLikelihoodResult:
    """Evaluate the DCC(1,1) Gaussian log-likelihood.

    For t >= 1 the contribution is

        LL_t = 0.5 * (-N log(2 pi) - log det Sigma_t - u_t' Sigma_t^{-1} u_t)

    with u_t = v_t .* sqrt(d_t). The first period only initializes the
    recursion: LL_0 = 0 and Sigma_0 is NaN.

    Args:
        params: Unconstrained pair (a, b), see ``dcc_parameter_transform``
        std_residuals: Standardized residuals v with shape (T, N)
        variances: Univariate conditional variances d with shape (T, N)
        qbar: Unconditional correlation target with shape (N, N)
        keep_covariances: Whether to return the (N, N, T) covariance path

    Returns:
        DCCLikelihoodResult: Per-period log-likelihood, the transformed
        weights and, optionally, the covariance path

    Raises:
        DimensionError: If params is not length 2, T < 2, or the shapes of
            the inputs disagree
        DataError: If an input contains non-finite values, a variance is not
            positive, or qbar is not symmetric
        NumericError: If Sigma_t is not positive definite at some period
    """
    params = validate_vector(params, 2, "params")
    v, d, qbar = _validate_dcc_inputs(std_residuals, variances, qbar)
    alpha, beta = dcc_parameter_transform(params)
    T, n_assets = v.shape

    logger.debug(f"DCC likelihood: T={T}, N={n_assets}, alpha={alpha:.6g}, beta={beta:.6g}")

    sigma = np.empty((n_assets, n_assets, T))
    failed_at = dcc_covariance_recursion(v, d, qbar, alpha, beta, sigma)
    if failed_at >= 0:
        logger.warning(f"DCC pseudo-correlation state degenerate at t={failed_at}")
        raise_numeric_error(
            f"Diagonal of the DCC pseudo-correlation state is not positive at t={failed_at}",
            operation="DCC correlation recursion",
            values=failed_at,
            error_type="non-positive pseudo-variance"
        )

    u = v * np.sqrt(d)
    loglik = np.zeros(T)
    for t in range(1, T):
        try:
            factor = linalg.cho_factor(sigma[:, :, t], lower=True)
        except (linalg.LinAlgError, ValueError) as e:
            logger.warning(f"DCC conditional covariance not positive definite at t={t}")
            raise NumericError(
                f"Conditional covariance matrix is not positive definite at t={t}",
                operation="DCC log-likelihood",
                values=t,
                error_type="not positive definite",
                details=str(e)
            ) from e

        log_det = 2.0 * np.sum(np.log(np.diag(factor[0])))
        quad_form = u[t] @ linalg.cho_solve(factor, u[t])
        loglik[t] = 0.5 * (-n_assets * LOG_2PI - log_det - quad_form)

    return DCCLikelihoodResult(
        model_name="DCC(1,1)",
        loglikelihood=loglik,
        alpha=alpha,
        beta=beta,
        covariances=sigma if keep_covariances else None,
        metadata={"n_assets": n_assets},
    )


def dcc_negative_loglikelihood(params: ParameterVector,
                               std_residuals: Matrix,
                               variances: Matrix,
                               qbar: CorrelationMatrix) -> float:
    """Negative total DCC log-likelihood, the scalar an optimizer minimizes."""
    result = dcc_loglikelihood(params, std_residuals, variances, qbar,
                               keep_covariances=False)
    return -result.total_loglikelihood
