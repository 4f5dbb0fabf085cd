"""
EGARCH(1,1) likelihood evaluation.

This module evaluates the Gaussian log-likelihood of a linear mean equation
with EGARCH(1,1) conditional variance:

    y_t = x_t'b + u_t
    ln σ²_t = ω + α·|u_{t-1}|/σ_{t-1} + β·ln σ²_{t-1} + γ·u_{t-1}/σ_{t-1}

Recursing the log of the variance keeps σ²_t = exp(ln σ²_t) positive for any
real parameter values, so no constraints are imposed on (ω, α, β, γ). The
recursion starts from the log of the whole-sample residual variance, and the
first period is excluded from the likelihood.

The functions here only evaluate the likelihood at given parameters; choosing
the parameters is left to an external optimizer, which typically minimizes
``egarch_negative_loglikelihood``.

References:
    Nelson, D. B. (1991). Conditional heteroskedasticity in asset returns: A new
    approach. Econometrica, 59(2), 347-370.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import pandas as pd

from garchlik.core.config import get_config
from garchlik.core.exceptions import (
    ParameterError, raise_dimension_error, raise_numeric_error
)
from garchlik.core.results import EGARCHLikelihoodResult
from garchlik.core.types import ParameterVector, TimeSeriesDataFrame
from garchlik.core.validation import (
    as_float_array, validate_finite, validate_matrix_shape, validate_vector
)
from garchlik.models.univariate._core import (
    egarch_log_variance_recursion, gaussian_loglikelihood
)

# Set up module-level logger
logger = logging.getLogger("garchlik.models.univariate.egarch")

# omega, alpha, beta, gamma follow the mean coefficients
N_VARIANCE_PARAMS = 4


@dataclass
class EGARCHLikelihoodParams:
    """Parameters of the EGARCH(1,1) likelihood.

    The positional layout used by optimizers is ``[b_1, ..., b_k, ω, α, β, γ]``.

    Attributes:
        mean: Mean-equation coefficients b (length k)
        omega: Intercept of the log-variance equation
        alpha: Coefficient on the absolute standardized shock
        beta: Persistence of the log-variance
        gamma: Coefficient on the signed standardized shock (leverage)
    """

    mean: np.ndarray
    omega: float
    alpha: float
    beta: float
    gamma: float

    def __post_init__(self) -> None:
        self.mean = validate_vector(np.atleast_1d(as_float_array(self.mean, "mean")), vector_name="mean")
        self.omega = float(self.omega)
        self.alpha = float(self.alpha)
        self.beta = float(self.beta)
        self.gamma = float(self.gamma)
        self.validate()

    def validate(self) -> None:
        """Check that every parameter is finite.

        Raises:
            ParameterError: If a parameter is NaN or infinite
        """
        if not np.all(np.isfinite(self.mean)):
            raise ParameterError(
                "EGARCH mean coefficients must be finite",
                param_name="mean", param_value=self.mean, constraint="finite"
            )
        for name in ("omega", "alpha", "beta", "gamma"):
            value = getattr(self, name)
            if not np.isfinite(value):
                raise ParameterError(
                    f"EGARCH parameter {name} must be finite",
                    param_name=name, param_value=value, constraint="finite"
                )

    @property
    def n_regressors(self) -> int:
        return len(self.mean)

    def to_array(self) -> np.ndarray:
        """Return the positional layout ``[b, ω, α, β, γ]``."""
        return np.concatenate([
            self.mean,
            np.array([self.omega, self.alpha, self.beta, self.gamma])
        ])

    @classmethod
    def from_array(cls, array: Any, n_regressors: int) -> 'EGARCHLikelihoodParams':
        """Create parameters from the positional layout.

        Args:
            array: Parameter vector of length ``n_regressors + 4``
            n_regressors: Number of mean-equation coefficients k

        Returns:
            EGARCHLikelihoodParams: Parameter object

        Raises:
            DimensionError: If the array length is not ``n_regressors + 4``
        """
        array = validate_vector(array, n_regressors + N_VARIANCE_PARAMS, "params")
        omega, alpha, beta, gamma = array[n_regressors:]
        return cls(mean=array[:n_regressors], omega=omega, alpha=alpha, beta=beta, gamma=gamma)


def _split_observations(data: TimeSeriesDataFrame):
    index = data.index if isinstance(data, pd.DataFrame) else None
    data = validate_matrix_shape(data, matrix_name="data", min_rows=2)
    validate_finite(data, "data")
    return data[:, 0], data[:, 1:], index


def egarch_loglikelihood(params: Union[ParameterVector, EGARCHLikelihoodParams],
                         data: TimeSeriesDataFrame) -> EGARCHLikelihoodResult:
    """Evaluate the EGARCH(1,1) Gaussian log-likelihood for one series.

    Args:
        params: Parameter vector ``[b_1, ..., b_k, ω, α, β, γ]`` or an
            EGARCHLikelihoodParams instance
        data: Observation matrix with shape (T, 1 + k); column 0 is the
            dependent series, the remaining columns are regressors. A
            DataFrame's index is kept on the result.

    Returns:
        EGARCHLikelihoodResult: Per-period log-likelihood (first element
        zero), conditional variances, fitted values and residuals

    Raises:
        DimensionError: If T < 2 or the parameter length does not match the
            number of regressors
        DataError: If the data contain NaN or infinite values
        NumericError: If the residual variance is zero, a lagged conditional
            standard deviation underflows, or the likelihood is not finite
    """
    y, x, index = _split_observations(data)
    T, k = x.shape

    if isinstance(params, EGARCHLikelihoodParams):
        if params.n_regressors != k:
            raise_dimension_error(
                f"Parameters have {params.n_regressors} mean coefficients, data have {k} regressors",
                array_name="params.mean",
                expected_shape=f"vector of length {k}",
                actual_shape=params.mean.shape
            )
    else:
        params = EGARCHLikelihoodParams.from_array(params, k)

    fitted = x @ params.mean
    residuals = np.ascontiguousarray(y - fitted)

    sample_variance = np.var(residuals, ddof=1)
    if not (np.isfinite(sample_variance) and sample_variance > 0):
        raise_numeric_error(
            "Residual sample variance is not positive; the recursion cannot be initialized",
            operation="EGARCH initialization",
            values=sample_variance,
            error_type="degenerate initial variance"
        )

    log_sigma2 = np.zeros(T)
    log_sigma2[0] = np.log(sample_variance)

    failed_at = egarch_log_variance_recursion(
        residuals, params.omega, params.alpha, params.beta, params.gamma,
        float(get_config("numerical", "min_lagged_std", 0.0)), log_sigma2
    )
    if failed_at >= 0:
        logger.warning(f"EGARCH lagged standard deviation degenerate at t={failed_at}")
        raise_numeric_error(
            f"Lagged conditional standard deviation is degenerate at t={failed_at}",
            operation="EGARCH variance recursion",
            values=failed_at,
            error_type="underflow",
            details=f"ln σ²[{failed_at - 1}] = {log_sigma2[failed_at - 1]}"
        )

    sigma2 = np.exp(log_sigma2)
    bad = ~np.isfinite(sigma2) | (sigma2 <= 0)
    if bad.any():
        raise_numeric_error(
            "Conditional variance is not a positive finite number",
            operation="EGARCH variance recursion",
            values=int(np.argmax(bad)),
            error_type="overflow" if np.isinf(sigma2).any() else "underflow"
        )

    loglik = gaussian_loglikelihood(residuals, sigma2)
    if not np.all(np.isfinite(loglik)):
        raise_numeric_error(
            "EGARCH log-likelihood is not finite",
            operation="EGARCH log-likelihood",
            values=int(np.argmax(~np.isfinite(loglik))),
            error_type="non-finite likelihood"
        )

    logger.debug(f"EGARCH likelihood evaluated: T={T}, k={k}, LL={loglik.sum():.6f}")

    return EGARCHLikelihoodResult(
        model_name="EGARCH(1,1)",
        loglikelihood=loglik,
        conditional_variances=sigma2,
        fitted=fitted,
        residuals=residuals,
        index=index,
        metadata={"n_regressors": k},
    )


def egarch_negative_loglikelihood(params: ParameterVector, data: TimeSeriesDataFrame) -> float:
    """Negative total log-likelihood, the scalar an optimizer minimizes.

    Raises:
        The same exceptions as ``egarch_loglikelihood``
    """
    return -egarch_loglikelihood(params, data).total_loglikelihood
