# garchlik/models/multivariate/utils.py

"""
Panel helpers connecting the univariate and multivariate likelihoods.

The DCC likelihood consumes the standardized residuals and conditional
variances of N independently evaluated univariate models. The functions here
evaluate those univariate likelihoods across a panel (optionally
concurrently, since the series are independent), stack their outputs into
(T, N) matrices and build the unconditional correlation target Qbar.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import numpy as np

from garchlik.core.config import get_config
from garchlik.core.exceptions import raise_dimension_error
from garchlik.core.results import EGARCHLikelihoodResult
from garchlik.core.types import CorrelationMatrix, Matrix, ParameterVector, TimeSeriesDataFrame
from garchlik.core.validation import (
    validate_finite, validate_matrix_shape, validate_strictly_positive
)
from garchlik.models.univariate.egarch import egarch_loglikelihood

# Set up module-level logger
logger = logging.getLogger("garchlik.models.multivariate.utils")


def standardize_residuals(residuals: Matrix, variances: Matrix) -> Matrix:
    """
    Standardize residuals by their conditional standard deviations.

    Args:
        residuals: Residuals u with shape (T, n_assets)
        variances: Conditional variances with shape (T, n_assets)

    Returns:
        Matrix: u / sqrt(variances) with shape (T, n_assets)

    Raises:
        DimensionError: If the shapes differ
        DataError: If a variance is not strictly positive
    """
    residuals = validate_matrix_shape(residuals, matrix_name="residuals")
    variances = validate_matrix_shape(variances, *residuals.shape, matrix_name="variances")
    validate_strictly_positive(variances, "variances")

    return residuals / np.sqrt(variances)


def compute_sample_correlation(std_residuals: Matrix) -> CorrelationMatrix:
    """
    Compute the sample correlation matrix used as the DCC target Qbar.

    Args:
        std_residuals: Standardized residuals with shape (T, n_assets)

    Returns:
        CorrelationMatrix: Sample correlation matrix with shape (n_assets, n_assets)

    Raises:
        DimensionError: If there are fewer than 2 observations
        DataError: If the data contain non-finite values
    """
    data = validate_matrix_shape(std_residuals, matrix_name="std_residuals", min_rows=2)
    validate_finite(data, "std_residuals")

    corr_matrix = np.atleast_2d(np.corrcoef(data, rowvar=False))

    # Symmetric and unit diagonal exactly, whatever the rounding in corrcoef
    corr_matrix = (corr_matrix + corr_matrix.T) / 2
    np.fill_diagonal(corr_matrix, 1.0)

    return corr_matrix


def stack_egarch_results(results: Sequence[EGARCHLikelihoodResult]) -> Tuple[Matrix, Matrix, Matrix]:
    """
    Column-stack univariate EGARCH outputs into panel matrices.

    Args:
        results: One EGARCHLikelihoodResult per series, all of the same length

    Returns:
        Tuple of (residuals, variances, std_residuals), each (T, n_assets)

    Raises:
        DimensionError: If results is empty or the series lengths differ
    """
    if len(results) == 0:
        raise_dimension_error(
            "At least one univariate result is required",
            array_name="results",
            expected_shape="non-empty sequence",
            actual_shape=(0,)
        )

    lengths = [result.nobs for result in results]
    if len(set(lengths)) != 1:
        raise_dimension_error(
            f"Univariate results have different lengths: {lengths}",
            array_name="results",
            expected_shape=f"all of length {lengths[0]}",
            actual_shape=tuple(lengths)
        )

    residuals = np.column_stack([result.residuals for result in results])
    variances = np.column_stack([result.conditional_variances for result in results])

    return residuals, variances, residuals / np.sqrt(variances)


def _check_panel_lengths(params_list: Sequence[ParameterVector],
                         data_list: Sequence[TimeSeriesDataFrame]) -> None:
    if len(params_list) != len(data_list):
        raise_dimension_error(
            f"Got {len(params_list)} parameter vectors for {len(data_list)} series",
            array_name="params_list",
            expected_shape=f"sequence of length {len(data_list)}",
            actual_shape=(len(params_list),)
        )


def egarch_panel_loglikelihood(params_list: Sequence[ParameterVector],
                               data_list: Sequence[TimeSeriesDataFrame],
                               max_workers: Optional[int] = None) -> List[EGARCHLikelihoodResult]:
    """
    Evaluate independent EGARCH likelihoods for each series of a panel.

    Args:
        params_list: One parameter vector per series
        data_list: One observation matrix per series
        max_workers: Number of threads; defaults to the
            ``performance.max_workers`` setting. Values of 1 or less evaluate
            the series sequentially.

    Returns:
        List[EGARCHLikelihoodResult]: Results in the order of the inputs

    Raises:
        DimensionError: If the two sequences differ in length
        The first exception raised by any single-series evaluation
    """
    _check_panel_lengths(params_list, data_list)

    if max_workers is None:
        max_workers = int(get_config("performance", "max_workers", 1))

    logger.debug(f"Evaluating {len(data_list)} EGARCH likelihoods with max_workers={max_workers}")

    if max_workers <= 1 or len(data_list) <= 1:
        return [egarch_loglikelihood(params, data)
                for params, data in zip(params_list, data_list)]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(egarch_loglikelihood, params_list, data_list))


async def egarch_panel_loglikelihood_async(params_list: Sequence[ParameterVector],
                                           data_list: Sequence[TimeSeriesDataFrame]
                                           ) -> List[EGARCHLikelihoodResult]:
    """
    Asynchronous version of ``egarch_panel_loglikelihood``.

    Each series is evaluated in the event loop's default executor so the
    loop stays responsive while the likelihoods run.
    """
    _check_panel_lengths(params_list, data_list)

    loop = asyncio.get_running_loop()
    tasks = [
        loop.run_in_executor(None, egarch_loglikelihood, params, data)
        for params, data in zip(params_list, data_list)
    ]
    return list(await asyncio.gather(*tasks))
