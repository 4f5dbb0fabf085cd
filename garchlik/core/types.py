# garchlik/core/types.py

"""
Type aliases shared across garchlik.

The aliases document the role of an array at a function boundary; they do
not constrain shape or dtype at runtime. Shape checks live in
``garchlik.core.validation``.
"""

from typing import Callable, Literal, Sequence, Union

import numpy as np
import pandas as pd

# NumPy array aliases
Vector = np.ndarray  # 1D array
Matrix = np.ndarray  # 2D array
Tensor3D = np.ndarray  # 3D array

# Inputs accepted at the public boundary
ArrayLike = Union[np.ndarray, Sequence[float]]
TimeSeriesData = Union[np.ndarray, pd.Series]  # Single time series
TimeSeriesDataFrame = Union[np.ndarray, pd.DataFrame]  # Observation matrix or panel

# Roles
ParameterVector = np.ndarray  # Positional parameter layout
CorrelationMatrix = np.ndarray  # Symmetric with unit diagonal
CovarianceMatrix = np.ndarray  # Symmetric, positive definite
CovariancePath = np.ndarray  # (N, N, T) stack of covariance matrices
LogLikelihoodPath = np.ndarray  # Per-period log-likelihood contributions

# Objective signature consumed by an external optimizer
ObjectiveFunction = Callable[[np.ndarray], float]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
