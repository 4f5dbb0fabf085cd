"""
Result containers for the likelihood kernels.

Each kernel returns a dataclass that holds the per-period sequences it
computed. The scalar objective an optimizer needs is available as
``total_loglikelihood``; the remaining fields are diagnostics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd


@dataclass
class LikelihoodResult:
    """Base class for likelihood evaluation results.

    Attributes:
        model_name: Name of the kernel that produced the result
        loglikelihood: Per-period log-likelihood contributions; element 0 is
            always zero because the first period only initializes the recursion
        metadata: Additional information about the evaluation
    """

    model_name: str
    loglikelihood: np.ndarray
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def nobs(self) -> int:
        """Number of periods, including the initialization period."""
        return len(self.loglikelihood)

    @property
    def total_loglikelihood(self) -> float:
        """Sum of the per-period contributions."""
        return float(np.sum(self.loglikelihood))

    def summary(self) -> str:
        """Return a short text summary of the evaluation."""
        header = f"Model: {self.model_name}\n"
        header += "=" * (len(header) - 1) + "\n"
        lines = [
            f"Observations: {self.nobs}",
            f"Log-likelihood: {self.total_loglikelihood:.6f}",
        ]
        lines.extend(f"{key}: {value}" for key, value in self.metadata.items())
        return header + "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.summary()


@dataclass
class EGARCHLikelihoodResult(LikelihoodResult):
    """Output of a single-series EGARCH(1,1) likelihood evaluation.

    Attributes:
        conditional_variances: sigma^2 for each period
        fitted: Fitted values of the mean equation
        residuals: Dependent series minus fitted values
        index: Index of the input DataFrame, if one was supplied
    """

    conditional_variances: np.ndarray = field(default_factory=lambda: np.empty(0))
    fitted: np.ndarray = field(default_factory=lambda: np.empty(0))
    residuals: np.ndarray = field(default_factory=lambda: np.empty(0))
    index: Optional[pd.Index] = None

    @property
    def log_conditional_variances(self) -> np.ndarray:
        return np.log(self.conditional_variances)

    @property
    def standardized_residuals(self) -> np.ndarray:
        """Residuals divided by their conditional standard deviation."""
        return self.residuals / np.sqrt(self.conditional_variances)

    def to_dataframe(self) -> pd.DataFrame:
        """Collect the per-period sequences in a DataFrame."""
        return pd.DataFrame(
            {
                "loglikelihood": self.loglikelihood,
                "conditional_variance": self.conditional_variances,
                "fitted": self.fitted,
                "residual": self.residuals,
                "standardized_residual": self.standardized_residuals,
            },
            index=self.index,
        )


@dataclass
class DCCLikelihoodResult(LikelihoodResult):
    """Output of a DCC likelihood evaluation.

    Attributes:
        alpha: Weight on the lagged outer product of standardized residuals
        beta: Weight on the lagged pseudo-correlation state
        covariances: Conditional covariance matrices with shape (N, N, T);
            the slice for the first period is NaN. None when the caller
            chose not to keep the path.
    """

    alpha: float = float("nan")
    beta: float = float("nan")
    covariances: Optional[np.ndarray] = None

    def correlations(self) -> Optional[np.ndarray]:
        """Rescale the covariance path back to conditional correlations.

        Returns:
            np.ndarray with shape (N, N, T), or None if the covariance path
            was not kept
        """
        if self.covariances is None:
            return None
        std = np.sqrt(np.diagonal(self.covariances, axis1=0, axis2=1))  # (T, N)
        scale = std[:, :, None] * std[:, None, :]  # (T, N, N)
        return self.covariances / np.transpose(scale, (1, 2, 0))
