"""
Univariate EGARCH(1,1) likelihood.
"""

from .egarch import (
    EGARCHLikelihoodParams,
    egarch_loglikelihood,
    egarch_negative_loglikelihood,
)

__all__ = [
    'EGARCHLikelihoodParams',
    'egarch_loglikelihood',
    'egarch_negative_loglikelihood',
]
