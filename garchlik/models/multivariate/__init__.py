"""
Multivariate DCC likelihood and panel helpers.
"""

from .dcc import (
    DCCParams,
    dcc_parameter_transform,
    dcc_parameter_inverse_transform,
    dcc_loglikelihood,
    dcc_negative_loglikelihood,
)
from .utils import (
    standardize_residuals,
    compute_sample_correlation,
    stack_egarch_results,
    egarch_panel_loglikelihood,
    egarch_panel_loglikelihood_async,
)

__all__ = [
    'DCCParams',
    'dcc_parameter_transform',
    'dcc_parameter_inverse_transform',
    'dcc_loglikelihood',
    'dcc_negative_loglikelihood',
    'standardize_residuals',
    'compute_sample_correlation',
    'stack_egarch_results',
    'egarch_panel_loglikelihood',
    'egarch_panel_loglikelihood_async',
]
