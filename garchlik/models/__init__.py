# garchlik/models/__init__.py
"""
garchlik models.

Univariate (EGARCH) and multivariate (DCC) likelihood kernels, plus panel
helpers that connect them.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("garchlik.models")

from .univariate import (
    EGARCHLikelihoodParams,
    egarch_loglikelihood,
    egarch_negative_loglikelihood,
)

from .multivariate import (
    DCCParams,
    dcc_parameter_transform,
    dcc_parameter_inverse_transform,
    dcc_loglikelihood,
    dcc_negative_loglikelihood,
    standardize_residuals,
    compute_sample_correlation,
    stack_egarch_results,
    egarch_panel_loglikelihood,
    egarch_panel_loglikelihood_async,
)

__all__ = [
    'EGARCHLikelihoodParams',
    'egarch_loglikelihood',
    'egarch_negative_loglikelihood',
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
