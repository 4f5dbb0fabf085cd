# garchlik/__init__.py
"""
garchlik - likelihood kernels for EGARCH(1,1) and DCC volatility models.

The package evaluates the per-period Gaussian log-likelihood of

- a linear regression with EGARCH(1,1) conditional variance, one series at a
  time (``egarch_loglikelihood``), and
- the DCC(1,1) dynamic correlation layer built on top of N such series
  (``dcc_loglikelihood``).

Both kernels take the positional parameter vector an optimizer works with and
return the sequences needed for diagnostics alongside the likelihood. Model
estimation itself (choice of optimizer, starting values, standard errors) is
left to the caller.
"""

import logging

from .version import __version__, get_version_info

from .core import (
    GarchLikError,
    ParameterError,
    DimensionError,
    NumericError,
    DataError,
    ConfigurationError,
    GarchLikWarning,
    NumericWarning,
    get_config,
    set_config,
    reset_config,
    initialize_config,
    EGARCHLikelihoodResult,
    DCCLikelihoodResult,
)

from .models import (
    EGARCHLikelihoodParams,
    egarch_loglikelihood,
    egarch_negative_loglikelihood,
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

# Set up package-wide logger; handlers and level come from the logging section
logger = logging.getLogger("garchlik")

initialize_config()

__all__ = [
    '__version__',
    'get_version_info',

    # Errors and warnings
    'GarchLikError',
    'ParameterError',
    'DimensionError',
    'NumericError',
    'DataError',
    'ConfigurationError',
    'GarchLikWarning',
    'NumericWarning',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'initialize_config',

    # Results
    'EGARCHLikelihoodResult',
    'DCCLikelihoodResult',

    # Univariate
    'EGARCHLikelihoodParams',
    'egarch_loglikelihood',
    'egarch_negative_loglikelihood',

    # Multivariate
    'DCCParams',
    'dcc_parameter_transform',
    'dcc_parameter_inverse_transform',
    'dcc_loglikelihood',
    'dcc_negative_loglikelihood',

    # Panel helpers
    'standardize_residuals',
    'compute_sample_correlation',
    'stack_egarch_results',
    'egarch_panel_loglikelihood',
    'egarch_panel_loglikelihood_async',
]
