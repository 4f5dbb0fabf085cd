"""
garchlik core module.

Exception hierarchy, configuration, type aliases, input validation and
result containers shared by the univariate and multivariate kernels.
"""

import logging

# Set up module-level logger
logger = logging.getLogger("garchlik.core")

from .exceptions import (
    GarchLikError,
    ParameterError,
    DimensionError,
    NumericError,
    DataError,
    ConfigurationError,
    GarchLikWarning,
    NumericWarning,
)

from .config import (
    ConfigManager,
    get_config,
    set_config,
    reset_config,
    get_config_manager,
    initialize_config,
)

from .results import (
    LikelihoodResult,
    EGARCHLikelihoodResult,
    DCCLikelihoodResult,
)

from .validation import (
    as_float_array,
    validate_vector,
    validate_matrix_shape,
    validate_square_matrix,
    validate_finite,
    validate_strictly_positive,
    validate_symmetric,
)

__all__ = [
    # Exceptions
    'GarchLikError',
    'ParameterError',
    'DimensionError',
    'NumericError',
    'DataError',
    'ConfigurationError',
    'GarchLikWarning',
    'NumericWarning',

    # Configuration
    'ConfigManager',
    'get_config',
    'set_config',
    'reset_config',
    'get_config_manager',
    'initialize_config',

    # Results
    'LikelihoodResult',
    'EGARCHLikelihoodResult',
    'DCCLikelihoodResult',

    # Validation
    'as_float_array',
    'validate_vector',
    'validate_matrix_shape',
    'validate_square_matrix',
    'validate_finite',
    'validate_strictly_positive',
    'validate_symmetric',
]
